"""Shared request data types."""

from dataclasses import dataclass, field

ALLOWED_METHODS = ("GET", "POST", "PUT", "DELETE", "OPTIONS")


@dataclass(frozen=True)
class RequestOptions:
    """Method, extra headers and serialized body for a single backend call."""

    method: str = "GET"
    headers: dict[str, str] = field(default_factory=dict)
    body: str | bytes | None = None

    def __post_init__(self) -> None:
        method = self.method.upper()
        if method not in ALLOWED_METHODS:
            raise ValueError(f"Unsupported HTTP method: {self.method}")
        object.__setattr__(self, "method", method)


@dataclass(frozen=True)
class PreparedRequest:
    """Fully resolved request, ready for the HTTP client."""

    method: str
    url: str
    headers: dict[str, str]
    body: str | bytes | None = None
