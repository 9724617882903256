"""Shared protocol definitions."""

from typing import Any, Protocol


class TokenStore(Protocol):
    """Source of the current bearer token (read once per request)."""

    def get_token(self) -> str | None: ...


class RequestLogger(Protocol):
    """Protocol for diagnostic request logging.

    Implementations should swallow their own errors; RequestDispatcher also
    ignores anything a logger raises.
    """

    def log_request(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: Any = None,
    ) -> None: ...
    def log_response(self, status: int, reason: str) -> None: ...
    def log_success(self, data: Any) -> None: ...
    def log_api_error(self, status: int, payload: Any) -> None: ...
    def log_failure(self, error: BaseException) -> None: ...


class ProxyLogger(Protocol):
    """Protocol for forwarding-proxy logging."""

    def log_proxy(self, method: str, path: str, status: int) -> None: ...
    def log_error(self, route: str, status: int, message: str) -> None: ...
