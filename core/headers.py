"""Header construction for backend requests."""

from collections.abc import Mapping


class HeaderBuilder:
    """Merge default, caller and auth headers."""

    def __init__(self, default_content_type: str = "application/json") -> None:
        self._content_type = default_content_type

    def build(self, headers: Mapping[str, str] | None, token: str | None) -> dict[str, str]:
        """Defaults, then caller headers, then Authorization from the token."""
        merged: dict[str, str] = {"Content-Type": self._content_type}
        for key, value in (headers or {}).items():
            if key.lower() == "authorization":
                continue
            if key.lower() == "content-type":
                merged.pop("Content-Type", None)
            merged[key] = str(value)
        if token:
            merged["Authorization"] = f"Bearer {token}"
        return merged

    def build_forward_headers(self, headers: Mapping[str, str]) -> dict[str, str]:
        """Pick the headers the forwarding proxy passes through to the backend."""
        upstream: dict[str, str] = {}
        for key, value in headers.items():
            if key.lower() in ("content-type", "authorization", "accept"):
                upstream[key] = str(value)
        return upstream
