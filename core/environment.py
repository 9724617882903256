"""Endpoint resolution - decides direct backend calls vs the local proxy."""

from dataclasses import dataclass
from urllib.parse import urlsplit

from core.config import EnvironmentSettings
from core.exceptions import ConfigurationError


@dataclass(frozen=True)
class Environment:
    """Snapshot of where the client is running.

    A missing hostname means there is no browser page (e.g. server-side rendering).
    """

    hostname: str | None = None
    port: int | None = None
    scheme: str = "http"

    @classmethod
    def server(cls) -> "Environment":
        return cls()

    @classmethod
    def from_url(cls, url: str) -> "Environment":
        """Build an environment from the URL of the page the client runs on."""
        parts = urlsplit(url)
        if not parts.scheme or not parts.hostname:
            raise ConfigurationError(f"Page URL must be absolute: {url!r}")
        try:
            port = parts.port
        except ValueError as e:
            raise ConfigurationError(f"Invalid port in page URL: {url!r}") from e
        return cls(hostname=parts.hostname, port=port, scheme=parts.scheme)

    @property
    def is_browser(self) -> bool:
        return bool(self.hostname)

    @property
    def origin(self) -> str:
        """scheme://host[:port] of the page, or empty outside a browser."""
        if not self.hostname:
            return ""
        if self.port is None:
            return f"{self.scheme}://{self.hostname}"
        return f"{self.scheme}://{self.hostname}:{self.port}"


class EndpointResolver:
    """Return the backend base URL, or an empty string for proxy mode."""

    def __init__(self, settings: EnvironmentSettings, backend_url: str):
        self.settings = settings
        self.backend_url = backend_url

    def resolve(self, environment: Environment) -> str:
        if environment.is_browser and self.is_development(environment):
            return ""
        return self.backend_url

    def is_development(self, environment: Environment) -> bool:
        """Loopback host, private-network host, or the dev server port."""
        hostname = (environment.hostname or "").lower()
        if hostname in (host.lower() for host in self.settings.loopback_hosts):
            return True
        if any(hostname.startswith(prefix) for prefix in self.settings.private_prefixes):
            return True
        return self.settings.dev_port is not None and environment.port == self.settings.dev_port
