"""Bearer token storage for the positions client."""

import json
from pathlib import Path
from typing import Any

from rich.console import Console

from core.config import CONFIG_DIR

console = Console(stderr=True)
TOKENS_FILE = CONFIG_DIR / "tokens.json"


class MemoryTokenStore:
    """Token held in process memory."""

    def __init__(self, token: str | None = None):
        self._token = token

    def get_token(self) -> str | None:
        return self._token

    def save_token(self, token: str) -> None:
        self._token = token

    def clear_token(self) -> None:
        self._token = None


class FileTokenStore:
    """Token persisted as JSON next to the config file."""

    def __init__(self, path: Path = TOKENS_FILE):
        self.path = path

    def get_token(self) -> str | None:
        """Read the stored token; missing or unreadable files mean no token."""
        if not self.path.exists():
            return None
        try:
            tokens = json.loads(self.path.read_text())
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            console.print(f"[red]Failed to read tokens file:[/red] {e}")
            return None
        if not isinstance(tokens, dict):
            return None
        token = tokens.get("access_token")
        return token if isinstance(token, str) and token else None

    def save_token(self, token: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"access_token": token}, indent=2))
        self.path.chmod(0o600)

    def clear_token(self) -> None:
        self.path.unlink(missing_ok=True)


def token_from_login(response: Any) -> str | None:
    """Pull the bearer token out of a login response body."""
    if not isinstance(response, dict):
        return None
    for key in ("access_token", "token"):
        value = response.get(key)
        if isinstance(value, str) and value:
            return value
    return None
