"""Console diagnostics for dispatched requests and the forwarding proxy."""

import functools
import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape

from ui.log_utils import describe_body, redact_headers, write_cli_log

console = Console(stderr=True)


def _best_effort(method: Callable[..., None]) -> Callable[..., None]:
    """Logging must never break the request path."""

    @functools.wraps(method)
    def wrapper(*args: Any, **kwargs: Any) -> None:
        try:
            method(*args, **kwargs)
        except Exception:
            pass

    return wrapper


class ConsoleLogger:
    """Print request diagnostics with rich and mirror them to the CLI log file."""

    def __init__(
        self,
        verbose: bool = False,
        *,
        output: Console | None = None,
        log_file: Path | None = None,
    ):
        self.verbose = verbose
        self._console = output or console
        self._log_file = log_file

    @_best_effort
    def log_request(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: Any = None,
    ) -> None:
        safe_headers = redact_headers(headers)
        if self.verbose:
            self._console.print(f"[cyan]→ {method}[/cyan] {escape(url)}", highlight=False)
            self._console.print(f"  [dim]headers:[/dim] {escape(json.dumps(safe_headers))}", highlight=False)
            shown = describe_body(body)
            if shown is not None:
                self._console.print(f"  [dim]body:[/dim] {escape(json.dumps(shown, default=str))}", highlight=False)
        write_cli_log("REQUEST", f"{method} {url}", log_file=self._log_file)

    @_best_effort
    def log_response(self, status: int, reason: str) -> None:
        if self.verbose:
            color = "green" if 200 <= status < 300 else "yellow"
            self._console.print(f"[{color}]← {status}[/{color}] {reason}", highlight=False)
        write_cli_log("RESPONSE", f"{status} {reason}", log_file=self._log_file)

    @_best_effort
    def log_success(self, data: Any) -> None:
        if self.verbose:
            self._console.print(f"  [dim]data:[/dim] {escape(json.dumps(data, default=str)[:200])}", highlight=False)

    @_best_effort
    def log_api_error(self, status: int, payload: Any) -> None:
        self._console.print(f"[yellow]API error {status}:[/yellow] {escape(str(payload))}", highlight=False)
        write_cli_log("API_ERROR", str(payload), log_file=self._log_file, status=status)

    @_best_effort
    def log_failure(self, error: BaseException) -> None:
        write_cli_log(
            "FAILURE",
            str(error) or type(error).__name__,
            log_file=self._log_file,
            kind=type(error).__name__,
        )

    @_best_effort
    def log_proxy(self, method: str, path: str, status: int) -> None:
        if self.verbose:
            self._console.print(f"[cyan]proxy[/cyan] {method} {escape(path)} → {status}", highlight=False)
        write_cli_log("PROXY", f"{method} {path}", log_file=self._log_file, status=status)

    @_best_effort
    def log_error(self, route: str, status: int, message: str) -> None:
        self._console.print(f"[red]{route} {status}:[/red] {escape(message[:200])}", highlight=False)
        write_cli_log("ERROR", message[:500], log_file=self._log_file, route=route, status=status)

