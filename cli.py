"""CLI entry point for positions-client."""

import asyncio
import json
import sys
from datetime import datetime
from typing import Any

import httpx
from rich.console import Console
from rich.table import Table

from app import create_app
from auth import TOKENS_FILE, FileTokenStore, MemoryTokenStore, token_from_login
from core.config import CONFIG_FILE, Config, load_config
from core.environment import Environment
from core.exceptions import ApiError, AuthenticationRequired, ClientError
from services.dispatcher import RequestDispatcher, create_client
from services.positions import PositionsApi
from ui.console import ConsoleLogger
from ui.log_utils import write_cli_log

console = Console()

# command -> positional argument names
COMMANDS = {
    "login": ("username", "password"),
    "register": ("username", "password"),
    "logout": (),
    "positions": (),
    "create": ("code", "name"),
    "update": ("id", "code", "name"),
    "delete": ("id",),
}


class UsageError(Exception):
    """Wrong arguments for a CLI command."""


def main(argv: list[str] | None = None):
    """Main CLI entry point."""
    argv = sys.argv[1:] if argv is None else argv
    config = load_config()

    if argv:
        arg = argv[0]

        if arg == "--config":
            console.print(f"[bold]Config:[/bold] {CONFIG_FILE}")
            console.print(f"[bold]Tokens:[/bold] {TOKENS_FILE}")
            return

        if arg in ("--help", "-h"):
            _print_help()
            return

        if arg in COMMANDS:
            sys.exit(run_client(config, arg, argv[1:]))

        if arg != "serve":
            console.print(f"[red][ERROR][/red] Unknown command: {arg}")
            _print_help()
            sys.exit(2)

    serve(config)


def serve(config: Config):
    """Run the local forwarding proxy."""
    import uvicorn

    logger = ConsoleLogger(config.client.verbose)
    app = create_app(config, logger)
    uvicorn_config = uvicorn.Config(
        app,
        host=config.proxy.host,
        port=config.proxy.port,
        log_level="warning",
    )
    server = uvicorn.Server(uvicorn_config)

    console.print(f"[bold cyan]Positions proxy[/bold cyan] → {config.backend.base_url}")
    console.print(f"[dim]Listening on http://{config.proxy.host}:{config.proxy.port}{config.proxy.prefix}[/dim]")
    start_time = datetime.now()
    write_cli_log("STARTUP", "Proxy started", port=config.proxy.port)
    try:
        server.run()
    finally:
        duration = datetime.now() - start_time
        write_cli_log("SHUTDOWN", "Proxy stopped", duration=str(duration))


def run_client(config: Config, command: str, args: list[str]) -> int:
    """Run a backend command and return the process exit status."""
    tokens = FileTokenStore()
    try:
        environment = _environment(config)
        asyncio.run(_execute(config, environment, tokens, command, args))
    except UsageError as e:
        console.print(f"[red][ERROR][/red] {e}")
        return 2
    except AuthenticationRequired:
        tokens.clear_token()
        console.print("[yellow]Session expired or not logged in.[/yellow] Run: positions-client login USER PASS")
        return 1
    except ApiError as e:
        console.print(f"[red][ERROR][/red] {e.message}")
        return 1
    except ClientError as e:
        console.print(f"[red][ERROR][/red] {e}")
        return 1
    except httpx.RequestError as e:
        console.print(f"[red][ERROR][/red] Network failure: {e}")
        return 1
    return 0


async def _execute(
    config: Config,
    environment: Environment,
    tokens: FileTokenStore,
    command: str,
    args: list[str],
) -> None:
    logger = ConsoleLogger(config.client.verbose)
    async with create_client(config, environment) as client:
        api = PositionsApi(RequestDispatcher(config, environment, tokens, client, logger))
        await run_command(api, tokens, command, args)


async def run_command(
    api: PositionsApi,
    tokens: FileTokenStore | MemoryTokenStore,
    command: str,
    args: list[str],
) -> Any:
    """Dispatch a single CLI command against the API."""
    expected = COMMANDS[command]
    if len(args) != len(expected):
        usage = " ".join(name.upper() for name in expected)
        raise UsageError(f"Usage: positions-client {command} {usage}".rstrip())

    if command == "logout":
        tokens.clear_token()
        console.print("Logged out")
        return None

    if command in ("login", "register"):
        username, password = args
        operation = api.login if command == "login" else api.register
        result = await operation(username, password)
        token = token_from_login(result)
        if token:
            tokens.save_token(token)
            console.print(f"[green]Authenticated[/green] as {username}")
        else:
            _print_json(result)
        return result

    if command == "positions":
        result = await api.get_positions()
        _print_positions(result)
        return result

    if command == "create":
        code, name = args
        result = await api.create_position({"position_code": code, "position_name": name})
    elif command == "update":
        position_id, code, name = args
        result = await api.update_position(
            _position_id(position_id), {"position_code": code, "position_name": name}
        )
    else:
        result = await api.delete_position(_position_id(args[0]))

    _print_json(result)
    return result


def _environment(config: Config) -> Environment:
    if config.client.page_url:
        return Environment.from_url(config.client.page_url)
    return Environment.server()


def _position_id(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise UsageError(f"Position id must be an integer: {value!r}") from None


def _print_positions(positions: Any) -> None:
    if not isinstance(positions, list) or not positions or not isinstance(positions[0], dict):
        _print_json(positions)
        return
    table = Table(title="Positions")
    columns = list(positions[0].keys())
    for column in columns:
        table.add_column(column)
    for row in positions:
        table.add_row(*(str(row.get(column, "")) for column in columns))
    console.print(table)


def _print_json(data: Any) -> None:
    console.print_json(json.dumps(data, default=str))


def _print_help():
    """Print help message."""
    help_text = """
[bold cyan]Positions Client[/bold cyan]

Calls the positions backend directly or through the local proxy route.

[bold]Usage:[/bold]
    positions-client                       Start the local proxy (/api/proxy/*)
    positions-client serve                 Same as above
    positions-client login USER PASS       Log in and store the token
    positions-client register USER PASS    Create an account
    positions-client logout                Forget the stored token
    positions-client positions             List positions
    positions-client create CODE NAME      Create a position
    positions-client update ID CODE NAME   Update a position
    positions-client delete ID             Delete a position
    positions-client --config              Show config locations
    positions-client --help                Show this help
"""
    console.print(help_text)


if __name__ == "__main__":
    main()
