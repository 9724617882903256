"""Configuration models and loading."""

import json
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

CONFIG_DIR = Path.home() / ".config" / "positions-client"
CONFIG_FILE = CONFIG_DIR / "config.json"


class BackendSettings(BaseModel):
    base_url: str = "https://nestjs-amparado-ace-1.onrender.com"
    timeout: float = 30.0


class ProxySettings(BaseModel):
    host: str = "127.0.0.1"
    port: int = 3000
    prefix: str = "/api/proxy/"


class EnvironmentSettings(BaseModel):
    """Which page locations count as development (proxy mode)."""

    loopback_hosts: list[str] = Field(default_factory=lambda: ["localhost", "127.0.0.1"])
    private_prefixes: list[str] = Field(default_factory=lambda: ["192.168.", "10.", "172."])
    dev_port: int | None = 3000


class CorsSettings(BaseModel):
    path_prefix: str = "/api/"
    allow_origin: str = "*"
    allow_methods: list[str] = Field(
        default_factory=lambda: ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    allow_headers: list[str] = Field(default_factory=lambda: ["Content-Type", "Authorization"])


class ClientSettings(BaseModel):
    # Page the CLI pretends to run on; None means server side (direct calls).
    page_url: str | None = None
    verbose: bool = False


class Config(BaseModel):
    backend: BackendSettings = Field(default_factory=BackendSettings)
    proxy: ProxySettings = Field(default_factory=ProxySettings)
    environment: EnvironmentSettings = Field(default_factory=EnvironmentSettings)
    cors: CorsSettings = Field(default_factory=CorsSettings)
    client: ClientSettings = Field(default_factory=ClientSettings)


def load_config(path: Path = CONFIG_FILE) -> Config:
    """Load configuration from JSON file, creating default if needed."""
    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        default = Config()
        path.write_text(default.model_dump_json(indent=2))
        return default

    try:
        data = json.loads(path.read_text())
        return Config.model_validate(data)
    except (json.JSONDecodeError, ValidationError):
        # Backup corrupted config and recreate default
        backup = path.with_suffix(".json.bak")
        path.rename(backup)
        default = Config()
        path.write_text(default.model_dump_json(indent=2))
        return default
