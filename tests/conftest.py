# tests/conftest.py
import json
from typing import Any

import httpx
import pytest

from auth import MemoryTokenStore
from core.config import Config
from core.environment import Environment
from services.dispatcher import RequestDispatcher
from services.positions import PositionsApi

BACKEND = "https://backend.example.com"


@pytest.fixture(scope="session")
def anyio_backend():
    # keep AnyIO on asyncio for the whole test session
    return "asyncio"


class RecordingLogger:
    """Collects every log call so tests can inspect them."""

    def __init__(self):
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    def log_request(self, method, url, headers, body=None):
        self.calls.append(("request", (method, url, dict(headers), body)))

    def log_response(self, status, reason):
        self.calls.append(("response", (status, reason)))

    def log_success(self, data):
        self.calls.append(("success", (data,)))

    def log_api_error(self, status, payload):
        self.calls.append(("api_error", (status, payload)))

    def log_failure(self, error):
        self.calls.append(("failure", (error,)))

    def log_proxy(self, method, path, status):
        self.calls.append(("proxy", (method, path, status)))

    def log_error(self, route, status, message):
        self.calls.append(("error", (route, status, message)))

    def kinds(self) -> list[str]:
        return [kind for kind, _ in self.calls]


class Backend:
    """Scripted backend behind httpx.MockTransport; records what it receives."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status = 200
        self.payload: Any = {"ok": True}
        self.raw: bytes | None = None
        self.headers: list[tuple[str, str]] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.raw is not None:
            return httpx.Response(self.status, content=self.raw, headers=self.headers)
        return httpx.Response(self.status, json=self.payload, headers=self.headers)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def config() -> Config:
    return Config.model_validate({"backend": {"base_url": BACKEND}})


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def tokens() -> MemoryTokenStore:
    return MemoryTokenStore()


@pytest.fixture
def backend() -> Backend:
    return Backend()


@pytest.fixture
def make_dispatcher(config, tokens, logger, backend):
    def _make(environment: Environment | None = None) -> RequestDispatcher:
        environment = environment or Environment.server()
        client = httpx.AsyncClient(
            base_url=environment.origin,
            transport=httpx.MockTransport(backend.handler),
        )
        return RequestDispatcher(config, environment, tokens, client, logger)

    return _make


@pytest.fixture
def api(make_dispatcher) -> PositionsApi:
    return PositionsApi(make_dispatcher())
