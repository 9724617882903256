"""FastAPI application factory for the local forwarding proxy."""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request

from api.handlers import handle_proxy
from core.config import Config
from core.protocols import ProxyLogger
from services.upstream import UpstreamClient

PROXY_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"]


def create_app(
    config: Config,
    logger: ProxyLogger,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        backend_client = httpx.AsyncClient(
            base_url=config.backend.base_url,
            timeout=config.backend.timeout,
            limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            transport=transport,
        )
        app.state.upstream_client = UpstreamClient(backend_client)
        try:
            yield
        finally:
            await backend_client.aclose()

    app = FastAPI(title="Positions Client Proxy", version="0.1.0", lifespan=lifespan)

    cors_headers = {
        "Access-Control-Allow-Origin": config.cors.allow_origin,
        "Access-Control-Allow-Methods": ", ".join(config.cors.allow_methods),
        "Access-Control-Allow-Headers": ", ".join(config.cors.allow_headers),
    }

    @app.middleware("http")
    async def add_cors_headers(request: Request, call_next):
        response = await call_next(request)
        if request.url.path.startswith(config.cors.path_prefix):
            response.headers.update(cors_headers)
        return response

    route = config.proxy.prefix.rstrip("/") + "/{path:path}"

    @app.api_route(route, methods=PROXY_METHODS)
    async def proxy_backend(request: Request, path: str):
        return await handle_proxy(request, path, logger)

    return app
