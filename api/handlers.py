"""FastAPI route handlers."""

from fastapi import Request, Response

from core.headers import HeaderBuilder
from core.protocols import ProxyLogger

MAX_BODY_SIZE = 10 * 1024 * 1024  # 10MB

_headers = HeaderBuilder()


async def handle_proxy(request: Request, path: str, logger: ProxyLogger) -> Response:
    """Forward /api/proxy/{path} to the backend."""
    raw_body = await request.body()
    if len(raw_body) > MAX_BODY_SIZE:
        return Response(
            content='{"error": "Request body too large"}',
            status_code=413,
            media_type="application/json",
        )

    upstream = request.app.state.upstream_client
    response = await upstream.forward(
        request.method,
        path,
        request.url.query,
        _headers.build_forward_headers(request.headers),
        raw_body,
        logger,
    )
    logger.log_proxy(request.method, f"/{path}", response.status_code)
    return response
