"""HTTP forwarding to the backend for the local proxy route."""

import json

import httpx
from fastapi import Response

from core.protocols import ProxyLogger

ROUTE_NAME = "backend"

# Hop-by-hop headers and body framing; Starlette recomputes the framing.
SKIPPED_RESPONSE_HEADERS = {
    "connection",
    "keep-alive",
    "proxy-authenticate",
    "proxy-authorization",
    "te",
    "trailers",
    "transfer-encoding",
    "upgrade",
    "content-length",
    "content-encoding",
    "content-type",
}


class UpstreamClient:
    """Forward proxied requests to the backend."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def forward(
        self,
        method: str,
        path: str,
        query: str,
        headers: dict[str, str],
        body: bytes,
        logger: ProxyLogger,
    ) -> Response:
        """Send the request upstream and relay status, headers and body."""
        # Built from components: a decoded "?" stays in the path, leading slashes collapse.
        url = httpx.URL(
            path="/" + path.lstrip("/"),
            query=query.encode() if query else None,
        )

        try:
            response = await self._client.request(
                method,
                url,
                headers=headers,
                content=body or None,
            )
        except httpx.TimeoutException:
            logger.log_error(ROUTE_NAME, 504, "Upstream timeout")
            return Response(
                content='{"error": "Upstream timeout"}',
                status_code=504,
                media_type="application/json",
            )
        except httpx.RequestError as e:
            logger.log_error(ROUTE_NAME, 502, str(e))
            return Response(
                content=json.dumps({"error": f"Upstream connection error: {e}"}),
                status_code=502,
                media_type="application/json",
            )

        if not response.is_success:
            logger.log_error(ROUTE_NAME, response.status_code, response.text)

        relayed = Response(
            content=response.content,
            status_code=response.status_code,
            media_type=response.headers.get("content-type", "application/json"),
        )
        for key, value in response.headers.multi_items():
            if key.lower() not in SKIPPED_RESPONSE_HEADERS:
                relayed.headers.append(key, value)
        return relayed
