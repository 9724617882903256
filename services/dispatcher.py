"""Request dispatch to the positions backend."""

import json
from typing import Any

import httpx

from core.config import Config
from core.environment import EndpointResolver, Environment
from core.exceptions import ApiError, AuthenticationRequired, MalformedResponse
from core.headers import HeaderBuilder
from core.protocols import RequestLogger, TokenStore
from core.request_types import PreparedRequest, RequestOptions


def create_client(config: Config, environment: Environment) -> httpx.AsyncClient:
    """HTTP client for the dispatcher; proxy-mode URLs are relative to the page origin."""
    return httpx.AsyncClient(
        base_url=environment.origin,
        timeout=config.backend.timeout,
    )


class RequestDispatcher:
    """Build, send and classify backend requests."""

    def __init__(
        self,
        config: Config,
        environment: Environment,
        tokens: TokenStore,
        client: httpx.AsyncClient,
        logger: RequestLogger,
        resolver: EndpointResolver | None = None,
        header_builder: HeaderBuilder | None = None,
    ) -> None:
        self._environment = environment
        self._tokens = tokens
        self._client = client
        self._logger = logger
        self._proxy_prefix = config.proxy.prefix
        self._resolver = resolver or EndpointResolver(
            config.environment, config.backend.base_url
        )
        self._headers = header_builder or HeaderBuilder()

    def resolve_url(self, endpoint: str) -> str:
        """Absolute backend URL, or a path under the local proxy prefix."""
        base = self._resolver.resolve(self._environment)
        if base:
            return f"{base}{endpoint}"
        return f"{self._proxy_prefix}{endpoint.removeprefix('/')}"

    def prepare(self, endpoint: str, options: RequestOptions | None = None) -> PreparedRequest:
        options = options or RequestOptions()
        token = self._tokens.get_token()
        return PreparedRequest(
            method=options.method,
            url=self.resolve_url(endpoint),
            headers=self._headers.build(options.headers, token),
            body=options.body,
        )

    async def request(self, endpoint: str, options: RequestOptions | None = None) -> Any:
        """Send a request and return the decoded JSON body.

        Raises:
            AuthenticationRequired: on HTTP 401
            ApiError: on any other non-success status
            MalformedResponse: when a success body is not JSON
            httpx.RequestError: transport failures, unchanged
        """
        prepared = self.prepare(endpoint, options)
        self._log("request", prepared.method, prepared.url, prepared.headers, prepared.body)

        try:
            response = await self._client.request(
                prepared.method,
                prepared.url,
                headers=prepared.headers,
                content=prepared.body,
            )
            self._log("response", response.status_code, response.reason_phrase)
            data = self._classify(response)
        except Exception as e:
            self._log("failure", e)
            raise

        self._log("success", data)
        return data

    def _log(self, event: str, *args: Any) -> None:
        # A failing logger must never replace the request's own outcome.
        try:
            getattr(self._logger, f"log_{event}")(*args)
        except Exception:
            pass

    def _classify(self, response: httpx.Response) -> Any:
        if response.status_code == 401:
            raise AuthenticationRequired()

        if not response.is_success:
            payload = _try_json(response)
            self._log("api_error", response.status_code, payload)
            message = _error_message(payload)
            if not message:
                message = f"HTTP {response.status_code}: {response.reason_phrase}"
            raise ApiError(message, status_code=response.status_code)

        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedResponse(
                f"Invalid JSON in response: {e}", status_code=response.status_code
            ) from e


def _try_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None


def _error_message(payload: Any) -> str | None:
    """Extract the server "message" field; anything else counts as no message."""
    if not isinstance(payload, dict):
        return None
    message = payload.get("message")
    if isinstance(message, str) and message:
        return message
    if isinstance(message, list) and message and all(isinstance(m, str) for m in message):
        return ", ".join(message)
    return None
