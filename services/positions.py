"""Convenience operations for the auth and positions endpoints."""

from collections.abc import Mapping
from typing import Any

from core.models import Credentials, PositionPayload
from core.request_types import RequestOptions
from services.dispatcher import RequestDispatcher


class PositionsApi:
    """Thin serialization wrappers over RequestDispatcher.request."""

    def __init__(self, dispatcher: RequestDispatcher) -> None:
        self._dispatcher = dispatcher

    async def login(self, username: str, password: str) -> Any:
        body = Credentials(username=username, password=password).model_dump_json()
        return await self._dispatcher.request("/auth/login", RequestOptions("POST", body=body))

    async def register(self, username: str, password: str) -> Any:
        body = Credentials(username=username, password=password).model_dump_json()
        return await self._dispatcher.request("/auth/register", RequestOptions("POST", body=body))

    async def get_positions(self) -> Any:
        return await self._dispatcher.request("/positions")

    async def create_position(self, data: PositionPayload | Mapping[str, Any]) -> Any:
        body = _position(data).model_dump_json()
        return await self._dispatcher.request("/positions", RequestOptions("POST", body=body))

    async def update_position(self, position_id: int, data: PositionPayload | Mapping[str, Any]) -> Any:
        body = _position(data).model_dump_json()
        return await self._dispatcher.request(
            f"/positions/{position_id}", RequestOptions("PUT", body=body)
        )

    async def delete_position(self, position_id: int) -> Any:
        return await self._dispatcher.request(
            f"/positions/{position_id}", RequestOptions("DELETE")
        )


def _position(data: PositionPayload | Mapping[str, Any]) -> PositionPayload:
    if isinstance(data, PositionPayload):
        return data
    return PositionPayload.model_validate(dict(data))
