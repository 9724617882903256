"""Request payload models for the backend API."""

from pydantic import BaseModel


class Credentials(BaseModel):
    username: str
    password: str


class PositionPayload(BaseModel):
    position_code: str
    position_name: str
