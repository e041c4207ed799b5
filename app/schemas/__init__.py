"""Pydantic schemas for API validation."""

from app.schemas.location import (
    PlaceMetrics,
    PlaceRecord,
    LocationsResponse,
    LocationSearchResponse,
)
from app.schemas.chat import (
    ChatRequest,
    ChatReply,
    ChatResponse,
)

__all__ = [
    "PlaceMetrics",
    "PlaceRecord",
    "LocationsResponse",
    "LocationSearchResponse",
    "ChatRequest",
    "ChatReply",
    "ChatResponse",
]
