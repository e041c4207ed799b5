"""Store and external service integrations."""

from app.services.location_store import LocationStore, get_location_store
from app.services.llm_client import LLMClient, LLMError
from app.services.chat_gateway import ChatGateway

__all__ = [
    "LocationStore",
    "get_location_store",
    "LLMClient",
    "LLMError",
    "ChatGateway",
]
