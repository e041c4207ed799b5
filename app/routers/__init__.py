"""API routers for the Athens cooling map."""

from app.routers import locations, chat, observability

__all__ = [
    "locations",
    "chat",
    "observability",
]
