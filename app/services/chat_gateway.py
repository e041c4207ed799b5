"""Chat gateway - turns a user message into a structured reply about Athens places."""

import json
import logging
from typing import Optional

from pydantic import ValidationError

from app.schemas.chat import ChatReply
from app.schemas.location import PlaceRecord
from app.services.llm_client import LLMClient
from app.services.location_store import LocationStore, get_location_store

logger = logging.getLogger(__name__)

# Fixed user-facing reply when the completion service cannot be reached
UPSTREAM_FAILURE_REPLY = "Sorry, I couldn't reach the AI server. Please try again later."

SYSTEM_PROMPT_TEMPLATE = """You are an assistant helping users explore Athens and report heat problems.

Known places with their current cooling priority index (0-100, higher = more urgent):
{place_lines}

You MUST ALWAYS respond ONLY with a JSON object with these fields:
- reply: a short, friendly natural-language answer.
- placeName: EXACTLY one of the place names above, or null when no listed place is clearly referenced.
- reportType: "cooling_problem" when the user reports heat, lack of shade, or a need for cooling at a place; otherwise "none".
- reportIntensity: "low", "medium" or "high" for a cooling_problem report (how severe the user describes it); null otherwise.

If the user mentions one of those places approximately (like "acropolis" or "syntagma"),
map it to the exact full name from the list. Use the priority index when the user asks
which places need cooling most. Do NOT include any extra fields."""

# Strict schema for the completion API's structured output
CHAT_RESPONSE_FORMAT = {
    "type": "json_schema",
    "json_schema": {
        "name": "ChatWithPlaceReport",
        "strict": True,
        "schema": {
            "type": "object",
            "properties": {
                "reply": {"type": "string"},
                "placeName": {"anyOf": [{"type": "string"}, {"type": "null"}]},
                "reportType": {"type": "string", "enum": ["cooling_problem", "none"]},
                "reportIntensity": {
                    "anyOf": [
                        {"type": "string", "enum": ["low", "medium", "high"]},
                        {"type": "null"},
                    ]
                },
            },
            "required": ["reply", "placeName", "reportType", "reportIntensity"],
            "additionalProperties": False,
        },
    },
}


def build_system_prompt(locations: list[PlaceRecord]) -> str:
    """System prompt listing the live place names and priority indices."""
    place_lines = "\n".join(
        f"- {loc.name} (priority index {loc.priority_index})" for loc in locations
    )
    return SYSTEM_PROMPT_TEMPLATE.format(place_lines=place_lines)


def _strip_fence(text: str) -> str:
    """Body of a ```json or ``` block, removing only the outer fences."""
    body = text[len("```json"):] if text.startswith("```json") else text[3:]
    body = body.strip()
    if body.endswith("```"):
        body = body[:-3]
    return body.strip()


def parse_reply(raw: str) -> ChatReply:
    """
    Parse model output into a ChatReply.

    Output that is not a JSON object of the expected shape falls back to
    the raw text as the reply, with no place and no report.
    """
    text = raw.strip()

    try:
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            # Handle markdown code blocks around the object
            if not text.startswith("```"):
                raise
            data = json.loads(_strip_fence(text))
        return ChatReply.model_validate(data)
    except json.JSONDecodeError as e:
        logger.warning(f"[CHAT] JSON parse failed: {e} | raw={raw[:200]!r}")
    except ValidationError as e:
        logger.warning(f"[CHAT] Reply did not match schema: {e.error_count()} errors | raw={raw[:200]!r}")

    return ChatReply(reply=raw, place_name=None)


class ChatGateway:
    """Forwards chat messages to the completion model with live place context."""

    def __init__(self, client: Optional[LLMClient] = None, store: Optional[LocationStore] = None):
        self.client = client or LLMClient()
        self.store = store or get_location_store()

    async def ask(self, message: str, locations: Optional[list[PlaceRecord]] = None) -> ChatReply:
        """
        Ask the model about a user message.

        Raises LLMError when the upstream call fails; the caller decides how
        to surface it. Malformed output is recovered here.
        """
        if locations is None:
            locations = self.store.list_locations(sort_by_priority=True)

        system_prompt = build_system_prompt(locations)
        raw = await self.client.complete(
            system_prompt,
            message,
            response_format=CHAT_RESPONSE_FORMAT,
            caller_context="chat_gateway.ask",
        )
        logger.info(f"[CHAT] Raw response from model: {raw[:200]!r}")

        return parse_reply(raw)

    def resolve_place_name(self, place_name: Optional[str]) -> Optional[str]:
        """Canonical name for the map highlight, or None if it is not a known place."""
        record = self.store.find_by_name(place_name, fuzzy=True)
        return record.name if record else None
