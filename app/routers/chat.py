"""Chat endpoint - structured replies and citizen cooling reports."""

import logging
import time

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from app.schemas.chat import ChatRequest, ChatResponse
from app.services.chat_gateway import ChatGateway, UPSTREAM_FAILURE_REPLY
from app.services.llm_client import LLMClient, LLMError
from app.services.location_store import LocationStore, get_location_store

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/chat", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    store: LocationStore = Depends(get_location_store),
):
    """
    Answer a chat message about Athens places.

    Flow:
    1. Send the message with the live place list to the completion model
    2. If the reply reports a cooling problem at a known place, apply it
    3. Return reply, matched place and report classification

    Upstream failure returns 500 with a fixed apology and leaves the store untouched.
    """
    start_time = time.time()

    if not request.message.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Message cannot be empty"
        )

    try:
        gateway = ChatGateway(client=LLMClient(), store=store)
        result = await gateway.ask(request.message)
    except LLMError as e:
        logger.error(f"[CHAT] Upstream error: {e}")
        failure = ChatResponse(
            reply=UPSTREAM_FAILURE_REPLY,
            place_name=None,
            report_type="none",
            report_intensity=None,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=failure.model_dump(by_alias=True),
        )

    if result.is_cooling_report:
        updated = store.record_report(result.place_name, result.report_intensity)
        if updated:
            logger.info(
                f"[CHAT] Cooling report recorded | place={updated.name} | "
                f"intensity={result.report_intensity} | priority={updated.priority_index}"
            )

    response = ChatResponse(
        reply=result.reply,
        place_name=gateway.resolve_place_name(result.place_name),
        report_type=result.report_type,
        report_intensity=result.report_intensity,
    )

    logger.info(
        f"[CHAT] Done | place={response.place_name} | report={response.report_type} | "
        f"duration={time.time() - start_time:.3f}s"
    )
    return response
