"""Schemas for the chat endpoint and the structured model reply."""

from typing import Literal, Optional
from pydantic import BaseModel, Field

from app.schemas.location import CamelModel

ReportType = Literal["cooling_problem", "none"]
ReportIntensityValue = Literal["low", "medium", "high"]


class ChatRequest(BaseModel):
    """Request for the chat endpoint."""

    message: str = Field(..., min_length=1, description="User message (required, non-empty)")


class ChatReply(CamelModel):
    """Structured reply returned by the completion model.

    Report fields stay None when the model output could not be parsed.
    """

    reply: str
    place_name: Optional[str] = None
    report_type: Optional[ReportType] = None
    report_intensity: Optional[ReportIntensityValue] = None

    @property
    def is_cooling_report(self) -> bool:
        return self.report_type == "cooling_problem"


class ChatResponse(CamelModel):
    """Response of the chat endpoint."""

    reply: str
    place_name: Optional[str] = None
    report_type: Optional[ReportType] = None
    report_intensity: Optional[ReportIntensityValue] = None
