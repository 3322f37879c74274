"""API request and response schemas for the screening service."""
from pydantic import BaseModel, Field, ConfigDict
from typing import Dict, List, Literal, Optional, Any


# ============= Request Schemas =============

class TurnRequest(BaseModel):
    """Request schema for one inbound screening message.

    The first message of a session only opens it; every following message
    answers the question currently awaited.
    """
    value: str = Field(
        ...,
        description="Inbound answer text, e.g. 'Yes' or 'No'"
    )
    event_id: Optional[str] = Field(
        default=None,
        description="Optional delivery id; a repeated id is not counted twice"
    )
    model_config = ConfigDict(extra="forbid")


class EvaluateRequest(BaseModel):
    """Request schema for /evaluate: a complete answer set."""

    answers: Dict[str, str] = Field(
        ...,
        description="Question key -> 'Yes' | 'No' for all six questions",
    )
    model_config = ConfigDict(extra="forbid")


# ============= Response Schemas =============

class PromptPayload(BaseModel):
    text: str
    choices: List[str]


class OutcomePayload(BaseModel):
    outcome: str
    rule_id: Optional[str] = None
    text: str


class TurnResponse(BaseModel):
    """Envelope response for one screening turn."""

    session_id: str = Field(..., description="Conversation identifier")
    status: Literal["awaiting_answer", "rejected", "complete", "failed"] = Field(
        ..., description="Session state after the turn"
    )
    prompt: Optional[PromptPayload] = Field(
        default=None,
        description="Question to ask next while the session is active",
    )
    outcome: Optional[OutcomePayload] = Field(
        default=None,
        description="Recommendation; absent when the rules produce no message",
    )
    error: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Error metadata for rejected or failed turns",
    )
    model_config = ConfigDict(extra="forbid")


class EvaluateResponse(BaseModel):
    """Envelope response from /evaluate."""

    success: bool = Field(..., description="Whether evaluation succeeded")
    data: Dict[str, Any] = Field(
        default_factory=dict,
        description="Outcome, fired rule and message text",
    )
    error: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Error metadata when success is false",
    )
    model_config = ConfigDict(extra="forbid")


class QuestionSchema(BaseModel):
    key: str
    prompt: str
    choices: List[str]


class QuestionnaireResponse(BaseModel):
    """Response from /questions endpoint."""
    questions: List[QuestionSchema]


class StatusResponse(BaseModel):
    """Generic status response for health check endpoints."""
    status: str = Field(..., description="Service status")
    system: Optional[str] = Field(None, description="System identifier")
