"""Chat relay data models."""

from typing import Any, Literal, Optional
from pydantic import BaseModel, Field, field_validator

Role = Literal["user", "model"]


class Part(BaseModel):
    """Text fragment of a conversation turn."""
    text: str


class Turn(BaseModel):
    """One exchange unit in the conversation history."""
    role: Role
    parts: list[Part]


class ChatRequest(BaseModel):
    """Chat request from the web front end.

    History turns are forwarded to the provider verbatim, so they are kept as
    plain JSON values rather than validated against Turn.
    """
    message: str = Field(..., min_length=1)
    history: list[Any] = Field(default_factory=list)

    @field_validator("history", mode="before")
    @classmethod
    def _none_history_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class ChatResponse(BaseModel):
    """Relay reply, optionally with the extended history."""
    reply: str
    history: Optional[list[Any]] = None


class AcceptedResponse(BaseModel):
    """Acknowledgement returned by the trigger stage."""
    message: str


class BackgroundOutcome(BaseModel):
    """Result of a background provider call, visible to operators only."""
    status_code: int
    detail: str
