"""Models for reconstructed conversations."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import ConversationSource, Role


class Message(BaseModel):
    """One utterance of a reconstructed conversation."""

    model_config = ConfigDict(frozen=True)

    role: Role = Field(..., description="Speaker role")
    text: str = Field(..., description="Verbatim utterance content, trimmed at the boundary")
    timestamp: datetime | None = Field(None, description="Timestamp if the transcript carries one")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Free-form metadata")

    @field_validator("text")
    @classmethod
    def _text_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("message text must not be empty")
        return value


class Conversation(BaseModel):
    """A dialogue reconstructed from raw transcript text."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., description="Derived conversation title")
    source: ConversationSource = Field(..., description="Detected transcript dialect")
    messages: tuple[Message, ...] = Field(
        default_factory=tuple, description="Messages in order of appearance"
    )
    metadata: dict[str, Any] = Field(default_factory=dict, description="Free-form metadata")
    tags: list[str] = Field(default_factory=list, description="Keyword tags, each at most once")
    category: str | None = Field(None, description="Single category label")

    @property
    def user_turns(self) -> int:
        """Number of user-authored messages."""
        return sum(1 for m in self.messages if m.role == Role.USER)

    @property
    def assistant_turns(self) -> int:
        """Number of assistant-authored messages."""
        return sum(1 for m in self.messages if m.role == Role.ASSISTANT)

    @property
    def transcript(self) -> str:
        """All message texts joined by a single space."""
        return " ".join(m.text for m in self.messages)
