"""Models for extracted highlights and analysis results."""

from pydantic import BaseModel, ConfigDict, Field

from .conversation import Conversation
from .enums import HighlightCategory


class HighlightPosition(BaseModel):
    """Back-reference from a highlight into its source message.

    Geometry is deliberately not cross-checked here: a position that does not
    fit its message is rejected by the validator, not by model construction.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    message_index: int = Field(..., alias="messageIndex", description="Index into Conversation.messages")
    start_offset: int = Field(..., alias="startChar", description="Inclusive start character offset")
    end_offset: int = Field(..., alias="endChar", description="Exclusive end character offset")


class Highlight(BaseModel):
    """A notable span of a conversation message."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(..., description="Verbatim text of the span")
    category: HighlightCategory = Field(..., description="Semantic category")
    confidence_score: float = Field(..., description="Confidence, clamped to [0, 1] on enhancement")
    tags: list[str] = Field(default_factory=list, description="Tags attached to the highlight")
    notes: str | None = Field(None, description="Free-text annotation")
    position: HighlightPosition = Field(..., description="Location in the source conversation")

    @property
    def message_index(self) -> int:
        return self.position.message_index


class AnalysisResult(BaseModel):
    """Output bundle of the classifier for one conversation."""

    model_config = ConfigDict(frozen=True)

    highlights: list[Highlight] = Field(default_factory=list, description="Accepted highlights")
    summary: str = Field(..., description="Short summary of the conversation")
    key_topics: list[str] = Field(default_factory=list, description="Key topics")
    action_items: list[str] = Field(default_factory=list, description="Action item texts")
    resources: list[str] = Field(default_factory=list, description="Resource texts")
    questions: list[str] = Field(default_factory=list, description="Question texts")
    used_oracle: bool = Field(False, description="True when the oracle response was used")


class AnalysisReport(BaseModel):
    """A reconstructed conversation together with its analysis."""

    model_config = ConfigDict(frozen=True)

    conversation: Conversation = Field(..., description="Reconstructed conversation")
    analysis: AnalysisResult = Field(..., description="Classifier output for the conversation")
