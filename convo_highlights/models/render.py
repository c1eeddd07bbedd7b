"""Interface of the downstream document renderer.

The renderer itself lives outside this package; only the contract it is
handed is defined here.
"""

from typing import Protocol

from pydantic import BaseModel, Field

from .conversation import Conversation
from .enums import RenderLayout
from .highlights import AnalysisResult


class TemplateStyling(BaseModel):
    """Visual styling hints for a rendered document."""

    font_family: str = Field("helvetica", description="Base font family")
    font_size: int = Field(11, ge=6, le=32, description="Base font size in points")
    primary_color: str = Field("#1f2937", description="Heading colour")
    accent_color: str = Field("#2563eb", description="Accent colour for highlights")


class TemplateSections(BaseModel):
    """Which sections a rendered document includes."""

    include_summary: bool = True
    include_highlights: bool = True
    include_full_conversation: bool = False
    include_metadata: bool = True
    include_tags: bool = True
    include_key_topics: bool = True
    include_action_items: bool = True
    include_resources: bool = True
    include_questions: bool = True


class RenderTemplate(BaseModel):
    """Presentation template passed to a renderer."""

    layout: RenderLayout = Field(RenderLayout.DETAILED, description="Layout choice")
    styling: TemplateStyling = Field(default_factory=TemplateStyling)
    sections: TemplateSections = Field(default_factory=TemplateSections)


class DocumentRenderer(Protocol):
    """Turns a conversation and its analysis into an opaque binary document.

    Implementations are responsible for any markup escaping; the text they
    receive is plain and free of control characters.
    """

    def render(
        self,
        conversation: Conversation,
        analysis: AnalysisResult,
        template: RenderTemplate,
    ) -> bytes:
        ...
