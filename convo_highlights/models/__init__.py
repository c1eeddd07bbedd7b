"""Pydantic data models for conversations and highlights."""

from .enums import ConversationSource, HighlightCategory, RenderLayout, Role
from .conversation import Conversation, Message
from .highlights import AnalysisReport, AnalysisResult, Highlight, HighlightPosition
from .render import (
    DocumentRenderer,
    RenderTemplate,
    TemplateSections,
    TemplateStyling,
)

__all__ = [
    # Enums
    "Role",
    "ConversationSource",
    "HighlightCategory",
    "RenderLayout",
    # Conversation
    "Message",
    "Conversation",
    # Highlights
    "HighlightPosition",
    "Highlight",
    "AnalysisResult",
    "AnalysisReport",
    # Rendering interface
    "DocumentRenderer",
    "RenderTemplate",
    "TemplateSections",
    "TemplateStyling",
]
