"""Enumeration types for the conversation models."""

from enum import Enum


class Role(str, Enum):
    """Speaker role of a single message."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class ConversationSource(str, Enum):
    """Transcript dialects recognised by the format detector."""

    CHATGPT = "chatgpt"
    CLAUDE = "claude"
    GEMINI = "gemini"
    PERPLEXITY = "perplexity"
    CUSTOM = "custom"


class HighlightCategory(str, Enum):
    """Semantic category of an extracted highlight."""

    CODE = "code"
    INSIGHT = "insight"
    ACTION_ITEM = "action_item"
    RESOURCE = "resource"
    QUESTION = "question"
    OTHER = "other"


class RenderLayout(str, Enum):
    """Document layouts understood by downstream renderers."""

    MINIMAL = "minimal"
    DETAILED = "detailed"
    ACADEMIC = "academic"
    PROFESSIONAL = "professional"
