"""Conversation Highlights - reconstruct AI chat transcripts and extract highlights."""

__version__ = "0.1.0"

from convo_highlights.models import (
    AnalysisReport,
    AnalysisResult,
    Conversation,
    ConversationSource,
    Highlight,
    HighlightCategory,
    Message,
    Role,
)
from convo_highlights.parsing import detect_source, parse_conversation, reconstruct
from convo_highlights.pipeline import HighlightClassifier, aanalyze_text, analyze_text

__all__ = [
    "__version__",
    "Role",
    "ConversationSource",
    "HighlightCategory",
    "Message",
    "Conversation",
    "Highlight",
    "AnalysisResult",
    "AnalysisReport",
    "detect_source",
    "parse_conversation",
    "reconstruct",
    "HighlightClassifier",
    "analyze_text",
    "aanalyze_text",
]
