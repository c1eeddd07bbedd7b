"""Deterministic span extraction."""

from .spans import (
    DEFAULT_EXTRACTORS,
    ActionItemExtractor,
    CodeBlockExtractor,
    QuestionExtractor,
    SpanExtractor,
    extract_spans,
)

__all__ = [
    "SpanExtractor",
    "CodeBlockExtractor",
    "ActionItemExtractor",
    "QuestionExtractor",
    "DEFAULT_EXTRACTORS",
    "extract_spans",
]
