"""Keyword families, validation and enhancement of highlights."""

from .keywords import (
    CATEGORY_KEYWORDS,
    DEFAULT_CATEGORY,
    DEFAULT_TOPIC,
    TAG_KEYWORDS,
    TOPIC_KEYWORDS,
    categorize,
    extract_key_topics,
    extract_tags,
)
from .validator import (
    clamp_confidence,
    enhance_highlight,
    validate_and_enhance,
    validate_highlight,
)

__all__ = [
    "TAG_KEYWORDS",
    "CATEGORY_KEYWORDS",
    "TOPIC_KEYWORDS",
    "DEFAULT_CATEGORY",
    "DEFAULT_TOPIC",
    "extract_tags",
    "categorize",
    "extract_key_topics",
    "validate_highlight",
    "enhance_highlight",
    "clamp_confidence",
    "validate_and_enhance",
]
