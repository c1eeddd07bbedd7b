"""Highlight validation and enhancement.

The validator is a predicate: a highlight whose position does not point at
its claimed content is rejected (``False``), never raised on. The enhancer
is idempotent: it only adds tags derived from the content, removes duplicate
tags and clamps the confidence score into [0, 1].
"""

import math
from collections.abc import Iterable

import structlog

from convo_highlights.models import Conversation, Highlight

logger = structlog.get_logger(__name__)


# Content signature -> tag, checked in order
def _content_tags(content: str) -> list[str]:
    lowered = content.lower()
    tags = []
    if "```" in content:
        tags.append("code")
    if "http" in content:
        tags.append("link")
    if "?" in content:
        tags.append("question")
    if "todo" in lowered or "task" in lowered:
        tags.append("todo")
    return tags


def _is_offset(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_highlight(highlight: Highlight, conversation: Conversation) -> bool:
    """Check that ``highlight`` points at its verbatim content in ``conversation``.

    Rejects out-of-range message indices, positions outside
    ``0 <= start < end <= len(text)`` and trimmed content mismatches.
    """
    position = getattr(highlight, "position", None)
    if position is None:
        return False

    index = position.message_index
    start = position.start_offset
    end = position.end_offset
    if not (_is_offset(index) and _is_offset(start) and _is_offset(end)):
        return False

    if index < 0 or index >= len(conversation.messages):
        return False

    text = conversation.messages[index].text
    if start < 0 or end > len(text) or start >= end:
        return False

    return text[start:end].strip() == (highlight.content or "").strip()


def clamp_confidence(score: float) -> float:
    """Clamp ``score`` into [0.0, 1.0]; NaN becomes 0.0."""
    if score is None or math.isnan(score):
        return 0.0
    return min(max(score, 0.0), 1.0)


def enhance_highlight(highlight: Highlight) -> Highlight:
    """Augment tags from content signatures and clamp the confidence score."""
    tags: list[str] = []
    for tag in [*highlight.tags, *_content_tags(highlight.content)]:
        if tag not in tags:
            tags.append(tag)

    return highlight.model_copy(
        update={"tags": tags, "confidence_score": clamp_confidence(highlight.confidence_score)}
    )


def validate_and_enhance(
    highlights: Iterable[Highlight],
    conversation: Conversation,
) -> list[Highlight]:
    """Drop highlights that fail validation and enhance the rest, keeping order."""
    accepted: list[Highlight] = []
    rejected = 0

    for highlight in highlights:
        if validate_highlight(highlight, conversation):
            accepted.append(enhance_highlight(highlight))
        else:
            rejected += 1
            position = getattr(highlight, "position", None)
            logger.debug(
                "highlight_rejected",
                category=getattr(highlight.category, "value", highlight.category),
                position=position.model_dump() if position is not None else None,
            )

    if rejected:
        logger.info("highlights_rejected", rejected=rejected, accepted=len(accepted))
    return accepted
