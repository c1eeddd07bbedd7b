"""Span extractors - deterministic highlight candidates from message text.

Each extractor is stateless and scans one message at a time, returning
Highlights whose position covers exactly the (trimmed) content it reports.
Extractors do not resolve overlaps or deduplicate; a span matched by two
extractors yields two highlights.
"""

import re
from collections.abc import Iterable, Iterator, Sequence
from typing import Protocol

import structlog

from convo_highlights.models import (
    Conversation,
    Highlight,
    HighlightCategory,
    HighlightPosition,
    Role,
)

logger = structlog.get_logger(__name__)


# =============================================================================
# Patterns
# =============================================================================

# Fenced code, non-greedy across newlines
CODE_BLOCK_PATTERN = re.compile(r"```[\s\S]*?```")

# Imperative marker at line start (optionally bulleted) or after a sentence terminator
ACTION_ITEM_PATTERN = re.compile(
    r"(?:^[ \t]*(?:[-*•][ \t]*)?|(?<=[.!?])[ \t]+)"
    r"(?:TODO|TASK|ACTION|NEXT STEP|FUTURE|PLAN)\b:?[ \t]*"
    r"(?P<item>[^\n]*)",
    re.IGNORECASE | re.MULTILINE,
)

# Sentence terminators; a question is the run of text between the previous
# terminator (or the start of the text) and a question mark. This yields the
# same spans as `[^.!?]*\?` with finditer, in a single pass.
# Known imprecision: "Really! Why?" yields only "Why?", and several
# questions on one line yield one span each with no sentence segmentation.
TERMINATOR_PATTERN = re.compile(r"[.!?]")


def _question_spans(text: str) -> Iterator[tuple[int, int]]:
    start = 0
    for match in TERMINATOR_PATTERN.finditer(text):
        if match.group() == "?":
            yield start, match.end()
        start = match.end()


def _trimmed_span(text: str, start: int, end: int) -> tuple[int, int]:
    """Shrink ``[start, end)`` so it excludes surrounding whitespace."""
    segment = text[start:end]
    leading = len(segment) - len(segment.lstrip())
    trailing = len(segment) - len(segment.rstrip())
    return start + leading, end - trailing


def _highlight(
    text: str,
    start: int,
    end: int,
    message_index: int,
    category: HighlightCategory,
    confidence: float,
    tags: Sequence[str],
) -> Highlight | None:
    start, end = _trimmed_span(text, start, end)
    if start >= end:
        return None
    return Highlight(
        content=text[start:end],
        category=category,
        confidence_score=confidence,
        tags=list(tags),
        position=HighlightPosition(message_index=message_index, start_offset=start, end_offset=end),
    )


# =============================================================================
# Extractors
# =============================================================================

class SpanExtractor(Protocol):
    """Capability: scan one message's text for highlight candidates."""

    name: str

    def scan(self, text: str, message_index: int) -> list[Highlight]:
        ...


class CodeBlockExtractor:
    """Fenced code regions."""

    name = "code"
    confidence = 0.9
    tags = ("code",)

    def scan(self, text: str, message_index: int) -> list[Highlight]:
        found = []
        for match in CODE_BLOCK_PATTERN.finditer(text):
            highlight = _highlight(
                text, match.start(), match.end(), message_index,
                HighlightCategory.CODE, self.confidence, self.tags,
            )
            if highlight:
                found.append(highlight)
        return found


class ActionItemExtractor:
    """Lines or sentences opened by TODO / TASK / ACTION / NEXT STEP / FUTURE / PLAN."""

    name = "action_item"
    confidence = 0.8
    tags = ("action", "todo")

    def scan(self, text: str, message_index: int) -> list[Highlight]:
        found = []
        for match in ACTION_ITEM_PATTERN.finditer(text):
            highlight = _highlight(
                text, match.start("item"), match.end("item"), message_index,
                HighlightCategory.ACTION_ITEM, self.confidence, self.tags,
            )
            if highlight:
                found.append(highlight)
        return found


class QuestionExtractor:
    """Question-mark terminated runs of bounded length (both bounds exclusive)."""

    name = "question"
    confidence = 0.7
    tags = ("question",)

    def __init__(self, min_length: int = 10, max_length: int = 200) -> None:
        self.min_length = min_length
        self.max_length = max_length

    def scan(self, text: str, message_index: int) -> list[Highlight]:
        found = []
        for start, end in _question_spans(text):
            length = len(text[start:end].strip())
            if not (self.min_length < length < self.max_length):
                continue
            highlight = _highlight(
                text, start, end, message_index,
                HighlightCategory.QUESTION, self.confidence, self.tags,
            )
            if highlight:
                found.append(highlight)
        return found


DEFAULT_EXTRACTORS: tuple[SpanExtractor, ...] = (
    CodeBlockExtractor(),
    ActionItemExtractor(),
    QuestionExtractor(),
)


def extract_spans(
    conversation: Conversation,
    extractors: Sequence[SpanExtractor] = DEFAULT_EXTRACTORS,
    roles: Iterable[Role] | None = None,
) -> list[Highlight]:
    """Run ``extractors`` over the messages of ``conversation``.

    Output is ordered by message index, then extractor order, then match order.

    Args:
        conversation: Reconstructed conversation.
        extractors: Extractors to run, in order.
        roles: Message roles to scan. All roles when not given.

    Returns:
        Candidate highlights (not yet validated).
    """
    allowed = set(roles) if roles is not None else set(Role)
    candidates: list[Highlight] = []

    for index, message in enumerate(conversation.messages):
        if message.role not in allowed:
            continue
        for extractor in extractors:
            candidates.extend(extractor.scan(message.text, index))

    logger.debug(
        "spans_extracted",
        candidates=len(candidates),
        roles=sorted(role.value for role in allowed),
    )
    return candidates
