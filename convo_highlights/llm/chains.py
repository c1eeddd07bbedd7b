"""Prompt assembly and response parsing for the classification oracle."""

import json
import re
from typing import Any

import structlog
from langchain_core.messages import BaseMessage
from langchain_core.prompts import ChatPromptTemplate
from pydantic import BaseModel, Field, ValidationError

from convo_highlights.config.prompts import (
    CLASSIFICATION_SYSTEM_PROMPT,
    CLASSIFICATION_USER_PROMPT,
    ENHANCEMENT_SYSTEM_PROMPT,
    ENHANCEMENT_USER_PROMPT,
)
from convo_highlights.llm.client import OracleError
from convo_highlights.models import Conversation, Highlight, HighlightCategory

logger = structlog.get_logger(__name__)


CLASSIFICATION_PROMPT = ChatPromptTemplate.from_messages([
    ("system", CLASSIFICATION_SYSTEM_PROMPT),
    ("human", CLASSIFICATION_USER_PROMPT),
])

ENHANCEMENT_PROMPT = ChatPromptTemplate.from_messages([
    ("system", ENHANCEMENT_SYSTEM_PROMPT),
    ("human", ENHANCEMENT_USER_PROMPT),
])


# =============================================================================
# Response Schemas
# =============================================================================

class OracleAnalysis(BaseModel):
    """Top-level shape of a classification response.

    Highlights stay raw here so that one malformed entry does not invalidate
    the whole response; they are validated one by one.
    """

    highlights: list[dict[str, Any]]
    summary: str | None = None
    key_topics: list[str] | None = None
    action_items: list[str] | None = None
    resources: list[str] | None = None
    questions: list[str] | None = None


class HighlightRefinement(BaseModel):
    """One refined highlight returned by the enhancement prompt."""

    index: int | None = Field(None, ge=0)
    category: HighlightCategory | None = None
    tags: list[str] | None = None
    notes: str | None = None
    confidence_score: float | None = None


# =============================================================================
# Prompt Assembly
# =============================================================================

def format_transcript(conversation: Conversation) -> str:
    """Render messages as ``ROLE (index): text`` blocks in index order."""
    return "\n\n".join(
        f"{message.role.value.upper()} ({index}): {message.text}"
        for index, message in enumerate(conversation.messages)
    )


def build_classification_messages(conversation: Conversation) -> list[BaseMessage]:
    return CLASSIFICATION_PROMPT.format_messages(
        transcript=format_transcript(conversation),
        source=conversation.source.value,
        category=conversation.category or "general",
    )


def build_enhancement_messages(
    highlights: list[Highlight],
    conversation: Conversation,
) -> list[BaseMessage]:
    payload = [
        {
            "index": index,
            "content": h.content,
            "category": h.category.value,
            "confidence_score": h.confidence_score,
            "tags": h.tags,
            "notes": h.notes,
        }
        for index, h in enumerate(highlights)
    ]
    return ENHANCEMENT_PROMPT.format_messages(
        title=conversation.title,
        source=conversation.source.value,
        highlights=json.dumps(payload, indent=2, ensure_ascii=False),
    )


# =============================================================================
# JSON Extraction
# =============================================================================

CODE_FENCE_PATTERN = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```", re.IGNORECASE)
TRAILING_COMMA_PATTERN = re.compile(r",(\s*[}\]])")


def _clean_json_string(text: str) -> str:
    """Strip BOM/zero-width characters and trailing commas before ``}``/``]``."""
    text = text.strip("\ufeff\u200b\u200c\u200d")
    return TRAILING_COMMA_PATTERN.sub(r"\1", text)


def _extract_balanced(text: str) -> str | None:
    """Return the first balanced ``{...}`` or ``[...]`` block, ignoring brackets in strings."""
    closers = {"{": "}", "[": "]"}
    stack: list[str] = []
    start = None
    in_string = False
    escaped = False

    for i, char in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"' and stack:
            in_string = True
        elif char in closers:
            if not stack:
                start = i
            stack.append(closers[char])
        elif stack and char == stack[-1]:
            stack.pop()
            if not stack:
                return text[start:i + 1]

    return None


def parse_json_response(response: str) -> Any:
    """Parse a JSON value out of raw oracle text.

    Handles markdown code fences, preamble text before the JSON and trailing
    commas.

    Raises:
        OracleError: If no JSON value can be recovered.
    """
    if not isinstance(response, str) or not response.strip():
        raise OracleError("Empty response from oracle")

    text = response.strip()
    fenced = CODE_FENCE_PATTERN.search(text)
    if fenced and fenced.group(1).lstrip()[:1] in ("{", "["):
        text = fenced.group(1).strip()

    try:
        return json.loads(_clean_json_string(text))
    except json.JSONDecodeError as e:
        logger.debug("direct_parse_failed", error=str(e))

    block = _extract_balanced(text)
    if block:
        try:
            return json.loads(_clean_json_string(block))
        except json.JSONDecodeError as e:
            logger.debug("extracted_parse_failed", error=str(e))

    raise OracleError(f"Failed to parse oracle JSON response. Response preview: {text[:150]}")


def parse_oracle_analysis(response: str) -> tuple[OracleAnalysis, list[Highlight]]:
    """Validate a classification response.

    Returns:
        The parsed analysis and the highlights whose shape is valid.

    Raises:
        OracleError: If the response is not JSON or not an analysis object.
    """
    data = parse_json_response(response)
    try:
        analysis = OracleAnalysis.model_validate(data)
    except ValidationError as e:
        raise OracleError(f"Oracle response does not match the analysis schema: {e}") from e

    highlights = []
    for raw in analysis.highlights:
        try:
            highlights.append(Highlight.model_validate(raw))
        except ValidationError as e:
            logger.debug("oracle_highlight_malformed", error=str(e))

    logger.debug(
        "oracle_analysis_parsed",
        highlights=len(highlights),
        malformed=len(analysis.highlights) - len(highlights),
    )
    return analysis, highlights


def parse_refinements(response: str) -> list[HighlightRefinement]:
    """Validate an enhancement response (a list, or an object with ``highlights``).

    Raises:
        OracleError: If the response cannot be interpreted.
    """
    data = parse_json_response(response)
    if isinstance(data, dict):
        data = data.get("highlights")
    if not isinstance(data, list):
        raise OracleError("Enhancement response is not a list of highlights")

    try:
        return [HighlightRefinement.model_validate(item) for item in data]
    except ValidationError as e:
        raise OracleError(f"Enhancement response does not match the schema: {e}") from e
