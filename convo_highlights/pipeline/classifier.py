"""Highlight classification - oracle-assisted with a deterministic fallback.

Two paths produce an AnalysisResult:

- Oracle path: the conversation is sent to the classification oracle once;
  a structurally valid response has its highlights validated and enhanced,
  and missing lists are filled in from the accepted highlights.
- Fallback path: the span extractors run over the messages and the summary
  and key topics are derived from fixed heuristics.

Any oracle failure (transport error, timeout, unparsable or mismatching
response) is logged and answered with the fallback path. Nothing raised by
the oracle reaches the caller.
"""

import asyncio
from collections.abc import Sequence

import structlog

from convo_highlights.config import Settings, get_settings
from convo_highlights.extraction import DEFAULT_EXTRACTORS, QuestionExtractor, SpanExtractor, extract_spans
from convo_highlights.llm import (
    ClassificationOracle,
    OracleAnalysis,
    build_classification_messages,
    build_enhancement_messages,
    create_oracle,
    parse_oracle_analysis,
    parse_refinements,
)
from convo_highlights.models import AnalysisResult, Conversation, Highlight, HighlightCategory
from convo_highlights.parsing import sanitize_text
from convo_highlights.processing import clamp_confidence, extract_key_topics, validate_and_enhance

logger = structlog.get_logger(__name__)


def fallback_summary(conversation: Conversation) -> str:
    """Summarize a conversation from its title and turn counts."""
    return (
        f"Conversation about {conversation.title} with {conversation.user_turns} user turns "
        f"and {conversation.assistant_turns} assistant turns."
    )


def contents_by_category(highlights: Sequence[Highlight], category: HighlightCategory) -> list[str]:
    return [h.content for h in highlights if h.category == category]


class HighlightClassifier:
    """Extracts highlights and summary views from a conversation."""

    def __init__(
        self,
        oracle: ClassificationOracle | None = None,
        settings: Settings | None = None,
        extractors: Sequence[SpanExtractor] | None = None,
    ) -> None:
        self.oracle = oracle
        self.settings = settings or get_settings()
        if extractors is None:
            extractors = self._default_extractors()
        self.extractors = tuple(extractors)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "HighlightClassifier":
        """Build a classifier whose oracle is enabled or not according to ``settings``."""
        settings = settings or get_settings()
        return cls(oracle=create_oracle(settings), settings=settings)

    def _default_extractors(self) -> tuple[SpanExtractor, ...]:
        question = QuestionExtractor(
            min_length=self.settings.question_min_length,
            max_length=self.settings.question_max_length,
        )
        return tuple(
            question if isinstance(extractor, QuestionExtractor) else extractor
            for extractor in DEFAULT_EXTRACTORS
        )

    # -------------------------------------------------------------------------
    # Classification
    # -------------------------------------------------------------------------

    def classify(self, conversation: Conversation) -> AnalysisResult:
        """Classify ``conversation``. Never raises on oracle failure."""
        if self.oracle is None:
            return self.fallback(conversation)

        try:
            response = self.oracle.invoke(
                build_classification_messages(conversation),
                num_predict=self.settings.llm_num_predict,
            )
            analysis, highlights = parse_oracle_analysis(response)
        except Exception as e:
            logger.warning("oracle_classification_failed", error=str(e), error_type=type(e).__name__)
            return self.fallback(conversation)

        return self._from_oracle(analysis, highlights, conversation)

    async def aclassify(self, conversation: Conversation) -> AnalysisResult:
        """Async variant of :meth:`classify`, bounded by ``oracle_timeout_seconds``."""
        if self.oracle is None:
            return self.fallback(conversation)

        try:
            response = await asyncio.wait_for(
                self.oracle.ainvoke(
                    build_classification_messages(conversation),
                    num_predict=self.settings.llm_num_predict,
                ),
                timeout=self.settings.oracle_timeout_seconds,
            )
            analysis, highlights = parse_oracle_analysis(response)
        except asyncio.TimeoutError:
            logger.warning("oracle_classification_timeout", timeout=self.settings.oracle_timeout_seconds)
            return self.fallback(conversation)
        except Exception as e:
            logger.warning("oracle_classification_failed", error=str(e), error_type=type(e).__name__)
            return self.fallback(conversation)

        return self._from_oracle(analysis, highlights, conversation)

    def _from_oracle(
        self,
        analysis: OracleAnalysis,
        candidates: list[Highlight],
        conversation: Conversation,
    ) -> AnalysisResult:
        highlights = [_sanitized(h) for h in validate_and_enhance(candidates, conversation)]

        def _or_derived(values: list[str] | None, category: HighlightCategory) -> list[str]:
            if values is not None:
                return _sanitized_texts(values)
            return contents_by_category(highlights, category)

        summary = sanitize_text(analysis.summary or "").strip() or None

        logger.info(
            "oracle_classification_complete",
            candidates=len(analysis.highlights),
            accepted=len(highlights),
        )
        return AnalysisResult(
            highlights=highlights,
            summary=summary or fallback_summary(conversation),
            key_topics=_sanitized_texts(analysis.key_topics or []),
            action_items=_or_derived(analysis.action_items, HighlightCategory.ACTION_ITEM),
            resources=_or_derived(analysis.resources, HighlightCategory.RESOURCE),
            questions=_or_derived(analysis.questions, HighlightCategory.QUESTION),
            used_oracle=True,
        )

    def fallback(self, conversation: Conversation) -> AnalysisResult:
        """Deterministic classification using the span extractors only."""
        candidates = extract_spans(conversation, self.extractors, roles=self.settings.extraction_roles)
        highlights = validate_and_enhance(candidates, conversation)

        logger.info(
            "fallback_classification_complete",
            messages=len(conversation.messages),
            candidates=len(candidates),
            accepted=len(highlights),
        )
        return AnalysisResult(
            highlights=highlights,
            summary=fallback_summary(conversation),
            key_topics=extract_key_topics(conversation.transcript),
            action_items=contents_by_category(highlights, HighlightCategory.ACTION_ITEM),
            resources=contents_by_category(highlights, HighlightCategory.RESOURCE),
            questions=contents_by_category(highlights, HighlightCategory.QUESTION),
            used_oracle=False,
        )

    # -------------------------------------------------------------------------
    # Enhancement
    # -------------------------------------------------------------------------

    def enhance_highlights(
        self,
        highlights: Sequence[Highlight],
        conversation: Conversation,
    ) -> list[Highlight]:
        """Ask the oracle to refine tags, notes and categories of ``highlights``.

        Content and position are never taken from the oracle. On any failure
        the input is returned unchanged apart from score clamping.
        """
        highlights = list(highlights)
        if self.oracle is None or not highlights:
            return _clamped(highlights)

        try:
            response = self.oracle.invoke(
                build_enhancement_messages(highlights, conversation),
                num_predict=self.settings.llm_enhance_num_predict,
            )
            refinements = parse_refinements(response)
        except Exception as e:
            logger.warning("oracle_enhancement_failed", error=str(e), error_type=type(e).__name__)
            return _clamped(highlights)

        refined = list(highlights)
        for position, refinement in enumerate(refinements):
            index = refinement.index if refinement.index is not None else position
            if index >= len(refined):
                continue
            update = {}
            if refinement.category is not None:
                update["category"] = refinement.category
            if refinement.tags is not None:
                tags = [*refined[index].tags, *_sanitized_texts(refinement.tags)]
                update["tags"] = list(dict.fromkeys(tags))
            if refinement.notes is not None:
                update["notes"] = sanitize_text(refinement.notes)
            if refinement.confidence_score is not None:
                update["confidence_score"] = refinement.confidence_score
            refined[index] = refined[index].model_copy(update=update)

        logger.info("oracle_enhancement_complete", highlights=len(refined), refinements=len(refinements))
        return _clamped(refined)


def _clamped(highlights: list[Highlight]) -> list[Highlight]:
    return [
        h.model_copy(update={"confidence_score": clamp_confidence(h.confidence_score)})
        for h in highlights
    ]


def _sanitized_texts(values: Sequence[str]) -> list[str]:
    """Oracle-supplied strings with control characters removed, blanks dropped."""
    cleaned = (sanitize_text(value).strip() for value in values)
    return [value for value in cleaned if value]


def _sanitized(highlight: Highlight) -> Highlight:
    notes = sanitize_text(highlight.notes) if highlight.notes is not None else None
    return highlight.model_copy(
        update={"notes": notes, "tags": list(dict.fromkeys(_sanitized_texts(highlight.tags)))}
    )
