"""End-to-end pipeline: raw transcript text to highlights.

raw text -> detect -> reconstruct -> classify (oracle and/or extractors)
-> validate/enhance -> AnalysisReport
"""

import structlog

from convo_highlights.config import Settings, get_settings
from convo_highlights.models import AnalysisReport
from convo_highlights.parsing import parse_conversation
from convo_highlights.pipeline.classifier import HighlightClassifier

logger = structlog.get_logger(__name__)


def analyze_text(
    raw_text: str,
    classifier: HighlightClassifier | None = None,
    settings: Settings | None = None,
) -> AnalysisReport:
    """Reconstruct ``raw_text`` and extract its highlights.

    Args:
        raw_text: Transcript text in any supported dialect.
        classifier: Classifier to use. Built from settings when not given.
        settings: Optional custom settings.

    Returns:
        AnalysisReport with the conversation and its analysis.
    """
    settings = settings or get_settings()
    classifier = classifier or HighlightClassifier.from_settings(settings)

    conversation = parse_conversation(raw_text, settings=settings)
    analysis = classifier.classify(conversation)

    logger.info(
        "analysis_complete",
        source=conversation.source.value,
        messages=len(conversation.messages),
        highlights=len(analysis.highlights),
        used_oracle=analysis.used_oracle,
    )
    return AnalysisReport(conversation=conversation, analysis=analysis)


async def aanalyze_text(
    raw_text: str,
    classifier: HighlightClassifier | None = None,
    settings: Settings | None = None,
) -> AnalysisReport:
    """Async variant of :func:`analyze_text`; only the oracle call is awaited."""
    settings = settings or get_settings()
    classifier = classifier or HighlightClassifier.from_settings(settings)

    conversation = parse_conversation(raw_text, settings=settings)
    analysis = await classifier.aclassify(conversation)
    return AnalysisReport(conversation=conversation, analysis=analysis)
