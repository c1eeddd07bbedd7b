"""Format detection - fingerprint raw transcripts by dialect.

Rules are checked in registration order; the first dialect with any
matching pattern wins, so earlier dialects take priority on ambiguous input
(e.g. a Claude transcript that mentions ChatGPT is detected as ChatGPT).
"""

import re

import structlog

from convo_highlights.models import ConversationSource

logger = structlog.get_logger(__name__)


SOURCE_PATTERNS: list[tuple[ConversationSource, list[re.Pattern]]] = [
    (ConversationSource.CHATGPT, [
        re.compile(r"ChatGPT", re.IGNORECASE),
        re.compile(r"OpenAI", re.IGNORECASE),
        re.compile(r"GPT-4", re.IGNORECASE),
        re.compile(r"GPT-3\.5", re.IGNORECASE),
        re.compile(r"Chat History", re.IGNORECASE),
    ]),
    (ConversationSource.CLAUDE, [
        re.compile(r"Claude", re.IGNORECASE),
        re.compile(r"Anthropic", re.IGNORECASE),
        re.compile(r"Claude-3", re.IGNORECASE),
        re.compile(r"Claude-2", re.IGNORECASE),
    ]),
    (ConversationSource.GEMINI, [
        re.compile(r"Gemini", re.IGNORECASE),
        re.compile(r"Google AI", re.IGNORECASE),
        re.compile(r"Bard", re.IGNORECASE),
    ]),
    (ConversationSource.PERPLEXITY, [
        re.compile(r"Perplexity", re.IGNORECASE),
        re.compile(r"Perplexity AI", re.IGNORECASE),
    ]),
]


def detect_source(raw_text: str) -> ConversationSource:
    """Detect the dialect of ``raw_text``.

    Total function: anything that is not a string is treated as empty text,
    and text without a fingerprint is ``ConversationSource.CUSTOM``.
    """
    if not isinstance(raw_text, str) or not raw_text:
        return ConversationSource.CUSTOM

    for source, patterns in SOURCE_PATTERNS:
        for pattern in patterns:
            if pattern.search(raw_text):
                logger.debug("source_detected", source=source.value, pattern=pattern.pattern)
                return source

    return ConversationSource.CUSTOM
