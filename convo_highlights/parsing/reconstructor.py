"""Dialect reconstruction - raw transcript lines to ordered messages.

Each dialect is described by a ``DialectSpec``: a display name and an ordered
list of role-prefix patterns. Reconstruction is a single pass over the lines
feeding a ``ScanState`` local to the call:

- a line starting with a role prefix closes the message being accumulated
  (tagged with the *previous* role) and opens a new one seeded with the
  rest of the line
- any other line is appended verbatim to the message being accumulated
- blank accumulations are dropped, never emitted

Title, tags and category are derived after the scan. Reconstruction never
raises; unstructured input yields zero or one message and fallback labels.
"""

import re
from dataclasses import dataclass, field
from typing import Optional

import structlog

from convo_highlights.config import Settings, get_settings
from convo_highlights.models import Conversation, ConversationSource, Message, Role
from convo_highlights.parsing.detector import detect_source
from convo_highlights.parsing.text_cleaner import sanitize_text
from convo_highlights.processing.keywords import categorize, extract_tags

logger = structlog.get_logger(__name__)


# =============================================================================
# Dialect Definitions
# =============================================================================

@dataclass(frozen=True)
class RolePattern:
    """A line prefix that opens a message for ``role``."""
    role: Role
    pattern: re.Pattern


@dataclass(frozen=True)
class DialectSpec:
    """Role-prefix rules of one transcript dialect."""
    source: ConversationSource
    display_name: str
    role_patterns: tuple[RolePattern, ...]

    @property
    def fallback_title(self) -> str:
        return f"{self.display_name} Conversation"


def _prefix(*names: str, bullets: bool = False) -> re.Pattern:
    """Compile a case-insensitive line-start pattern for ``names`` followed by a colon."""
    alternatives = "|".join(re.escape(name) for name in names)
    lead = r"\s*(?:[-*•]\s*)?" if bullets else ""
    return re.compile(rf"^{lead}(?:{alternatives}):", re.IGNORECASE)


DIALECTS: dict[ConversationSource, DialectSpec] = {
    ConversationSource.CHATGPT: DialectSpec(
        source=ConversationSource.CHATGPT,
        display_name="ChatGPT",
        role_patterns=(
            RolePattern(Role.USER, _prefix("User")),
            RolePattern(Role.ASSISTANT, _prefix("Assistant", "ChatGPT")),
            RolePattern(Role.SYSTEM, _prefix("System")),
        ),
    ),
    ConversationSource.CLAUDE: DialectSpec(
        source=ConversationSource.CLAUDE,
        display_name="Claude",
        role_patterns=(
            RolePattern(Role.USER, _prefix("Human")),
            RolePattern(Role.ASSISTANT, _prefix("Assistant", "Claude")),
            RolePattern(Role.SYSTEM, _prefix("System")),
        ),
    ),
    ConversationSource.GEMINI: DialectSpec(
        source=ConversationSource.GEMINI,
        display_name="Gemini",
        role_patterns=(
            RolePattern(Role.USER, _prefix("User")),
            RolePattern(Role.ASSISTANT, _prefix("Gemini", "Assistant")),
        ),
    ),
    ConversationSource.PERPLEXITY: DialectSpec(
        source=ConversationSource.PERPLEXITY,
        display_name="Perplexity",
        role_patterns=(
            RolePattern(Role.USER, _prefix("User")),
            RolePattern(Role.ASSISTANT, _prefix("Perplexity", "Assistant")),
        ),
    ),
    # Generic variant: alias families tried in order user, assistant, system
    ConversationSource.CUSTOM: DialectSpec(
        source=ConversationSource.CUSTOM,
        display_name="Custom",
        role_patterns=(
            RolePattern(Role.USER, _prefix("User", "Human", "Me", "I", bullets=True)),
            RolePattern(
                Role.ASSISTANT,
                _prefix("Assistant", "AI", "Bot", "ChatGPT", "Claude", "Gemini", "Perplexity", bullets=True),
            ),
            RolePattern(Role.SYSTEM, _prefix("System", "Context", "Instructions", bullets=True)),
        ),
    ),
}


# =============================================================================
# Line Scan
# =============================================================================

@dataclass
class ScanState:
    """Accumulator for one line scan.

    Lines of the open message are joined only when it is closed.
    """
    role: Role = Role.USER
    lines: list[str] = field(default_factory=list)
    messages: list[Message] = field(default_factory=list)

    def flush(self) -> None:
        """Close the open message; blank accumulations are dropped."""
        text = "\n".join(self.lines).strip()
        if text:
            self.messages.append(Message(role=self.role, text=text))
        self.lines = []

    def feed(self, line: str, dialect: DialectSpec) -> None:
        hit = match_role_prefix(line, dialect)
        if hit is None:
            self.lines.append(line)
            return

        self.flush()
        self.role, remainder = hit
        self.lines.append(remainder)


def match_role_prefix(line: str, dialect: DialectSpec) -> Optional[tuple[Role, str]]:
    """Return ``(role, remainder)`` if ``line`` starts with one of the dialect's prefixes."""
    for role_pattern in dialect.role_patterns:
        match = role_pattern.pattern.match(line)
        if match:
            return role_pattern.role, line[match.end():].strip()
    return None


def reconstruct_messages(lines: list[str], dialect: DialectSpec) -> list[Message]:
    """Scan ``lines`` into messages using the prefixes of ``dialect``."""
    state = ScanState()
    for line in lines:
        state.feed(line, dialect)
    state.flush()
    return state.messages


# =============================================================================
# Conversation Assembly
# =============================================================================

def derive_title(messages: list[Message], dialect: DialectSpec, max_length: int = 100) -> str:
    """Use the first line of an opening user message as title, if short enough."""
    if messages and messages[0].role == Role.USER:
        first_line = messages[0].text.split("\n")[0]
        if len(first_line) < max_length:
            return first_line
    return dialect.fallback_title


def reconstruct(
    raw_text: str,
    source: ConversationSource | None = None,
    settings: Settings | None = None,
) -> Conversation:
    """Reconstruct a conversation from ``raw_text``.

    Args:
        raw_text: Transcript text in any supported dialect.
        source: Dialect to use. Detected from the text when not given.
        settings: Optional custom settings.

    Returns:
        The reconstructed Conversation. Never raises on malformed input.
    """
    settings = settings or get_settings()
    text = sanitize_text(raw_text)
    if source is None:
        source = detect_source(text)
    dialect = DIALECTS[ConversationSource(source)]

    lines = text.split("\n")
    messages = reconstruct_messages(lines, dialect)

    conversation = Conversation(
        title=derive_title(messages, dialect, settings.title_max_length),
        source=dialect.source,
        messages=tuple(messages),
        metadata={"original_format": dialect.source.value, "line_count": len(lines)},
        tags=extract_tags(text),
        category=categorize([m.text for m in messages]),
    )

    logger.info(
        "conversation_reconstructed",
        source=dialect.source.value,
        messages=len(messages),
        lines=len(lines),
        category=conversation.category,
    )
    return conversation


def parse_conversation(raw_text: str, settings: Settings | None = None) -> Conversation:
    """Detect the dialect of ``raw_text`` and reconstruct it."""
    return reconstruct(raw_text, source=None, settings=settings)
