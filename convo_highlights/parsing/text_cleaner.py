"""Sanitation of raw transcript text before reconstruction.

Only characters that would break structured rendering are touched:
line endings are normalized and control characters other than newline and
tab are removed. Nothing semantic is removed.
"""

import re

import structlog

logger = structlog.get_logger(__name__)

# C0 and C1 control characters, excluding \t (0x09) and \n (0x0a)
CONTROL_CHAR_PATTERN = re.compile(r"[\x00-\x08\x0b-\x1f\x7f-\x9f]")


def sanitize_text(raw_text: str) -> str:
    """Normalize line endings and strip control characters from ``raw_text``."""
    if not isinstance(raw_text, str):
        return ""

    text = raw_text.replace("\r\n", "\n").replace("\r", "\n")
    cleaned, removed = CONTROL_CHAR_PATTERN.subn("", text)
    if removed:
        logger.debug("control_characters_removed", count=removed)
    return cleaned
