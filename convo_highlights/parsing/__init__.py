"""Format detection and dialect reconstruction."""

from .detector import SOURCE_PATTERNS, detect_source
from .reconstructor import (
    DIALECTS,
    DialectSpec,
    RolePattern,
    ScanState,
    derive_title,
    match_role_prefix,
    parse_conversation,
    reconstruct,
    reconstruct_messages,
)
from .text_cleaner import sanitize_text

__all__ = [
    "SOURCE_PATTERNS",
    "detect_source",
    "sanitize_text",
    "DIALECTS",
    "DialectSpec",
    "RolePattern",
    "ScanState",
    "derive_title",
    "match_role_prefix",
    "reconstruct",
    "reconstruct_messages",
    "parse_conversation",
]
