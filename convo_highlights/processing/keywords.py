"""Fixed keyword families for tags, categories and key topics.

Matching is plain substring containment on lower-cased text, so short
keywords such as "ui" or "test" also fire inside longer words.
"""

CODE_FENCE = "```"

# Tag name -> keywords, checked against the whole raw input (fence checked case-sensitively)
TAG_KEYWORDS: dict[str, tuple[str, ...]] = {
    "code": ("code", CODE_FENCE),
    "api": ("api", "endpoint"),
    "database": ("database", "sql"),
    "frontend": ("frontend", "react"),
    "backend": ("backend", "server"),
    "deployment": ("deployment", "docker"),
}

# Category -> keywords, in priority order; first hit wins
CATEGORY_KEYWORDS: dict[str, tuple[str, ...]] = {
    "technical": ("code", CODE_FENCE),
    "design": ("design", "ui", "ux"),
    "business": ("business", "strategy"),
    "learning": ("learning", "tutorial"),
}
DEFAULT_CATEGORY = "general"

# Key topic -> keywords, checked against the lower-cased transcript
TOPIC_KEYWORDS: dict[str, tuple[str, ...]] = {
    "Frontend Development": ("react", "frontend"),
    "Backend Development": ("api", "backend"),
    "Database": ("database", "sql"),
    "Deployment": ("deployment", "docker"),
    "Testing": ("testing", "test"),
    "Security": ("security", "auth"),
}
DEFAULT_TOPIC = "General Discussion"


def _matches(text: str, lowered: str, keywords: tuple[str, ...]) -> bool:
    for keyword in keywords:
        haystack = text if keyword == CODE_FENCE else lowered
        if keyword in haystack:
            return True
    return False


def extract_tags(raw_text: str) -> list[str]:
    """Return the tag names whose keyword family occurs in ``raw_text``."""
    lowered = raw_text.lower()
    return [tag for tag, keywords in TAG_KEYWORDS.items() if _matches(raw_text, lowered, keywords)]


def categorize(texts: list[str]) -> str:
    """Pick the first category whose keywords occur in the joined ``texts``."""
    joined = " ".join(texts).lower()
    for category, keywords in CATEGORY_KEYWORDS.items():
        if _matches(joined, joined, keywords):
            return category
    return DEFAULT_CATEGORY


def extract_key_topics(transcript: str) -> list[str]:
    """Return key topics found in ``transcript``, or the general topic when none match."""
    lowered = transcript.lower()
    topics = [
        topic for topic, keywords in TOPIC_KEYWORDS.items() if _matches(lowered, lowered, keywords)
    ]
    return topics or [DEFAULT_TOPIC]
