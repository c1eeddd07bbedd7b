"""Classification and end-to-end analysis.

Usage:
    from convo_highlights.pipeline import analyze_text

    report = analyze_text(open("chat.txt").read())
    print(f"Found {len(report.analysis.highlights)} highlights")
"""

from .classifier import HighlightClassifier, contents_by_category, fallback_summary
from .orchestrator import aanalyze_text, analyze_text

__all__ = [
    "HighlightClassifier",
    "fallback_summary",
    "contents_by_category",
    "analyze_text",
    "aanalyze_text",
]
