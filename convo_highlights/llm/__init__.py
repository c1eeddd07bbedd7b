"""Classification oracle client and prompt chains."""

from .client import ClassificationOracle, OllamaOracle, OracleError, create_llm_client, create_oracle
from .chains import (
    HighlightRefinement,
    OracleAnalysis,
    build_classification_messages,
    build_enhancement_messages,
    format_transcript,
    parse_json_response,
    parse_oracle_analysis,
    parse_refinements,
)

__all__ = [
    "ClassificationOracle",
    "OllamaOracle",
    "OracleError",
    "create_llm_client",
    "create_oracle",
    "OracleAnalysis",
    "HighlightRefinement",
    "format_transcript",
    "build_classification_messages",
    "build_enhancement_messages",
    "parse_json_response",
    "parse_oracle_analysis",
    "parse_refinements",
]
