from .generator import (
    SparkGenerator,
    SparkSuggestion,
    FALLBACK_SUGGESTION,
    parse_effort_minutes,
    parse_suggestion,
    strip_code_fences,
)
from .prompts import PromptTemplates

__all__ = [
    "SparkGenerator",
    "SparkSuggestion",
    "FALLBACK_SUGGESTION",
    "parse_effort_minutes",
    "parse_suggestion",
    "strip_code_fences",
    "PromptTemplates",
]
