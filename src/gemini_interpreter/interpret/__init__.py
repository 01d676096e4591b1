"""Response interpretation pipeline."""

from gemini_interpreter.interpret.envelope import (
    ValidatedCandidate,
    parse_envelope,
    validate_envelope,
)
from gemini_interpreter.interpret.content import extract_content, extract_token_usage
from gemini_interpreter.interpret.structured import (
    extract_structured,
    find_balanced_object,
    find_flat_object,
)
from gemini_interpreter.interpret.fallback import (
    fallback_classification,
    fallback_sentiment,
)
from gemini_interpreter.interpret.pipeline import (
    INTERPRETERS,
    interpret_chat,
    interpret_classification,
    interpret_sentiment,
    interpret_summary,
)

__all__ = [
    "ValidatedCandidate",
    "parse_envelope",
    "validate_envelope",
    "extract_content",
    "extract_token_usage",
    "extract_structured",
    "find_balanced_object",
    "find_flat_object",
    "fallback_classification",
    "fallback_sentiment",
    "INTERPRETERS",
    "interpret_chat",
    "interpret_classification",
    "interpret_sentiment",
    "interpret_summary",
]
