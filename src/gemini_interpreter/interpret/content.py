"""Generated text and token usage extraction."""

from __future__ import annotations

import logging

from gemini_interpreter.errors import ErrorCode, InterpretationError
from gemini_interpreter.interpret.envelope import ValidatedCandidate
from gemini_interpreter.models.envelope import ExtractedContent, ResponseEnvelope

log = logging.getLogger(__name__)


def extract_token_usage(envelope: ResponseEnvelope) -> int:
    """Return ``usageMetadata.totalTokenCount``, or 0 when it is absent."""
    usage = envelope.usage_metadata
    if usage is None:
        return 0
    log.debug(
        "Token usage - prompt: %s, candidates: %s, total: %s",
        usage.prompt_token_count or 0,
        usage.candidates_token_count or 0,
        usage.total_token_count or 0,
    )
    return usage.total_token_count or 0


def extract_content(
    envelope: ResponseEnvelope,
    validated: ValidatedCandidate,
) -> ExtractedContent:
    parts = validated.candidate.parts
    if not parts:
        log.warning("Validation warning [content extraction]: candidate has no parts")
        raise InterpretationError(
            ErrorCode.EMPTY_CONTENT,
            "Nenhuma parte encontrada no conteúdo da resposta.",
        )

    text = parts[0].text or ""
    if not text.strip():
        raise InterpretationError(
            ErrorCode.EMPTY_CONTENT,
            "Nenhuma resposta válida gerada pela IA.",
        )

    log.debug("Extracted content: %d characters", len(text))
    return ExtractedContent(text=text, tokens_used=extract_token_usage(envelope))
