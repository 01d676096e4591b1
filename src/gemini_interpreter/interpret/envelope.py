"""Envelope parsing and finish-reason classification."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass

from pydantic import ValidationError

from gemini_interpreter.errors import ErrorCode, InterpretationError
from gemini_interpreter.models.envelope import Candidate, FinishReason, ResponseEnvelope

log = logging.getLogger(__name__)

RawResponse = str | bytes | Mapping[str, object]

_BLOCKING_REASONS: dict[str, tuple[ErrorCode, str]] = {
    FinishReason.SAFETY: (
        ErrorCode.SAFETY_BLOCKED,
        "Resposta bloqueada pelos filtros de segurança.",
    ),
    FinishReason.RECITATION: (
        ErrorCode.RECITATION_BLOCKED,
        "Resposta bloqueada por possível recitação de conteúdo.",
    ),
    FinishReason.OTHER: (
        ErrorCode.UNKNOWN_TERMINATION,
        "Resposta finalizada por motivo desconhecido.",
    ),
}


@dataclass(frozen=True)
class ValidatedCandidate:
    """First candidate of an envelope that is safe to read content from."""

    candidate: Candidate
    finish_reason: str
    truncated: bool = False


def parse_envelope(raw: RawResponse) -> ResponseEnvelope:
    """Parse raw response text (or an already decoded document) into an envelope."""
    document: object = raw
    if isinstance(raw, (str, bytes)):
        try:
            document = json.loads(raw)
        except (ValueError, RecursionError) as exc:
            raise InterpretationError(
                ErrorCode.MALFORMED_ENVELOPE,
                "Resposta da API não é um JSON válido.",
            ) from exc

    if not isinstance(document, Mapping):
        raise InterpretationError(
            ErrorCode.MALFORMED_ENVELOPE,
            "Resposta da API não é um objeto JSON.",
        )

    try:
        return ResponseEnvelope.model_validate(dict(document))
    except ValidationError as exc:
        log.debug("Envelope failed validation: %s", exc)
        raise InterpretationError(
            ErrorCode.MALFORMED_ENVELOPE,
            "Resposta da API possui estrutura inesperada.",
        ) from exc


def validate_envelope(envelope: ResponseEnvelope) -> ValidatedCandidate:
    """Pick the first candidate and classify why generation stopped.

    Blocked or unexplained terminations raise :class:`InterpretationError`;
    ``MAX_TOKENS`` is reported through ``truncated`` so call sites can decide.
    """
    if not envelope.candidates:
        message = "Nenhum candidato encontrado na resposta da API."
        feedback = envelope.prompt_feedback
        if feedback is not None and feedback.block_reason:
            message = f"{message} Prompt bloqueado: {feedback.block_reason}."
        log.warning("Validation warning [content extraction]: no candidates in response")
        raise InterpretationError(ErrorCode.NO_CANDIDATES, message)

    candidate = envelope.candidates[0]
    finish_reason = (candidate.finish_reason or "").strip().upper()

    if finish_reason in _BLOCKING_REASONS:
        code, message = _BLOCKING_REASONS[finish_reason]
        log.warning("Validation warning [response validation]: %s", finish_reason)
        raise InterpretationError(code, message)

    if finish_reason == FinishReason.MAX_TOKENS:
        log.warning(
            "Validation warning [response validation]: output truncated by token limit"
        )
        return ValidatedCandidate(candidate, finish_reason, truncated=True)

    if finish_reason and finish_reason != FinishReason.STOP:
        log.warning(
            "Validation warning [response validation]: unexpected finish reason %s",
            finish_reason,
        )
    return ValidatedCandidate(candidate, finish_reason)
