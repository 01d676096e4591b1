"""Assemble payloads and request metadata into final results."""

from __future__ import annotations

from datetime import UTC, datetime

from gemini_interpreter.config import TruncationPolicy
from gemini_interpreter.errors import ErrorCode, InterpretationError
from gemini_interpreter.interpret.envelope import ValidatedCandidate
from gemini_interpreter.models.envelope import ExtractedContent
from gemini_interpreter.models.payloads import ClassificationPayload, SentimentPayload
from gemini_interpreter.models.requests import SummaryStyle
from gemini_interpreter.models.results import (
    ChatResult,
    ClassificationResult,
    InterpretationContext,
    SentimentResult,
    SummaryResult,
)

_TRUNCATION_MESSAGE = "Resposta cortada por limite de tokens. Tente um texto menor."


def enforce_truncation_policy(
    validated: ValidatedCandidate,
    policy: TruncationPolicy,
) -> None:
    """Raise ``TRUNCATED_BY_LENGTH`` when a truncated answer must be rejected."""
    if validated.truncated and policy is TruncationPolicy.REJECT:
        raise InterpretationError(ErrorCode.TRUNCATED_BY_LENGTH, _TRUNCATION_MESSAGE)


def _timestamp(context: InterpretationContext) -> datetime:
    if context.timestamp is not None:
        return context.timestamp
    return datetime.now(tz=UTC)


def assemble_chat(
    content: ExtractedContent,
    validated: ValidatedCandidate,
    context: InterpretationContext,
) -> ChatResult:
    return ChatResult(
        response=content.text,
        model=context.model,
        tokens_used=content.tokens_used,
        truncated=validated.truncated,
        timestamp=_timestamp(context),
    )


def assemble_summary(
    content: ExtractedContent,
    validated: ValidatedCandidate,
    context: InterpretationContext,
    style: SummaryStyle | None = None,
) -> SummaryResult:
    return SummaryResult(
        summary=content.text,
        model=context.model,
        tokens_used=content.tokens_used,
        style=style,
        truncated=validated.truncated,
        timestamp=_timestamp(context),
    )


def assemble_sentiment(
    payload: SentimentPayload,
    content: ExtractedContent,
    validated: ValidatedCandidate,
    context: InterpretationContext,
    *,
    fallback_used: bool,
) -> SentimentResult:
    return SentimentResult(
        sentiment=payload.sentiment,
        confidence=payload.confidence,
        explanation=payload.explanation,
        original_text=context.subject,
        tokens_used=content.tokens_used,
        fallback_used=fallback_used,
        truncated=validated.truncated,
        timestamp=_timestamp(context),
    )


def assemble_classification(
    payload: ClassificationPayload,
    content: ExtractedContent,
    validated: ValidatedCandidate,
    context: InterpretationContext,
    *,
    fallback_used: bool,
) -> ClassificationResult:
    return ClassificationResult(
        product_name=context.subject,
        tangibility_type=payload.tangibility_type,
        tangibility_subtype=payload.tangibility_subtype,
        confidence=payload.confidence,
        explanation=payload.explanation,
        characteristics=tuple(payload.characteristics),
        price_category=payload.price_category,
        life_cycle=payload.life_cycle,
        tokens_used=content.tokens_used,
        fallback_used=fallback_used,
        truncated=validated.truncated,
        timestamp=_timestamp(context),
    )
