"""Public entry points: raw response in, ``Success`` or ``Failure`` out.

None of these functions raise. Every stage signals problems with
:class:`InterpretationError`, which is converted to a :class:`Failure` here.
``NoStructuredPayloadError`` never reaches the caller for use cases that
define a keyword fallback.
"""

from __future__ import annotations

import logging

from gemini_interpreter.config import (
    USE_CASE_PROFILES,
    ExtractionStrategy,
    TruncationPolicy,
    UseCase,
)
from gemini_interpreter.errors import InterpretationError, NoStructuredPayloadError
from gemini_interpreter.interpret.assembler import (
    assemble_chat,
    assemble_classification,
    assemble_sentiment,
    assemble_summary,
    enforce_truncation_policy,
)
from gemini_interpreter.interpret.content import extract_content
from gemini_interpreter.interpret.envelope import (
    RawResponse,
    ValidatedCandidate,
    parse_envelope,
    validate_envelope,
)
from gemini_interpreter.interpret.fallback import (
    fallback_classification,
    fallback_sentiment,
)
from gemini_interpreter.interpret.structured import extract_structured
from gemini_interpreter.models.envelope import ExtractedContent
from gemini_interpreter.models.payloads import ClassificationPayload, SentimentPayload
from gemini_interpreter.models.requests import SummaryStyle
from gemini_interpreter.models.results import (
    ChatResult,
    ClassificationResult,
    Failure,
    InterpretationContext,
    Result,
    SentimentResult,
    Success,
    SummaryResult,
)

log = logging.getLogger(__name__)


def _read_content(
    raw: RawResponse,
    use_case: UseCase,
    truncation_policy: TruncationPolicy | None,
) -> tuple[ExtractedContent, ValidatedCandidate]:
    policy = truncation_policy or USE_CASE_PROFILES[use_case].truncation_policy
    envelope = parse_envelope(raw)
    validated = validate_envelope(envelope)
    enforce_truncation_policy(validated, policy)
    return extract_content(envelope, validated), validated


def _failure(use_case: UseCase, exc: InterpretationError) -> Failure:
    log.warning("Interpretation [%s] failed with %s: %s", use_case, exc.code, exc.message)
    return Failure.from_error(exc)


def interpret_chat(
    raw: RawResponse,
    context: InterpretationContext | None = None,
    *,
    truncation_policy: TruncationPolicy | None = None,
) -> Result[ChatResult]:
    context = context or InterpretationContext()
    try:
        content, validated = _read_content(raw, UseCase.CHAT, truncation_policy)
    except InterpretationError as exc:
        return _failure(UseCase.CHAT, exc)
    return Success(assemble_chat(content, validated, context))


def interpret_summary(
    raw: RawResponse,
    context: InterpretationContext | None = None,
    *,
    style: SummaryStyle | None = None,
    truncation_policy: TruncationPolicy | None = None,
) -> Result[SummaryResult]:
    context = context or InterpretationContext()
    try:
        content, validated = _read_content(raw, UseCase.SUMMARY, truncation_policy)
    except InterpretationError as exc:
        return _failure(UseCase.SUMMARY, exc)
    return Success(assemble_summary(content, validated, context, style))


def interpret_sentiment(
    raw: RawResponse,
    context: InterpretationContext | None = None,
    *,
    truncation_policy: TruncationPolicy | None = None,
    strategy: ExtractionStrategy | None = None,
) -> Result[SentimentResult]:
    context = context or InterpretationContext()
    profile = USE_CASE_PROFILES[UseCase.SENTIMENT]
    try:
        content, validated = _read_content(raw, UseCase.SENTIMENT, truncation_policy)
    except InterpretationError as exc:
        return _failure(UseCase.SENTIMENT, exc)

    fallback_used = False
    try:
        payload = extract_structured(
            content.text,
            SentimentPayload,
            strategy=strategy or profile.extraction_strategy,
        )
    except NoStructuredPayloadError as exc:
        if not profile.has_fallback:
            return _failure(UseCase.SENTIMENT, exc)
        log.info("Sentiment payload unavailable (%s); using keyword fallback", exc.message)
        payload = fallback_sentiment(content.text)
        fallback_used = True

    return Success(
        assemble_sentiment(
            payload, content, validated, context, fallback_used=fallback_used
        )
    )


def interpret_classification(
    raw: RawResponse,
    context: InterpretationContext | None = None,
    *,
    truncation_policy: TruncationPolicy | None = None,
    strategy: ExtractionStrategy | None = None,
) -> Result[ClassificationResult]:
    context = context or InterpretationContext()
    profile = USE_CASE_PROFILES[UseCase.CLASSIFICATION]
    try:
        content, validated = _read_content(
            raw, UseCase.CLASSIFICATION, truncation_policy
        )
    except InterpretationError as exc:
        return _failure(UseCase.CLASSIFICATION, exc)

    fallback_used = False
    try:
        payload = extract_structured(
            content.text,
            ClassificationPayload,
            strategy=strategy or profile.extraction_strategy,
        )
    except NoStructuredPayloadError as exc:
        if not profile.has_fallback:
            return _failure(UseCase.CLASSIFICATION, exc)
        log.info(
            "Classification payload unavailable (%s); using keyword fallback",
            exc.message,
        )
        payload = fallback_classification(content.text, context.subject)
        fallback_used = True

    return Success(
        assemble_classification(
            payload, content, validated, context, fallback_used=fallback_used
        )
    )


INTERPRETERS = {
    UseCase.CHAT: interpret_chat,
    UseCase.SENTIMENT: interpret_sentiment,
    UseCase.SUMMARY: interpret_summary,
    UseCase.CLASSIFICATION: interpret_classification,
}
