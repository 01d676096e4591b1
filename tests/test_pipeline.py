from __future__ import annotations

import json
from datetime import UTC, datetime

import pytest

from gemini_interpreter.config import ExtractionStrategy, TruncationPolicy
from gemini_interpreter.errors import ErrorCode
from gemini_interpreter.interpret import pipeline
from gemini_interpreter.interpret.pipeline import (
    interpret_chat,
    interpret_classification,
    interpret_sentiment,
    interpret_summary,
)
from gemini_interpreter.models.payloads import (
    NOT_APPLICABLE,
    SentimentLabel,
    TangibilityType,
)
from gemini_interpreter.models.requests import SummaryStyle
from gemini_interpreter.models.results import (
    Failure,
    InterpretationContext,
    Success,
)
from tests.helpers import FIXED_TIME, make_envelope, make_raw

pytestmark = pytest.mark.unit

ALL_INTERPRETERS = [
    interpret_chat,
    interpret_summary,
    interpret_sentiment,
    interpret_classification,
]


def test_chat_success(context: InterpretationContext) -> None:
    result = interpret_chat(make_raw("Olá! Como posso ajudar?", total_tokens=25), context)

    assert isinstance(result, Success)
    assert result.value.response == "Olá! Como posso ajudar?"
    assert result.value.model == "gemini-pro"
    assert result.value.tokens_used == 25
    assert result.value.truncated is False
    assert result.value.timestamp == FIXED_TIME


def test_chat_accepts_truncated_output_by_default() -> None:
    result = interpret_chat(make_raw("resposta parcial", finish_reason="MAX_TOKENS"))

    assert isinstance(result, Success)
    assert result.value.truncated is True


def test_chat_truncation_policy_can_be_overridden() -> None:
    result = interpret_chat(
        make_raw("parcial", finish_reason="MAX_TOKENS"),
        truncation_policy=TruncationPolicy.REJECT,
    )

    assert isinstance(result, Failure)
    assert result.code is ErrorCode.TRUNCATED_BY_LENGTH


def test_summary_rejects_truncated_output() -> None:
    result = interpret_summary(make_raw("Resumo cortado", finish_reason="MAX_TOKENS"))

    assert isinstance(result, Failure)
    assert result.code is ErrorCode.TRUNCATED_BY_LENGTH


def test_summary_truncation_can_be_accepted() -> None:
    result = interpret_summary(
        make_raw("Resumo cortado", finish_reason="MAX_TOKENS"),
        truncation_policy=TruncationPolicy.ACCEPT,
    )

    assert isinstance(result, Success)
    assert result.value.truncated is True


def test_summary_success_keeps_style(context: InterpretationContext) -> None:
    result = interpret_summary(
        make_raw("• ponto um\n• ponto dois"), context, style=SummaryStyle.BULLET_POINTS
    )

    assert isinstance(result, Success)
    assert result.value.summary == "• ponto um\n• ponto dois"
    assert result.value.style is SummaryStyle.BULLET_POINTS


def test_sentiment_structured_payload() -> None:
    text = 'Relatório: {"sentiment":"POSITIVE","confidence":0.9,"explanation":"ok"}'
    context = InterpretationContext(subject="Adorei o produto", timestamp=FIXED_TIME)

    result = interpret_sentiment(make_raw(text), context)

    assert isinstance(result, Success)
    assert result.value.sentiment is SentimentLabel.POSITIVE
    assert result.value.confidence == 0.9
    assert result.value.explanation == "ok"
    assert result.value.original_text == "Adorei o produto"
    assert result.value.fallback_used is False


def test_sentiment_falls_back_without_payload() -> None:
    result = interpret_sentiment(make_raw("não há dados suficientes"))

    assert isinstance(result, Success)
    assert result.value.sentiment is SentimentLabel.NEUTRAL
    assert result.value.confidence == 0.6
    assert result.value.fallback_used is True


def test_sentiment_falls_back_on_invalid_json() -> None:
    result = interpret_sentiment(make_raw("{sentimento: positivo}"))

    assert isinstance(result, Success)
    assert result.value.sentiment is SentimentLabel.POSITIVE
    assert result.value.fallback_used is True


def test_safety_block_never_invokes_fallback(monkeypatch: pytest.MonkeyPatch) -> None:
    def _unexpected(*args: object) -> None:
        raise AssertionError("fallback must not run")

    monkeypatch.setattr(pipeline, "fallback_sentiment", _unexpected)
    monkeypatch.setattr(pipeline, "fallback_classification", _unexpected)

    for interpret in (interpret_sentiment, interpret_classification):
        result = interpret(make_raw("bom produto físico", finish_reason="SAFETY"))
        assert isinstance(result, Failure)
        assert result.code is ErrorCode.SAFETY_BLOCKED


def test_classification_structured_payload(context: InterpretationContext) -> None:
    text = json.dumps(
        {
            "tangibilityType": "TANGIBLE",
            "tangibilitySubtype": "DURABLE",
            "productPriceCategory": "LOW_COST",
            "lifeCycle": "LONG",
            "confidence": 0.95,
            "explanation": "Móvel de uso prolongado",
            "characteristics": ["físico", "durável"],
        }
    )

    result = interpret_classification(make_raw(f"Aqui está:\n{text}"), context)

    assert isinstance(result, Success)
    value = result.value
    assert value.product_name == "Cadeira"
    assert value.tangibility_type is TangibilityType.TANGIBLE
    assert value.tangibility_subtype == "DURABLE"
    assert value.price_category == "LOW_COST"
    assert value.life_cycle == "LONG"
    assert value.characteristics == ("físico", "durável")
    assert value.fallback_used is False


def test_classification_fallback(context: InterpretationContext) -> None:
    result = interpret_classification(make_raw("Trata-se de um produto físico"), context)

    assert isinstance(result, Success)
    value = result.value
    assert value.tangibility_type is TangibilityType.TANGIBLE
    assert value.tangibility_subtype == "NON_DURABLE"
    assert value.confidence == 0.7
    assert value.price_category == NOT_APPLICABLE
    assert value.life_cycle == NOT_APPLICABLE
    assert value.fallback_used is True


def test_classification_rejects_truncated_output(context: InterpretationContext) -> None:
    result = interpret_classification(
        make_raw('{"tangibilityType": "TANG', finish_reason="MAX_TOKENS"), context
    )

    assert isinstance(result, Failure)
    assert result.code is ErrorCode.TRUNCATED_BY_LENGTH


def test_classification_balanced_strategy(context: InterpretationContext) -> None:
    text = '{"tangibilityType": "HYBRID", "meta": {"k": 1}, "confidence": 0.8}'

    legacy = interpret_classification(make_raw(text), context)
    balanced = interpret_classification(
        make_raw(text), context, strategy=ExtractionStrategy.BALANCED
    )

    assert isinstance(legacy, Success) and legacy.value.fallback_used is True
    assert isinstance(balanced, Success) and balanced.value.fallback_used is False
    assert balanced.value.tangibility_type is TangibilityType.HYBRID


@pytest.mark.parametrize("interpret", ALL_INTERPRETERS)
@pytest.mark.parametrize(
    ("raw", "code"),
    [
        ("<html>502</html>", ErrorCode.MALFORMED_ENVELOPE),
        ('{"candidates": []}', ErrorCode.NO_CANDIDATES),
        (make_raw("x", finish_reason="RECITATION"), ErrorCode.RECITATION_BLOCKED),
        (make_raw("x", finish_reason="OTHER"), ErrorCode.UNKNOWN_TERMINATION),
        (make_raw("   "), ErrorCode.EMPTY_CONTENT),
    ],
)
def test_failures_are_returned_not_raised(interpret, raw: str, code: ErrorCode) -> None:
    result = interpret(raw)

    assert isinstance(result, Failure)
    assert result.code is code
    assert result.message


@pytest.mark.parametrize("interpret", ALL_INTERPRETERS)
def test_rerunning_yields_equal_results(interpret) -> None:
    raw = make_raw('{"sentiment": "NEGATIVE", "tangibilityType": "INTANGIBLE"}')
    first = interpret(raw, InterpretationContext(subject="s"))
    second = interpret(
        raw,
        InterpretationContext(subject="s", timestamp=datetime(2000, 1, 1, tzinfo=UTC)),
    )

    assert first == second


def test_pipeline_accepts_decoded_documents() -> None:
    result = interpret_chat(make_envelope("direto do dicionário"))

    assert isinstance(result, Success)
    assert result.value.response == "direto do dicionário"


def test_oversized_confidence_is_clamped() -> None:
    text = '{"sentiment":"POSITIVE","confidence":' + "9" * 400 + "}"

    result = interpret_sentiment(make_raw(text))

    assert isinstance(result, Success)
    assert result.value.sentiment is SentimentLabel.POSITIVE
    assert result.value.confidence == 1.0
    assert result.value.fallback_used is False


def test_unparseable_integer_in_payload_falls_back() -> None:
    text = '{"sentiment":"POSITIVE","confidence":' + "9" * 5000 + "} bom"

    result = interpret_sentiment(make_raw(text))

    assert isinstance(result, Success)
    assert result.value.sentiment is SentimentLabel.POSITIVE
    assert result.value.fallback_used is True


@pytest.mark.parametrize("interpret", ALL_INTERPRETERS)
@pytest.mark.parametrize(
    "raw",
    [
        '{"candidates": [], "x": ' + "1" * 5000 + "}",
        "[" * 200000 + "]" * 200000,
    ],
    ids=["huge-integer", "deep-nesting"],
)
def test_pathological_envelopes_are_malformed(interpret, raw: str) -> None:
    result = interpret(raw)

    assert isinstance(result, Failure)
    assert result.code is ErrorCode.MALFORMED_ENVELOPE


def test_results_and_context_are_slotted(context: InterpretationContext) -> None:
    result = interpret_chat(make_raw("ok"), context)

    assert isinstance(result, Success)
    assert not hasattr(context, "__dict__")
    assert not hasattr(result.value, "__dict__")
