"""Keyword heuristics used when a completion carries no usable JSON payload.

Both classifiers are total: any input, including ``None``, yields a payload.
"""

from __future__ import annotations

from gemini_interpreter.models.payloads import (
    NOT_APPLICABLE,
    ClassificationPayload,
    SentimentLabel,
    SentimentPayload,
    TangibilityType,
)

POSITIVE_KEYWORDS = ("positiv", "bom", "feliz")
NEGATIVE_KEYWORDS = ("negativ", "ruim", "triste")

TANGIBLE_KEYWORDS = (
    "físico",
    "material",
    "objeto",
    "produto",
    "item",
    "mercadoria",
    "equipamento",
    "aparelho",
    "dispositivo",
    "máquina",
)
INTANGIBLE_KEYWORDS = (
    "serviço",
    "consultoria",
    "software",
    "aplicativo",
    "curso",
    "experiência",
    "conhecimento",
    "licença",
    "digital",
)


def _lowered(value: object) -> str:
    if value is None:
        return ""
    return str(value).lower()


def _contains_any(haystacks: tuple[str, ...], keywords: tuple[str, ...]) -> bool:
    return any(keyword in haystack for keyword in keywords for haystack in haystacks)


def fallback_sentiment(text: object) -> SentimentPayload:
    lowered = _lowered(text)
    if _contains_any((lowered,), POSITIVE_KEYWORDS):
        return SentimentPayload(
            sentiment=SentimentLabel.POSITIVE,
            confidence=0.7,
            explanation="Análise baseada em palavras-chave positivas",
        )
    if _contains_any((lowered,), NEGATIVE_KEYWORDS):
        return SentimentPayload(
            sentiment=SentimentLabel.NEGATIVE,
            confidence=0.7,
            explanation="Análise baseada em palavras-chave negativas",
        )
    return SentimentPayload(
        sentiment=SentimentLabel.NEUTRAL,
        confidence=0.6,
        explanation="Sentimento neutro identificado (análise baseada em palavras-chave)",
    )


def _classification(
    tangibility_type: TangibilityType,
    subtype: str,
    confidence: float,
    explanation: str,
    characteristic: str,
) -> ClassificationPayload:
    return ClassificationPayload(
        tangibility_type=tangibility_type,
        tangibility_subtype=subtype,
        confidence=confidence,
        explanation=explanation,
        characteristics=[characteristic],
        price_category=NOT_APPLICABLE,
        life_cycle=NOT_APPLICABLE,
    )


def fallback_classification(text: object, product_name: object) -> ClassificationPayload:
    haystacks = (_lowered(text), _lowered(product_name))
    has_tangible = _contains_any(haystacks, TANGIBLE_KEYWORDS)
    has_intangible = _contains_any(haystacks, INTANGIBLE_KEYWORDS)

    if has_tangible and has_intangible:
        return _classification(
            TangibilityType.HYBRID,
            "MIXED",
            0.6,
            "Classificação baseada em análise de palavras-chave - produto híbrido",
            "Elementos tangíveis e intangíveis identificados",
        )
    if has_tangible:
        return _classification(
            TangibilityType.TANGIBLE,
            "NON_DURABLE",
            0.7,
            "Classificação baseada em análise de palavras-chave - produto físico",
            "Características físicas identificadas",
        )
    if has_intangible:
        return _classification(
            TangibilityType.INTANGIBLE,
            "SERVICE",
            0.7,
            "Classificação baseada em análise de palavras-chave - produto intangível",
            "Características de serviço/digital identificadas",
        )
    return _classification(
        TangibilityType.TANGIBLE,
        "NON_DURABLE",
        0.5,
        "Classificação padrão (palavras-chave) - assumindo produto tangível",
        "Classificação incerta",
    )
