"""Prompt builders, one template per use case."""

from __future__ import annotations

from collections.abc import Callable

from pydantic import BaseModel

from gemini_interpreter.config import UseCase
from gemini_interpreter.models.requests import (
    ChatRequest,
    ClassificationRequest,
    SentimentRequest,
    SummaryRequest,
    SummaryStyle,
)


class PromptBuildError(RuntimeError):
    """Raised when a prompt cannot be built for the given request."""


_SUMMARY_INSTRUCTIONS: dict[SummaryStyle, str] = {
    SummaryStyle.CONCISE: "Crie um resumo conciso e direto",
    SummaryStyle.DETAILED: "Crie um resumo detalhado e explicativo",
    SummaryStyle.BULLET_POINTS: "Crie um resumo em formato de bullet points (•)",
}

_SENTIMENT_TEMPLATE = """\
Analise o sentimento do seguinte texto e responda EXATAMENTE no formato JSON:

{{
  "sentiment": "POSITIVE|NEGATIVE|NEUTRAL",
  "confidence": 0.85,
  "explanation": "Breve explicação do por que este sentimento foi identificado"
}}

Texto para análise:
"{text}"

Responda apenas com o JSON, sem texto adicional.
"""

_SUMMARY_TEMPLATE = """\
{instruction} do seguinte texto em no máximo {max_sentences} sentenças.

Mantenha as informações mais importantes e o contexto principal.

Texto original:
{text}
"""

_CLASSIFICATION_TEMPLATE = """\
Classifique por TANGIBILIDADE e responda em JSON:

{{
  "tangibilityType": "TANGIBLE|INTANGIBLE|HYBRID",
  "tangibilitySubtype": "DURABLE|NON_DURABLE|CONSUMABLE|SERVICE|DIGITAL|EXPERIENCE|KNOWLEDGE|MIXED",
  "productPriceCategory": "VERY_HIGH_COST|HIGH_COST|MEDIUM_COST|LOW_COST",
  "lifeCycle": "SHORT|MID|LONG",
  "confidence": 0.95,
  "explanation": "Breve explicação da classificação",
  "characteristics": ["característica 1", "característica 2"]
}}

TIPOS:
TANGIBLE: DURABLE (carros, móveis), NON_DURABLE (roupas), CONSUMABLE (alimentos)
INTANGIBLE: SERVICE (consultoria), DIGITAL (software), EXPERIENCE (viagens), KNOWLEDGE (patentes)
HYBRID: MIXED (combinação)

PREÇO: VERY_HIGH_COST (>100k), HIGH_COST (>50k), MEDIUM_COST (>1k), LOW_COST (≤1k)
VIDA ÚTIL: SHORT (curta), MID (média), LONG (longa)

Produto: {product_info}

Responda apenas o JSON.
"""


def _require_text(value: str | None, label: str) -> str:
    normalized = (value or "").strip()
    if not normalized:
        raise PromptBuildError(f"{label} cannot be empty.")
    return normalized


def build_chat_prompt(request: ChatRequest) -> str:
    message = _require_text(request.message, "Message")
    context = (request.context or "").strip()
    prompt = ""
    if context:
        prompt += f"Contexto: {context}\n\n"
    return prompt + f"Pergunta: {message}"


def build_sentiment_prompt(request: SentimentRequest) -> str:
    return _SENTIMENT_TEMPLATE.format(text=_require_text(request.text, "Text"))


def build_summary_prompt(request: SummaryRequest) -> str:
    return _SUMMARY_TEMPLATE.format(
        instruction=_SUMMARY_INSTRUCTIONS[request.style],
        max_sentences=request.max_sentences,
        text=_require_text(request.text, "Text"),
    )


def build_classification_prompt(request: ClassificationRequest) -> str:
    lines = [f"Nome: {_require_text(request.product_name, 'Product name')}"]
    if request.description and request.description.strip():
        lines.append(f"Descrição: {request.description.strip()}")
    if request.category and request.category.strip():
        lines.append(f"Categoria: {request.category.strip()}")
    return _CLASSIFICATION_TEMPLATE.format(product_info="\n".join(lines))


_BUILDERS: dict[UseCase, tuple[type[BaseModel], Callable[..., str]]] = {
    UseCase.CHAT: (ChatRequest, build_chat_prompt),
    UseCase.SENTIMENT: (SentimentRequest, build_sentiment_prompt),
    UseCase.SUMMARY: (SummaryRequest, build_summary_prompt),
    UseCase.CLASSIFICATION: (ClassificationRequest, build_classification_prompt),
}


def build_prompt(use_case: UseCase, request: BaseModel) -> str:
    """Build the prompt text for ``request`` using the template of ``use_case``."""
    request_type, builder = _BUILDERS[use_case]
    if not isinstance(request, request_type):
        raise PromptBuildError(
            f"Use case '{use_case}' expects {request_type.__name__}, "
            f"got {type(request).__name__}."
        )
    return builder(request)
