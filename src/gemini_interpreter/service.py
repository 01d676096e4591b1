"""Orchestrates prompt building, generation and interpretation per use case."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from datetime import UTC, datetime

from pydantic import BaseModel

from gemini_interpreter.config import InvalidConfigError, Settings, UseCase
from gemini_interpreter.errors import ErrorCode
from gemini_interpreter.interpret.pipeline import (
    interpret_chat,
    interpret_classification,
    interpret_sentiment,
    interpret_summary,
)
from gemini_interpreter.llm.base import GenerationClient, LLMError
from gemini_interpreter.models.requests import (
    ChatRequest,
    ClassificationRequest,
    SentimentRequest,
    SummaryRequest,
)
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
from gemini_interpreter.prompts.templates import build_prompt

log = logging.getLogger(__name__)

_OPERATION_NAMES = {
    UseCase.CHAT: "message processing",
    UseCase.SENTIMENT: "sentiment analysis",
    UseCase.SUMMARY: "text summary",
    UseCase.CLASSIFICATION: "product classification",
}


def _excerpt(text: str, limit: int = 50) -> str:
    return text[:limit]


class GenerationService:
    """One method per use case; every method returns a ``Result``."""

    def __init__(
        self,
        client: GenerationClient,
        settings: Settings,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._client = client
        self._settings = settings
        self._clock = clock or (lambda: datetime.now(tz=UTC))

    def chat(self, request: ChatRequest) -> Result[ChatResult]:
        return self._run(
            UseCase.CHAT,
            request,
            subject=request.message,
            details=_excerpt(request.message),
            interpret=interpret_chat,
        )

    def analyze_sentiment(self, request: SentimentRequest) -> Result[SentimentResult]:
        return self._run(
            UseCase.SENTIMENT,
            request,
            subject=request.text,
            details=f"Text: {_excerpt(request.text)}",
            interpret=interpret_sentiment,
        )

    def summarize(self, request: SummaryRequest) -> Result[SummaryResult]:
        return self._run(
            UseCase.SUMMARY,
            request,
            subject=request.text,
            details=f"Text with {len(request.text)} characters",
            interpret=lambda raw, context: interpret_summary(
                raw, context, style=request.style
            ),
        )

    def classify_product(
        self, request: ClassificationRequest
    ) -> Result[ClassificationResult]:
        return self._run(
            UseCase.CLASSIFICATION,
            request,
            subject=request.product_name,
            details=f"Product: {request.product_name}",
            interpret=interpret_classification,
        )

    def _run(
        self,
        use_case: UseCase,
        request: BaseModel,
        *,
        subject: str,
        details: str,
        interpret: Callable[[str, InterpretationContext], Result],
    ) -> Result:
        operation = _OPERATION_NAMES[use_case]
        log.info("Starting operation [%s]: %s", operation, details)

        try:
            config = self._settings.generation_config(use_case)
        except InvalidConfigError as exc:
            log.error("Operation [%s] has invalid configuration: %s", operation, exc)
            return Failure(ErrorCode.INVALID_CONFIG, "Configuração de geração inválida.")

        prompt = build_prompt(use_case, request)
        started = time.perf_counter()
        try:
            raw = self._client.generate(prompt, config)
        except LLMError as exc:
            log.error("Error in operation [%s]: %s", operation, exc)
            return Failure(ErrorCode.GENERATION_FAILED, "Erro ao chamar a API de geração.")

        context = InterpretationContext(
            subject=subject,
            model=config.model,
            timestamp=self._clock(),
        )
        result = interpret(raw, context)
        if isinstance(result, Success):
            duration_ms = (time.perf_counter() - started) * 1000
            log.info(
                "Operation [%s] succeeded in %.0fms, tokens used: %d",
                operation,
                duration_ms,
                result.value.tokens_used,
            )
        return result
