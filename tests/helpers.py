"""Builders and test doubles shared across test modules."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from gemini_interpreter.config import GenerationConfig
from gemini_interpreter.llm.base import GenerationClient, LLMError

FIXED_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


def make_envelope(
    text: str | None = "ok",
    *,
    finish_reason: str | None = "STOP",
    total_tokens: int | None = 42,
) -> dict[str, Any]:
    """Build a raw ``generateContent`` document with a single candidate."""
    candidate: dict[str, Any] = {"content": {"parts": [], "role": "model"}}
    if text is not None:
        candidate["content"]["parts"].append({"text": text})
    if finish_reason is not None:
        candidate["finishReason"] = finish_reason
    envelope: dict[str, Any] = {"candidates": [candidate]}
    if total_tokens is not None:
        envelope["usageMetadata"] = {
            "promptTokenCount": 10,
            "candidatesTokenCount": max(total_tokens - 10, 0),
            "totalTokenCount": total_tokens,
        }
    return envelope


def make_raw(text: str | None = "ok", **kwargs: Any) -> str:
    return json.dumps(make_envelope(text, **kwargs))


@dataclass
class FakeGenerationClient(GenerationClient):
    """Generation client double that returns queued raw responses."""

    responses: list[str] = field(default_factory=list)
    error: LLMError | None = None
    prompts: list[str] = field(default_factory=list)
    configs: list[GenerationConfig] = field(default_factory=list)

    def generate(self, prompt: str, config: GenerationConfig) -> str:
        self.prompts.append(prompt)
        self.configs.append(config)
        if self.error is not None:
            raise self.error
        return self.responses.pop(0)
