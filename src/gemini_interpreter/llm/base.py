"""Provider-independent interface of the generation client."""

from __future__ import annotations

from abc import ABC, abstractmethod

from gemini_interpreter.config import GenerationConfig


class LLMError(RuntimeError):
    """Raised when the generation request fails before a response is received."""


class GenerationClient(ABC):
    """Sends one prompt and returns the raw response document as text."""

    @abstractmethod
    def generate(self, prompt: str, config: GenerationConfig) -> str:
        """Return the raw, undecoded response body for ``prompt``."""
