"""Generation clients and factory helpers."""

from gemini_interpreter.config import Settings
from gemini_interpreter.llm.base import GenerationClient, LLMError
from gemini_interpreter.llm.gemini_adapter import GeminiAdapter, build_request_body


def create_generation_client(settings: Settings) -> GenerationClient:
    """Create default generation client for current settings."""
    return GeminiAdapter(
        base_url=settings.gemini_base_url,
        timeout_seconds=settings.timeout_seconds,
    )


__all__ = [
    "GeminiAdapter",
    "GenerationClient",
    "LLMError",
    "build_request_body",
    "create_generation_client",
]
