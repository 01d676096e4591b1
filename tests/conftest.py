"""Pytest configuration and fixtures.

Provides environment isolation and shared settings/context fixtures.
"""

from __future__ import annotations

import pytest

from gemini_interpreter.config import Settings
from gemini_interpreter.models.results import InterpretationContext
from tests.helpers import FIXED_TIME

_ENV_VARS = (
    "GEMINI_API_KEY",
    "GEMINI_MODEL",
    "GEMINI_BASE_URL",
    "GEMINI_TEMPERATURE",
    "GEMINI_MAX_TOKENS",
    "GEMINI_TIMEOUT_SECONDS",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment variables out of every test."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings() -> Settings:
    return Settings(gemini_api_key="test-api-key", gemini_model="gemini-pro")


@pytest.fixture
def context() -> InterpretationContext:
    return InterpretationContext(
        subject="Cadeira", model="gemini-pro", timestamp=FIXED_TIME
    )
