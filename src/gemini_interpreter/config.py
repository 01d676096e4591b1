"""Application configuration loading and validation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SecretStr,
    ValidationError,
    field_validator,
)

from gemini_interpreter.errors import ErrorCode

DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


class ConfigError(ValueError):
    """Raised when configuration cannot be loaded safely."""


class InvalidConfigError(ConfigError):
    """Raised when a generation config violates its invariants."""

    code = ErrorCode.INVALID_CONFIG

    def __init__(self, message: str, fields: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.fields = fields


def _validation_messages(exc: ValidationError) -> tuple[list[str], tuple[str, ...]]:
    messages = []
    fields: list[str] = []
    for err in exc.errors():
        field = ".".join(str(item) for item in err["loc"])
        messages.append(f"- {field}: {err['msg']}")
        if field not in fields:
            fields.append(field)
    return messages, tuple(fields)


class GenerationConfig(BaseModel):
    """Validated, immutable generation parameters for one API call."""

    model_config = ConfigDict(frozen=True)

    temperature: float = Field(ge=0.0, le=1.0)
    max_tokens: int = Field(gt=0)
    model: str
    credential: SecretStr

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            messages, fields = _validation_messages(exc)
            raise InvalidConfigError(
                "Invalid generation config:\n" + "\n".join(messages),
                fields=fields,
            ) from exc

    @field_validator("model", "credential", mode="before")
    @classmethod
    def validate_non_blank(cls, value: object) -> object:
        if isinstance(value, SecretStr):
            value = value.get_secret_value()
        if value is None:
            raise ValueError("value cannot be empty.")
        if isinstance(value, str):
            normalized = value.strip()
            if not normalized:
                raise ValueError("value cannot be empty.")
            return normalized
        return value


class UseCase(StrEnum):
    CHAT = "chat"
    SENTIMENT = "sentiment"
    SUMMARY = "summary"
    CLASSIFICATION = "classification"


class TruncationPolicy(StrEnum):
    """What to do with a completion that stopped at the output token limit."""

    ACCEPT = "accept"
    REJECT = "reject"


class ExtractionStrategy(StrEnum):
    """How the embedded JSON object is located inside generated text."""

    FIRST_FLAT_OBJECT = "first-flat-object"
    BALANCED = "balanced"


@dataclass(frozen=True)
class UseCaseProfile:
    """Per-use-case generation and interpretation parameters.

    ``temperature`` and ``max_tokens`` of ``None`` mean "use the settings default".
    """

    temperature: float | None
    max_tokens: int | None
    has_fallback: bool
    truncation_policy: TruncationPolicy
    extraction_strategy: ExtractionStrategy = ExtractionStrategy.FIRST_FLAT_OBJECT


USE_CASE_PROFILES: dict[UseCase, UseCaseProfile] = {
    UseCase.CHAT: UseCaseProfile(
        temperature=None,
        max_tokens=None,
        has_fallback=False,
        truncation_policy=TruncationPolicy.ACCEPT,
    ),
    UseCase.SENTIMENT: UseCaseProfile(
        temperature=0.1,
        max_tokens=500,
        has_fallback=True,
        truncation_policy=TruncationPolicy.ACCEPT,
    ),
    UseCase.SUMMARY: UseCaseProfile(
        temperature=0.3,
        max_tokens=1000,
        has_fallback=False,
        truncation_policy=TruncationPolicy.REJECT,
    ),
    UseCase.CLASSIFICATION: UseCaseProfile(
        temperature=0.2,
        max_tokens=1200,
        has_fallback=True,
        truncation_policy=TruncationPolicy.REJECT,
    ),
}


class Settings(BaseModel):
    """Runtime settings loaded from environment variables."""

    model_config = ConfigDict(frozen=True)

    gemini_api_key: SecretStr = SecretStr("")
    gemini_model: str = DEFAULT_MODEL
    gemini_base_url: str = DEFAULT_BASE_URL
    default_temperature: float = Field(default=0.7, ge=0.0, le=1.0)
    default_max_tokens: int = Field(default=1000, gt=0)
    timeout_seconds: int = Field(default=30, gt=0)
    log_level: str = "INFO"

    @field_validator("gemini_model", "gemini_base_url")
    @classmethod
    def validate_non_empty(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError("value cannot be empty.")
        return normalized

    @field_validator("gemini_base_url")
    @classmethod
    def validate_base_url(cls, value: str) -> str:
        if not value.startswith(("https://", "http://")):
            raise ValueError("GEMINI_BASE_URL must start with 'https://' or 'http://'.")
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level {value!r}.")
        return normalized

    @property
    def has_credential(self) -> bool:
        return bool(self.gemini_api_key.get_secret_value().strip())

    def validate_llm_requirements(self) -> None:
        """Fail with a friendly message when LLM credentials are required."""
        if not self.has_credential:
            raise ConfigError("GEMINI_API_KEY is required for generation commands.")

    def generation_config(self, use_case: UseCase) -> GenerationConfig:
        """Build the generation config for a use case, filling gaps from defaults."""
        profile = USE_CASE_PROFILES[use_case]
        temperature = profile.temperature
        if temperature is None or temperature <= 0:
            temperature = self.default_temperature
        max_tokens = profile.max_tokens
        if max_tokens is None or max_tokens <= 0:
            max_tokens = self.default_max_tokens
        return GenerationConfig(
            temperature=temperature,
            max_tokens=max_tokens,
            model=self.gemini_model,
            credential=self.gemini_api_key,
        )


def _env_value(name: str, default: str | None = None) -> str | None:
    import os

    value = os.getenv(name, default)
    if value is None:
        return None
    return value.strip()


def load_settings() -> Settings:
    """Load settings from environment variables."""
    payload = {
        "gemini_api_key": _env_value("GEMINI_API_KEY", ""),
        "gemini_model": _env_value("GEMINI_MODEL", DEFAULT_MODEL),
        "gemini_base_url": _env_value("GEMINI_BASE_URL", DEFAULT_BASE_URL),
        "default_temperature": _env_value("GEMINI_TEMPERATURE", "0.7"),
        "default_max_tokens": _env_value("GEMINI_MAX_TOKENS", "1000"),
        "timeout_seconds": _env_value("GEMINI_TIMEOUT_SECONDS", "30"),
        "log_level": _env_value("LOG_LEVEL", "INFO"),
    }

    try:
        return Settings.model_validate(payload)
    except ValidationError as exc:
        messages, _ = _validation_messages(exc)
        raise ConfigError(
            "Invalid configuration values:\n" + "\n".join(messages)
        ) from exc
