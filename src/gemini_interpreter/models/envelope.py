"""Typed view of the raw generateContent response document."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FinishReason(StrEnum):
    """Finish reasons the pipeline reacts to explicitly."""

    STOP = "STOP"
    MAX_TOKENS = "MAX_TOKENS"
    SAFETY = "SAFETY"
    RECITATION = "RECITATION"
    OTHER = "OTHER"


class _EnvelopeModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class Part(_EnvelopeModel):
    text: str | None = None


class Content(_EnvelopeModel):
    parts: list[Part] = Field(default_factory=list)
    role: str | None = None


class Candidate(_EnvelopeModel):
    content: Content | None = None
    finish_reason: str | None = Field(default=None, alias="finishReason")

    @property
    def parts(self) -> list[Part]:
        if self.content is None:
            return []
        return self.content.parts


class UsageMetadata(_EnvelopeModel):
    prompt_token_count: int | None = Field(default=None, alias="promptTokenCount")
    candidates_token_count: int | None = Field(
        default=None, alias="candidatesTokenCount"
    )
    total_token_count: int | None = Field(default=None, alias="totalTokenCount")

    @field_validator("*", mode="before")
    @classmethod
    def validate_count(cls, value: object) -> int | None:
        if isinstance(value, bool) or value is None:
            return None
        try:
            return max(int(value), 0)  # type: ignore[arg-type]
        except (TypeError, ValueError, OverflowError):
            return None


class PromptFeedback(_EnvelopeModel):
    block_reason: str | None = Field(default=None, alias="blockReason")


class ResponseEnvelope(_EnvelopeModel):
    """Candidates plus optional usage metadata; unknown keys are ignored."""

    candidates: list[Candidate] = Field(default_factory=list)
    usage_metadata: UsageMetadata | None = Field(default=None, alias="usageMetadata")
    prompt_feedback: PromptFeedback | None = Field(default=None, alias="promptFeedback")

    @field_validator("candidates", mode="before")
    @classmethod
    def validate_candidates(cls, value: object) -> object:
        if value is None:
            return []
        return value


class ExtractedContent(BaseModel):
    """Generated text of the first candidate plus total token usage."""

    model_config = ConfigDict(frozen=True)

    text: str
    tokens_used: int = Field(default=0, ge=0)
