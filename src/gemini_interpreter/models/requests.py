"""Typed caller requests, one per use case."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SummaryStyle(StrEnum):
    CONCISE = "conciso"
    DETAILED = "detalhado"
    BULLET_POINTS = "bullet-points"


class _RequestModel(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)


class ChatRequest(_RequestModel):
    message: str = Field(min_length=1, max_length=2000)
    context: str | None = None


class SentimentRequest(_RequestModel):
    text: str = Field(min_length=1, max_length=5000)
    language: str = "pt"


class SummaryRequest(_RequestModel):
    text: str = Field(min_length=1, max_length=10000)
    max_sentences: int = Field(default=3, ge=1, le=10)
    style: SummaryStyle = SummaryStyle.CONCISE

    @field_validator("style", mode="before")
    @classmethod
    def validate_style(cls, value: object) -> SummaryStyle:
        if isinstance(value, SummaryStyle):
            return value
        normalized = str(value or "").strip().lower()
        try:
            return SummaryStyle(normalized)
        except ValueError:
            return SummaryStyle.CONCISE


class ClassificationRequest(_RequestModel):
    product_name: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    category: str | None = Field(default=None, max_length=100)
