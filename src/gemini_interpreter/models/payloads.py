"""Structured payloads the prompts ask the model to embed in its answer."""

from __future__ import annotations

import math
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

NOT_APPLICABLE = "NA"


class SentimentLabel(StrEnum):
    POSITIVE = "POSITIVE"
    NEGATIVE = "NEGATIVE"
    NEUTRAL = "NEUTRAL"


class TangibilityType(StrEnum):
    TANGIBLE = "TANGIBLE"
    INTANGIBLE = "INTANGIBLE"
    HYBRID = "HYBRID"


def _coerce_confidence(value: object) -> float:
    """Map whatever the model wrote as confidence onto [0.0, 1.0]."""
    if isinstance(value, bool) or value is None:
        return 0.0
    try:
        number = float(value)  # type: ignore[arg-type]
    except OverflowError:
        # Integers too large for a float.
        return 1.0 if value > 0 else 0.0  # type: ignore[operator]
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number):
        return 0.0
    return min(max(number, 0.0), 1.0)


def _upper_label(value: object) -> object:
    if isinstance(value, str):
        return value.strip().upper()
    return value


class _PayloadModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    confidence: float = 0.0
    explanation: str = ""

    @field_validator("confidence", mode="before")
    @classmethod
    def validate_confidence(cls, value: object) -> float:
        return _coerce_confidence(value)

    @field_validator("explanation", mode="before")
    @classmethod
    def validate_explanation(cls, value: object) -> str:
        if value is None:
            return ""
        return str(value)


class SentimentPayload(_PayloadModel):
    """Sentiment verdict: ``{"sentiment", "confidence", "explanation"}``."""

    sentiment: SentimentLabel

    @field_validator("sentiment", mode="before")
    @classmethod
    def validate_sentiment(cls, value: object) -> object:
        return _upper_label(value)


class ClassificationPayload(_PayloadModel):
    """Tangibility classification emitted for a product."""

    tangibility_type: TangibilityType = Field(alias="tangibilityType")
    tangibility_subtype: str | None = Field(default=None, alias="tangibilitySubtype")
    price_category: str | None = Field(default=None, alias="productPriceCategory")
    life_cycle: str | None = Field(default=None, alias="lifeCycle")
    characteristics: list[str] = Field(default_factory=list)

    @field_validator("tangibility_type", mode="before")
    @classmethod
    def validate_tangibility_type(cls, value: object) -> object:
        return _upper_label(value)

    @field_validator("tangibility_subtype", "price_category", "life_cycle", mode="before")
    @classmethod
    def validate_optional_label(cls, value: object) -> object:
        if isinstance(value, (bool, int, float)):
            value = str(value)
        value = _upper_label(value)
        if value == "":
            return None
        return value

    @field_validator("characteristics", mode="before")
    @classmethod
    def validate_characteristics(cls, value: object) -> object:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        if isinstance(value, list):
            return [str(item) for item in value if item is not None]
        return value
