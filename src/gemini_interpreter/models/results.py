"""Typed interpretation results and the success/failure union."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, TypeVar

from gemini_interpreter.errors import ErrorCode, InterpretationError
from gemini_interpreter.models.payloads import SentimentLabel, TangibilityType
from gemini_interpreter.models.requests import SummaryStyle

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    """A successfully interpreted response."""

    value: T


@dataclass(frozen=True, slots=True)
class Failure:
    """A tagged failure with a user-facing message."""

    code: ErrorCode
    message: str

    @classmethod
    def from_error(cls, exc: InterpretationError) -> Failure:
        return cls(code=exc.code, message=exc.message)


Result = Success[T] | Failure


@dataclass(frozen=True, slots=True)
class InterpretationContext:
    """Request metadata attached to every assembled result."""

    subject: str = ""
    model: str = ""
    timestamp: datetime | None = None


@dataclass(frozen=True, slots=True)
class ChatResult:
    response: str
    model: str
    tokens_used: int
    truncated: bool = False
    timestamp: datetime | None = field(default=None, compare=False)


@dataclass(frozen=True, slots=True)
class SummaryResult:
    summary: str
    model: str
    tokens_used: int
    style: SummaryStyle | None = None
    truncated: bool = False
    timestamp: datetime | None = field(default=None, compare=False)


@dataclass(frozen=True, slots=True)
class SentimentResult:
    sentiment: SentimentLabel
    confidence: float
    explanation: str
    original_text: str
    tokens_used: int
    fallback_used: bool = False
    truncated: bool = False
    timestamp: datetime | None = field(default=None, compare=False)


@dataclass(frozen=True, slots=True)
class ClassificationResult:
    product_name: str
    tangibility_type: TangibilityType
    tangibility_subtype: str | None
    confidence: float
    explanation: str
    characteristics: tuple[str, ...]
    price_category: str | None
    life_cycle: str | None
    tokens_used: int
    fallback_used: bool = False
    truncated: bool = False
    timestamp: datetime | None = field(default=None, compare=False)
