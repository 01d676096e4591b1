"""Envelope, payload, request and result models."""

from gemini_interpreter.models.envelope import (
    Candidate,
    ExtractedContent,
    FinishReason,
    ResponseEnvelope,
)
from gemini_interpreter.models.payloads import (
    NOT_APPLICABLE,
    ClassificationPayload,
    SentimentLabel,
    SentimentPayload,
    TangibilityType,
)
from gemini_interpreter.models.requests import (
    ChatRequest,
    ClassificationRequest,
    SentimentRequest,
    SummaryRequest,
    SummaryStyle,
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

__all__ = [
    "Candidate",
    "ExtractedContent",
    "FinishReason",
    "ResponseEnvelope",
    "NOT_APPLICABLE",
    "ClassificationPayload",
    "SentimentLabel",
    "SentimentPayload",
    "TangibilityType",
    "ChatRequest",
    "ClassificationRequest",
    "SentimentRequest",
    "SummaryRequest",
    "SummaryStyle",
    "ChatResult",
    "ClassificationResult",
    "Failure",
    "InterpretationContext",
    "Result",
    "SentimentResult",
    "Success",
    "SummaryResult",
]
