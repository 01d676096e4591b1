"""Failure taxonomy shared by the interpretation pipeline."""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    """Tagged failure reasons surfaced in a :class:`Failure` result."""

    INVALID_CONFIG = "INVALID_CONFIG"
    MALFORMED_ENVELOPE = "MALFORMED_ENVELOPE"
    NO_CANDIDATES = "NO_CANDIDATES"
    SAFETY_BLOCKED = "SAFETY_BLOCKED"
    RECITATION_BLOCKED = "RECITATION_BLOCKED"
    UNKNOWN_TERMINATION = "UNKNOWN_TERMINATION"
    TRUNCATED_BY_LENGTH = "TRUNCATED_BY_LENGTH"
    EMPTY_CONTENT = "EMPTY_CONTENT"
    NO_STRUCTURED_PAYLOAD = "NO_STRUCTURED_PAYLOAD"
    GENERATION_FAILED = "GENERATION_FAILED"


class InterpretationError(RuntimeError):
    """Raised by pipeline stages when a response cannot be interpreted."""

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


class NoStructuredPayloadError(InterpretationError):
    """Raised when no usable structured payload is embedded in the generated text."""

    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.NO_STRUCTURED_PAYLOAD, message)
