"""Locate and map the JSON object a model embeds in its free-text answer."""

from __future__ import annotations

import json
import logging
import re
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from gemini_interpreter.config import ExtractionStrategy
from gemini_interpreter.errors import NoStructuredPayloadError

log = logging.getLogger(__name__)

PayloadT = TypeVar("PayloadT", bound=BaseModel)

# First "{" up to the first "}". Objects nested inside the payload cut it short.
_FLAT_OBJECT_PATTERN = re.compile(r"\{[^}]*\}", re.DOTALL)


def find_flat_object(text: str) -> str | None:
    match = _FLAT_OBJECT_PATTERN.search(text)
    if match is None:
        return None
    return match.group()


def find_balanced_object(text: str) -> str | None:
    """Return the first brace-balanced object, ignoring braces inside strings."""
    start = text.find("{")
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        for index in range(start, len(text)):
            char = text[index]
            if in_string:
                if escaped:
                    escaped = False
                elif char == "\\":
                    escaped = True
                elif char == '"':
                    in_string = False
                continue
            if char == '"':
                in_string = True
            elif char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    return text[start : index + 1]
        # Unterminated object: retry from the next opening brace.
        start = text.find("{", start + 1)
    return None


_FINDERS = {
    ExtractionStrategy.FIRST_FLAT_OBJECT: find_flat_object,
    ExtractionStrategy.BALANCED: find_balanced_object,
}


def extract_structured(
    text: str,
    payload_type: type[PayloadT],
    *,
    strategy: ExtractionStrategy = ExtractionStrategy.FIRST_FLAT_OBJECT,
) -> PayloadT:
    """Parse the embedded object in ``text`` as ``payload_type``.

    Raises :class:`NoStructuredPayloadError` when no object is found, it is not
    valid JSON, or it cannot be mapped onto the payload type.
    """
    candidate = _FINDERS[strategy](text or "")
    if candidate is None:
        raise NoStructuredPayloadError("Nenhum objeto JSON encontrado na resposta.")

    try:
        document = json.loads(candidate)
    except (ValueError, RecursionError) as exc:
        log.error("Failed to parse JSON from response: %s", exc)
        raise NoStructuredPayloadError("Objeto JSON da resposta é inválido.") from exc

    if not isinstance(document, dict):
        raise NoStructuredPayloadError("Objeto JSON da resposta é inválido.")

    try:
        return payload_type.model_validate(document)
    except ValidationError as exc:
        log.error(
            "Response JSON does not match %s: %d error(s)",
            payload_type.__name__,
            exc.error_count(),
        )
        raise NoStructuredPayloadError(
            "Objeto JSON da resposta não segue o formato esperado."
        ) from exc
