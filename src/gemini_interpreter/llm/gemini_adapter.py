"""Gemini REST implementation of the generation client interface."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from urllib import error, parse, request

from gemini_interpreter.config import DEFAULT_BASE_URL, GenerationConfig
from gemini_interpreter.llm.base import GenerationClient, LLMError

log = logging.getLogger(__name__)

_LOG_PREVIEW_CHARS = 1000


def build_request_body(prompt: str, config: GenerationConfig) -> dict[str, object]:
    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": {
            "temperature": config.temperature,
            "maxOutputTokens": config.max_tokens,
        },
    }


def _preview(text: str) -> str:
    if len(text) > _LOG_PREVIEW_CHARS:
        return text[:_LOG_PREVIEW_CHARS] + "... [truncated]"
    return text


@dataclass(frozen=True)
class GeminiAdapter(GenerationClient):
    """Call the Gemini ``generateContent`` endpoint and return the raw body."""

    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: int = 30

    def endpoint(self, model: str) -> str:
        return (
            self.base_url.rstrip("/")
            + f"/models/{parse.quote(model, safe='-._')}:generateContent"
        )

    def generate(self, prompt: str, config: GenerationConfig) -> str:
        body = json.dumps(build_request_body(prompt, config))
        endpoint = self.endpoint(config.model)
        log.debug("Calling Gemini endpoint: %s", endpoint)
        log.debug("Request body: %s", _preview(body))

        req = request.Request(
            endpoint,
            method="POST",
            data=body.encode("utf-8"),
            headers={
                "x-goog-api-key": config.credential.get_secret_value(),
                "Content-Type": "application/json",
            },
        )

        try:
            with request.urlopen(req, timeout=self.timeout_seconds) as response:
                payload = response.read().decode("utf-8")
        except error.HTTPError as exc:
            details = exc.read().decode("utf-8", errors="replace")
            raise LLMError(
                f"Gemini request failed with HTTP {exc.code}: {details}"
            ) from exc
        except error.URLError as exc:
            raise LLMError(f"Gemini request failed: {exc.reason}") from exc
        except TimeoutError as exc:
            raise LLMError("Gemini request timed out.") from exc
        except UnicodeDecodeError as exc:
            raise LLMError("Gemini response was not valid UTF-8.") from exc

        log.debug("Gemini response: %s", _preview(payload))
        return payload
