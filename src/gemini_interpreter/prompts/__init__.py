"""Prompt builders for gemini-interpreter."""

from gemini_interpreter.prompts.templates import (
    PromptBuildError,
    build_chat_prompt,
    build_classification_prompt,
    build_prompt,
    build_sentiment_prompt,
    build_summary_prompt,
)

__all__ = [
    "PromptBuildError",
    "build_chat_prompt",
    "build_classification_prompt",
    "build_prompt",
    "build_sentiment_prompt",
    "build_summary_prompt",
]
