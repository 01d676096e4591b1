"""Command-line entrypoint for gemini-interpreter."""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path

from gemini_interpreter import __version__

_USE_CASE_COMMANDS = {
    "chat": "chat",
    "sentiment": "sentiment",
    "summarize": "summary",
    "classify": "classification",
}


def _add_output_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--prompt-only",
        action="store_true",
        help="Print the prompt that would be sent and exit without calling the API.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gemini-interpreter",
        description=(
            "Send prompts to the Gemini API and interpret the free-form answers "
            "as typed chat, sentiment, summary and classification results."
        ),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override LOG_LEVEL.",
    )

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser(
        "config-check",
        help="Validate environment configuration for gemini-interpreter.",
    )

    chat_parser = subparsers.add_parser("chat", help="Ask a free-form question.")
    chat_parser.add_argument("message", help="Question or message to send.")
    chat_parser.add_argument("--context", default=None, help="Optional context.")
    _add_output_flags(chat_parser)

    sentiment_parser = subparsers.add_parser(
        "sentiment",
        help="Classify the sentiment of a text as POSITIVE, NEGATIVE or NEUTRAL.",
    )
    sentiment_parser.add_argument("text", help="Text to analyze.")
    sentiment_parser.add_argument(
        "--language", default="pt", help="Text language (default: pt)."
    )
    _add_output_flags(sentiment_parser)

    summary_parser = subparsers.add_parser("summarize", help="Summarize a text.")
    summary_parser.add_argument("text", help="Text to summarize.")
    summary_parser.add_argument(
        "--max-sentences",
        type=int,
        default=3,
        help="Maximum number of sentences in the summary (default: 3).",
    )
    summary_parser.add_argument(
        "--style",
        default="conciso",
        help="Summary style: conciso, detalhado or bullet-points (default: conciso).",
    )
    _add_output_flags(summary_parser)

    classify_parser = subparsers.add_parser(
        "classify",
        help="Classify a product by tangibility, price category and life cycle.",
    )
    classify_parser.add_argument("product_name", help="Product name.")
    classify_parser.add_argument("--description", default=None)
    classify_parser.add_argument("--category", default=None)
    _add_output_flags(classify_parser)

    interpret_parser = subparsers.add_parser(
        "interpret",
        help="Interpret a saved raw API response offline.",
    )
    interpret_parser.add_argument(
        "use_case",
        choices=["chat", "sentiment", "summary", "classification"],
        help="Use case whose interpretation rules apply.",
    )
    interpret_parser.add_argument("response_file", type=Path)
    interpret_parser.add_argument(
        "--subject",
        default="",
        help="Original text or product name to attach to the result.",
    )
    return parser


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _print_result(title: str, result: object) -> int:
    from gemini_interpreter.models.results import Failure

    if isinstance(result, Failure):
        print(f"{title} failed:\n- [{result.code}] {result.message}", file=sys.stderr)
        return 1

    value = result.value  # type: ignore[attr-defined]
    payload = dataclasses.asdict(value)
    print(f"{title} succeeded:")
    for key in ("sentiment", "tangibility_type", "confidence", "tokens_used"):
        if key in payload:
            print(f"- {key}: {payload[key]}")
    if payload.get("fallback_used"):
        print("- fallback_used: yes")
    if payload.get("truncated"):
        print("- truncated: yes")
    print("\nJSON payload:")
    print(json.dumps(payload, indent=2, sort_keys=True, default=str, ensure_ascii=False))
    return 0


def _build_request(command: str, args: argparse.Namespace):
    from gemini_interpreter.models.requests import (
        ChatRequest,
        ClassificationRequest,
        SentimentRequest,
        SummaryRequest,
    )

    if command == "chat":
        return ChatRequest(message=args.message, context=args.context)
    if command == "sentiment":
        return SentimentRequest(text=args.text, language=args.language)
    if command == "summarize":
        return SummaryRequest(
            text=args.text,
            max_sentences=args.max_sentences,
            style=args.style,
        )
    return ClassificationRequest(
        product_name=args.product_name,
        description=args.description,
        category=args.category,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        from pydantic import ValidationError

        from gemini_interpreter.config import ConfigError, UseCase, load_settings
    except ModuleNotFoundError:
        print(
            "Runtime dependencies are missing. "
            "Install project dependencies first (pip install -e .).",
            file=sys.stderr,
        )
        return 2

    try:
        settings = load_settings()
    except ConfigError as exc:
        print(f"Configuration error:\n{exc}", file=sys.stderr)
        return 2

    _configure_logging(args.log_level or settings.log_level)

    if args.command == "config-check":
        redacted = "***" if settings.has_credential else "(not set)"
        print("Configuration loaded successfully:")
        print(f"- GEMINI_API_KEY: {redacted}")
        print(f"- GEMINI_MODEL: {settings.gemini_model}")
        print(f"- GEMINI_BASE_URL: {settings.gemini_base_url}")
        print(f"- GEMINI_TEMPERATURE: {settings.default_temperature}")
        print(f"- GEMINI_MAX_TOKENS: {settings.default_max_tokens}")
        print(f"- GEMINI_TIMEOUT_SECONDS: {settings.timeout_seconds}")
        print(f"- LOG_LEVEL: {settings.log_level}")
        return 0

    if args.command == "interpret":
        from gemini_interpreter.interpret.pipeline import INTERPRETERS
        from gemini_interpreter.models.results import InterpretationContext

        try:
            raw = args.response_file.read_text(encoding="utf-8")
        except OSError as exc:
            print(f"Could not read response file:\n{exc}", file=sys.stderr)
            return 2

        use_case = UseCase(args.use_case)
        context = InterpretationContext(
            subject=args.subject,
            model=settings.gemini_model,
        )
        result = INTERPRETERS[use_case](raw, context)
        return _print_result(f"Interpretation [{use_case}]", result)

    if args.command in _USE_CASE_COMMANDS:
        from gemini_interpreter.llm import create_generation_client
        from gemini_interpreter.prompts.templates import PromptBuildError, build_prompt
        from gemini_interpreter.service import GenerationService

        use_case = UseCase(_USE_CASE_COMMANDS[args.command])
        try:
            request = _build_request(args.command, args)
            if args.prompt_only:
                print(build_prompt(use_case, request))
                return 0
            settings.validate_llm_requirements()
        except ValidationError as exc:
            print(f"Invalid request:\n{exc}", file=sys.stderr)
            return 2
        except PromptBuildError as exc:
            print(f"Prompt build failed:\n{exc}", file=sys.stderr)
            return 2
        except ConfigError as exc:
            print(f"Configuration error:\n{exc}", file=sys.stderr)
            return 2

        service = GenerationService(create_generation_client(settings), settings)
        handlers = {
            UseCase.CHAT: service.chat,
            UseCase.SENTIMENT: service.analyze_sentiment,
            UseCase.SUMMARY: service.summarize,
            UseCase.CLASSIFICATION: service.classify_product,
        }
        result = handlers[use_case](request)
        return _print_result(args.command.capitalize(), result)

    parser.print_help()
    return 2


if __name__ == "__main__":
    sys.exit(main())
