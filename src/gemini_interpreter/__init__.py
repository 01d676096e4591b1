"""Interpret free-form Gemini completions as typed sentiment, summary and classification results."""

__version__ = "0.1.0"
