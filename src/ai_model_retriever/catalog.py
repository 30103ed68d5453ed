"""
catalog.py — Hand-maintained model lists for providers without a discovery
endpoint.  Newest models first.
"""

from __future__ import annotations

from typing import Any

from ai_model_retriever.models import ModelRecord

# Source: https://docs.anthropic.com/en/docs/about-claude/models
ANTHROPIC_MODELS: list[dict[str, Any]] = [
    {"id": "claude-3-5-sonnet-latest", "name": "Claude 3.5 Sonnet"},
    {"id": "claude-3-5-haiku-latest", "name": "Claude 3.5 Haiku"},
    {"id": "claude-3-opus-latest", "name": "Claude 3 Opus (Latest)"},
    {"id": "claude-3-sonnet-20240229", "name": "Claude 3 Sonnet"},
    {"id": "claude-3-haiku-20240307", "name": "Claude 3 Haiku"},
]

# Source: https://cloud.google.com/vertex-ai/generative-ai/docs/learn/models
GOOGLE_MODELS: list[dict[str, Any]] = [
    {"id": "gemini-1.5-flash", "name": "Gemini 1.5 Flash"},
    {"id": "gemini-1.5-pro", "name": "Gemini 1.5 Pro"},
    {"id": "gemini-1.0-pro", "name": "Gemini 1.0 Pro"},
    {"id": "gemini-1.0-pro-vision", "name": "Gemini 1.0 Pro Vision"},
]


def _to_records(entries: list[dict[str, Any]]) -> list[ModelRecord]:
    return [ModelRecord(id=item["id"], name=item["name"]) for item in entries]


def anthropic_models() -> list[ModelRecord]:
    """Return Anthropic's available models."""
    return _to_records(ANTHROPIC_MODELS)


def google_models() -> list[ModelRecord]:
    """Return Google's available models."""
    return _to_records(GOOGLE_MODELS)
