"""
config.py — Centralised configuration for ai_model_retriever.

Default discovery endpoints, the provider catalogue and the few tunable
knobs live here.  Credentials are never read by the library itself; they
are passed to ``ModelRetriever`` as plain call parameters.  The
``*_API_KEY`` variables below are only consulted by ``scripts/list_models.py``.
"""

from __future__ import annotations

import logging
import os
from typing import Any


def _env_float(key: str, default: float) -> float:
    val = os.getenv(key, "")
    try:
        return float(val) if val else default
    except ValueError:
        return default


class Settings:
    """
    Simple settings object populated from environment variables.
    """

    log_level: str = os.getenv("AI_MODEL_RETRIEVER_LOG_LEVEL", "INFO")

    # Transport-level timeout; the retriever itself imposes none.
    http_timeout: float = _env_float("HTTP_TIMEOUT", 30.0)
    user_agent: str = os.getenv("USER_AGENT", "")


settings = Settings()


# ══════════════════════════════════════════════════════════════════════════════
# Default endpoints
# ══════════════════════════════════════════════════════════════════════════════

COHERE_PAGE_SIZE = 1000

COHERE_MODELS_URL = f"https://api.cohere.com/v1/models?page_size={COHERE_PAGE_SIZE}"
OLLAMA_MODELS_URL = "http://localhost:11434/api/tags"
OPENAI_MODELS_URL = "https://api.openai.com/v1/models"
GROQ_MODELS_URL = "https://api.groq.com/openai/v1/models"


# ══════════════════════════════════════════════════════════════════════════════
# Provider catalogue: single source of truth
# ══════════════════════════════════════════════════════════════════════════════

# Every provider definition:
#   kind              — "static" (hardcoded catalog) or "discovery" (HTTP)
#   retriever         — ModelRetriever method that serves the provider
#   models_url        — discovery endpoint (None for static providers)
#   api_key_env       — env var the script reads the credential from
#   requires_api_key  — True if the retriever method takes an api_key

PROVIDER_CATALOGUE: dict[str, dict[str, Any]] = {
    "anthropic": {
        "kind": "static",
        "retriever": "anthropic",
        "models_url": None,
        "api_key_env": None,
        "requires_api_key": False,
    },
    "cohere": {
        "kind": "discovery",
        "retriever": "cohere",
        "models_url": COHERE_MODELS_URL,
        "api_key_env": "COHERE_API_KEY",
        "requires_api_key": True,
    },
    "google": {
        "kind": "static",
        "retriever": "google",
        "models_url": None,
        "api_key_env": None,
        "requires_api_key": False,
    },
    "ollama": {
        "kind": "discovery",
        "retriever": "ollama",
        "models_url": OLLAMA_MODELS_URL,
        "api_key_env": None,
        "requires_api_key": False,
    },
    "openai": {
        "kind": "discovery",
        "retriever": "openai",
        "models_url": OPENAI_MODELS_URL,
        "api_key_env": "OPENAI_API_KEY",
        "requires_api_key": True,
    },
    # ── OpenAI-compatible presets (served by the openai entry point) ─────────
    "groq": {
        "kind": "discovery",
        "retriever": "openai",
        "models_url": GROQ_MODELS_URL,
        "api_key_env": "GROQ_API_KEY",
        "requires_api_key": True,
    },
}


def initialize_provider_env_vars() -> None:
    """Load a local .env file if present.

    Existing environment variables are never overwritten.
    """
    from dotenv import load_dotenv

    load_dotenv(override=False)


def get_api_key(provider: str) -> str | None:
    """Return the credential configured for `provider` in the environment."""
    cfg = PROVIDER_CATALOGUE.get(provider)
    if not cfg:
        return None
    env_name = cfg.get("api_key_env")
    return os.getenv(env_name) if env_name else None


def configure_logging(level: str | None = None) -> None:
    """Install a root handler for command-line use.

    The library never calls this; applications own their logging setup.
    """
    level_name = (level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )
