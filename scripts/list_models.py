#!/usr/bin/env python3
"""Print the models available from one provider.

Credentials are read from the environment (or a local .env file):
COHERE_API_KEY, OPENAI_API_KEY, GROQ_API_KEY.
"""

import argparse
import asyncio
import logging
import sys

from ai_model_retriever import PROVIDER_CATALOGUE, ModelRetriever, RetrievalError
from ai_model_retriever.config import (
    configure_logging,
    get_api_key,
    initialize_provider_env_vars,
)

logger = logging.getLogger("list_models")


async def main(provider: str, endpoint: str | None) -> int:
    cfg = PROVIDER_CATALOGUE[provider]
    kwargs: dict = {}
    if cfg["requires_api_key"]:
        api_key = get_api_key(provider)
        if not api_key:
            logger.error("%s is not set", cfg["api_key_env"])
            return 2
        kwargs["api_key"] = api_key
    if endpoint:
        if cfg["kind"] == "static" or cfg["retriever"] == "cohere":
            logger.error("%s does not accept a custom endpoint", provider)
            return 2
        kwargs["endpoint"] = endpoint

    try:
        models = await ModelRetriever().retrieve(provider, **kwargs)
    except RetrievalError as exc:
        logger.error("Failed to retrieve %s models: %s", provider, exc)
        return 1

    print(f"--- {provider} ({len(models)} models) ---")
    for m in models:
        print(f"{m.id}: {m.name}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="List the models a provider offers.")
    parser.add_argument("provider", choices=sorted(PROVIDER_CATALOGUE), help="Provider name")
    parser.add_argument("--endpoint", help="Override the discovery endpoint (Ollama/OpenAI-compatible)")
    parser.add_argument("--log-level", default=None, help="Logging level (default: settings)")
    args = parser.parse_args()

    initialize_provider_env_vars()
    configure_logging(args.log_level)
    sys.exit(asyncio.run(main(args.provider, args.endpoint)))
