"""
retriever.py — Model list retrieval for every supported provider.

Responsibilities:
  • Serve hardcoded catalogs for providers without a discovery endpoint
    (Anthropic, Google)
  • Fetch live model lists from discovery endpoints (Cohere, Ollama,
    OpenAI and OpenAI-compatible services)
  • Classify every outcome into exactly one RetrievalError, or a full list
  • Parse provider-specific response shapes into canonical ModelRecord objects

Classification order for a discovery request:

  1.  Task cancellation                   → asyncio.CancelledError, untouched
      Cancellation reported by transport  → Cancelled
  2.  Any other transport failure         → NetworkError
  3.  Body matches a known error shape    → ServerError (whatever the status;
                                            some providers send errors with 200)
  4.  Status outside 200–299              → ServerError with the raw body
  5.  Body fails the success shape        → DecodingError

Dependencies: httpx (via transport), pydantic (wire schemas)
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar, Union

import httpx
from pydantic import BaseModel, ValidationError

from ai_model_retriever.catalog import anthropic_models, google_models
from ai_model_retriever.config import (
    COHERE_MODELS_URL,
    OLLAMA_MODELS_URL,
    OPENAI_MODELS_URL,
    PROVIDER_CATALOGUE,
)
from ai_model_retriever.errors import (
    Cancelled,
    DecodingError,
    NetworkError,
    ServerError,
    TransportCancelledError,
)
from ai_model_retriever.models import (
    CohereErrorResponse,
    CohereModelsResponse,
    ModelRecord,
    OllamaErrorResponse,
    OllamaModelsResponse,
    OpenAIErrorResponse,
    OpenAIModelsResponse,
    ProviderErrorResponse,
    ProviderRequestSpec,
    TransportResponse,
)
from ai_model_retriever.transport import HttpxTransport, Transport

logger = logging.getLogger(__name__)

Endpoint = Union[str, httpx.URL]
_ResponseT = TypeVar("_ResponseT", bound=BaseModel)

# Every in-band error shape we recognise, in the order they are tried after
# the calling provider's own shape.
_ERROR_SHAPES: tuple[Type[ProviderErrorResponse], ...] = (
    CohereErrorResponse,
    OllamaErrorResponse,
    OpenAIErrorResponse,
)


# ══════════════════════════════════════════════════════════════════════════════
# Per-provider response parsers
# ══════════════════════════════════════════════════════════════════════════════


def _parse_cohere_models(data: CohereModelsResponse) -> List[ModelRecord]:
    return [ModelRecord(id=item.name, name=item.name) for item in data.models]


def _parse_ollama_tags(data: OllamaModelsResponse) -> List[ModelRecord]:
    """Ollama /api/tags: `model` is the id, `name` the display name."""
    return [ModelRecord(id=item.model, name=item.name) for item in data.models]


def _parse_openai_style(data: OpenAIModelsResponse) -> List[ModelRecord]:
    """OpenAI-compatible /v1/models: the id doubles as the display name."""
    return [ModelRecord(id=item.id, name=item.id) for item in data.data]


def _match_error_shape(
    body: bytes, own_shape: Type[ProviderErrorResponse]
) -> Optional[ProviderErrorResponse]:
    """Return the first error shape the body validates against, if any."""
    shapes = (own_shape,) + tuple(s for s in _ERROR_SHAPES if s is not own_shape)
    for shape in shapes:
        try:
            return shape.model_validate_json(body)
        except ValidationError:
            continue
    return None


def _is_valid_default(url: str) -> bool:
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.host)


def _resolve_endpoint(endpoint: Optional[Endpoint], default: str) -> Optional[str]:
    if endpoint is not None:
        return str(endpoint)
    if not _is_valid_default(default):
        logger.error("Built-in endpoint %r is not a valid URL; returning no models", default)
        return None
    return default


def _merge_headers(
    headers: Optional[Mapping[str, str]], auth: Optional[Mapping[str, str]] = None
) -> Dict[str, str]:
    """Merge caller headers with auth headers; auth wins on a case-insensitive clash."""
    auth = auth or {}
    auth_names = {k.lower() for k in auth}
    merged = {k: v for k, v in (headers or {}).items() if k.lower() not in auth_names}
    merged.update(auth)
    return merged


def _bearer(api_key: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {api_key}"}


# ══════════════════════════════════════════════════════════════════════════════
# ModelRetriever: the main class
# ══════════════════════════════════════════════════════════════════════════════


class ModelRetriever:
    """
    Retrieves AI model lists from various providers.

    Holds no state besides its transport, so one instance may be shared by
    any number of concurrent tasks.

    Usage::

        retriever = ModelRetriever()
        models = await retriever.openai(api_key="sk-...")
        groq = await retriever.openai(
            api_key="gsk-...", endpoint="https://api.groq.com/openai/v1/models"
        )
        claude = retriever.anthropic()
    """

    def __init__(self, transport: Optional[Transport] = None) -> None:
        self._transport: Transport = transport if transport is not None else HttpxTransport()

    # ── Static catalogs ────────────────────────────────────────────────────────

    def anthropic(self) -> List[ModelRecord]:
        """Return Anthropic's models from the built-in catalog."""
        return anthropic_models()

    def google(self) -> List[ModelRecord]:
        """Return Google's models from the built-in catalog."""
        return google_models()

    # ── Discovery endpoints ────────────────────────────────────────────────────

    async def cohere(self, api_key: str) -> List[ModelRecord]:
        """Retrieve Cohere's models.

        The endpoint is fixed and always requests a page size of 1000.

        Raises:
            RetrievalError: cancelled, network failure, server error or an
                undecodable response.
        """
        url = _resolve_endpoint(None, COHERE_MODELS_URL)
        if url is None:
            return []
        request = ProviderRequestSpec(endpoint=url, headers=_merge_headers(None, _bearer(api_key)))
        data = await self._perform_request(request, CohereModelsResponse, CohereErrorResponse)
        return _parse_cohere_models(data)

    async def ollama(
        self,
        endpoint: Optional[Endpoint] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> List[ModelRecord]:
        """Retrieve the models installed on an Ollama server.

        Args:
            endpoint: tags endpoint, defaults to http://localhost:11434/api/tags
            headers: extra HTTP headers; Ollama needs no authentication.
        """
        url = _resolve_endpoint(endpoint, OLLAMA_MODELS_URL)
        if url is None:
            return []
        request = ProviderRequestSpec(endpoint=url, headers=_merge_headers(headers))
        data = await self._perform_request(request, OllamaModelsResponse, OllamaErrorResponse)
        return _parse_ollama_tags(data)

    async def openai(
        self,
        api_key: str,
        endpoint: Optional[Endpoint] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> List[ModelRecord]:
        """Retrieve models from OpenAI or any OpenAI-compatible API.

        Args:
            api_key: sent as a bearer token; overrides any caller-supplied
                Authorization header.
            endpoint: models endpoint, defaults to https://api.openai.com/v1/models
            headers: extra HTTP headers.
        """
        url = _resolve_endpoint(endpoint, OPENAI_MODELS_URL)
        if url is None:
            return []
        request = ProviderRequestSpec(endpoint=url, headers=_merge_headers(headers, _bearer(api_key)))
        data = await self._perform_request(request, OpenAIModelsResponse, OpenAIErrorResponse)
        return _parse_openai_style(data)

    async def retrieve(self, provider: str, **kwargs: Any) -> List[ModelRecord]:
        """Retrieve models for a provider named in PROVIDER_CATALOGUE.

        Keyword arguments are forwarded to the matching entry point.  Presets
        such as ``groq`` supply their catalogue endpoint unless one is given.
        """
        cfg = PROVIDER_CATALOGUE.get(provider)
        if cfg is None:
            raise ValueError(f"Unknown provider: {provider}")

        method = getattr(self, cfg["retriever"])
        if cfg["kind"] == "static":
            return method()

        if cfg["retriever"] != provider and kwargs.get("endpoint") is None:
            kwargs["endpoint"] = cfg["models_url"]
        return await method(**kwargs)

    # ── Internal ───────────────────────────────────────────────────────────────

    async def _send(self, request: ProviderRequestSpec) -> TransportResponse:
        try:
            response = await self._transport.send(request.method, request.endpoint, request.headers)
        except asyncio.CancelledError as exc:
            # Task cancellation propagates untouched so asyncio.timeout and
            # wait_for can turn it into TimeoutError.
            if self._cancel_requested():
                raise
            logger.debug("Request to %s cancelled by transport", request.endpoint)
            raise Cancelled() from exc
        except TransportCancelledError as exc:
            if self._cancel_requested():
                raise asyncio.CancelledError() from exc
            logger.debug("Request to %s cancelled by transport", request.endpoint)
            raise Cancelled() from exc
        except Exception as exc:
            if self._cancel_requested():
                raise asyncio.CancelledError() from exc
            logger.debug("Request to %s failed: %s", request.endpoint, exc)
            raise NetworkError(exc) from exc

        if self._cancel_requested():
            logger.debug("Request to %s cancelled after response arrived", request.endpoint)
            raise asyncio.CancelledError()
        return response

    @staticmethod
    def _cancel_requested() -> bool:
        task = asyncio.current_task()
        return task is not None and task.cancelling() > 0

    async def _perform_request(
        self,
        request: ProviderRequestSpec,
        success_shape: Type[_ResponseT],
        error_shape: Type[ProviderErrorResponse],
    ) -> _ResponseT:
        logger.debug("Fetching models from %s", request.endpoint)
        response = await self._send(request)

        # Check for API errors first, as they may come with a 200 status
        provider_error = _match_error_shape(response.body, error_shape)
        if provider_error is not None:
            logger.warning(
                "Server error from %s (HTTP %d): %s",
                request.endpoint,
                response.status_code,
                provider_error.error_message,
            )
            raise ServerError(response.status_code, provider_error.error_message)

        if not response.is_success:
            message = response.text() or f"HTTP {response.status_code}"
            logger.warning("Server error from %s (HTTP %d)", request.endpoint, response.status_code)
            raise ServerError(response.status_code, message)

        try:
            data = success_shape.model_validate_json(response.body)
        except ValidationError as exc:
            logger.debug("Undecodable response from %s: %s", request.endpoint, exc)
            raise DecodingError(exc) from exc

        logger.debug("Fetched models from %s", request.endpoint)
        return data

