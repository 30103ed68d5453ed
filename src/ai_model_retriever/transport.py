"""
transport.py — HTTP transport used by ModelRetriever.

A ``Transport`` sends one request and returns the status code and raw body.
It raises ``TransportError`` when the exchange cannot complete and lets
``asyncio.CancelledError`` propagate untouched.

Dependencies: httpx (async HTTP)
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Protocol

import httpx

from ai_model_retriever import __version__
from ai_model_retriever.config import settings
from ai_model_retriever.errors import TransportError
from ai_model_retriever.models import TransportResponse

logger = logging.getLogger(__name__)


class Transport(Protocol):
    async def send(
        self, method: str, url: str, headers: Mapping[str, str]
    ) -> TransportResponse: ...


def default_user_agent() -> str:
    return settings.user_agent or f"ai-model-retriever/{__version__}"


class HttpxTransport:
    """
    ``Transport`` backed by ``httpx.AsyncClient``.

    Without an injected client a short-lived one is opened per request.
    An injected client is never closed here; its owner manages it.

    Usage::

        transport = HttpxTransport(timeout=10)
        resp = await transport.send("GET", "https://api.openai.com/v1/models", {})
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self._client = client
        self._timeout = settings.http_timeout if timeout is None else timeout

    async def send(
        self, method: str, url: str, headers: Mapping[str, str]
    ) -> TransportResponse:
        request_headers = httpx.Headers({"User-Agent": default_user_agent()})
        request_headers.update(dict(headers))
        try:
            if self._client is not None:
                r = await self._client.request(method, url, headers=request_headers)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    r = await client.request(method, url, headers=request_headers)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.debug("%s %s failed: %r", method, url, exc)
            raise TransportError(str(exc) or type(exc).__name__) from exc

        logger.debug("%s %s -> %d (%d bytes)", method, url, r.status_code, len(r.content))
        return TransportResponse(status_code=r.status_code, body=r.content)
