from __future__ import annotations

import json
from typing import Any, AsyncIterator, Callable

import httpx
import pytest_asyncio

from ai_model_retriever import HttpxTransport, ModelRetriever


class RecordingHandler:
    """httpx.MockTransport handler that replays one canned response."""

    def __init__(self, status_code: int = 200, body: Any = None, error: Exception | None = None):
        self.status_code = status_code
        self.body = body
        self.error = error
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if isinstance(self.body, (bytes, str)):
            content = self.body.encode() if isinstance(self.body, str) else self.body
        elif self.body is None:
            content = b""
        else:
            content = json.dumps(self.body).encode()
        return httpx.Response(self.status_code, content=content)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest_asyncio.fixture
async def make_retriever() -> AsyncIterator[Callable[..., tuple[ModelRetriever, RecordingHandler]]]:
    clients: list[httpx.AsyncClient] = []

    def _make(status_code: int = 200, body: Any = None, error: Exception | None = None):
        handler = RecordingHandler(status_code=status_code, body=body, error=error)
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        clients.append(client)
        return ModelRetriever(HttpxTransport(client=client)), handler

    yield _make

    for client in clients:
        await client.aclose()
