"""
models.py — Pydantic wire schemas and runtime dataclasses for ai_model_retriever.

Two layers:
  1. Runtime value objects  (ModelRecord, ProviderRequestSpec, TransportResponse)
  2. Provider wire schemas  (success and error bodies, validated with pydantic)
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass, field
from typing import List

from pydantic import BaseModel


# ══════════════════════════════════════════════════════════════════════════════
# Runtime value objects
# ══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class ModelRecord:
    """A single selectable model."""
    id: str      # unique within one response
    name: str    # display name


@dataclass(frozen=True)
class ProviderRequestSpec:
    """Everything needed to issue one discovery request."""
    endpoint: str
    headers: dict[str, str] = field(default_factory=dict)
    method: str = "GET"


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    body: bytes = b""

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code <= 299

    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


# ══════════════════════════════════════════════════════════════════════════════
# Success shapes
# ══════════════════════════════════════════════════════════════════════════════


class CohereModel(BaseModel):
    name: str


class CohereModelsResponse(BaseModel):
    models: List[CohereModel]


class OllamaModel(BaseModel):
    name: str
    model: str


class OllamaModelsResponse(BaseModel):
    models: List[OllamaModel]


class OpenAIModel(BaseModel):
    id: str


class OpenAIModelsResponse(BaseModel):
    data: List[OpenAIModel]


# ══════════════════════════════════════════════════════════════════════════════
# Error shapes
# ══════════════════════════════════════════════════════════════════════════════


class ProviderErrorResponse(BaseModel):
    """Base for in-band error payloads; subclasses expose one message."""

    @property
    @abstractmethod
    def error_message(self) -> str:
        """Human-readable message; every error shape overrides this."""


class CohereErrorResponse(ProviderErrorResponse):
    message: str

    @property
    def error_message(self) -> str:
        return self.message


class ErrorDetail(BaseModel):
    message: str


class OllamaErrorResponse(ProviderErrorResponse):
    error: ErrorDetail

    @property
    def error_message(self) -> str:
        return self.error.message


class OpenAIErrorResponse(ProviderErrorResponse):
    error: ErrorDetail

    @property
    def error_message(self) -> str:
        return self.error.message
