"""Public package surface for ai_model_retriever.

Expose the primary entry points used by consumers of the package.
"""

__version__ = "0.1.0"

from ai_model_retriever.catalog import anthropic_models, google_models
from ai_model_retriever.config import PROVIDER_CATALOGUE, settings
from ai_model_retriever.errors import (
    Cancelled,
    DecodingError,
    NetworkError,
    RetrievalError,
    ServerError,
    TransportCancelledError,
    TransportError,
)
from ai_model_retriever.models import ModelRecord, ProviderRequestSpec, TransportResponse
from ai_model_retriever.retriever import ModelRetriever
from ai_model_retriever.transport import HttpxTransport, Transport

__all__ = [
    "PROVIDER_CATALOGUE",
    "Cancelled",
    "DecodingError",
    "HttpxTransport",
    "ModelRecord",
    "ModelRetriever",
    "NetworkError",
    "ProviderRequestSpec",
    "RetrievalError",
    "ServerError",
    "Transport",
    "TransportCancelledError",
    "TransportError",
    "TransportResponse",
    "__version__",
    "anthropic_models",
    "google_models",
    "settings",
]
