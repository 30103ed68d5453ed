"""
errors.py — Exception hierarchy for model retrieval.

Every failed retrieval raises exactly one ``RetrievalError`` subclass, except
cancellation of the calling task, which stays an ``asyncio.CancelledError``:

  Cancelled      — the transport reported a cancelled request
  NetworkError   — the transport could not complete the exchange
  ServerError    — the server answered but reported a failure
  DecodingError  — the body did not match the provider's success shape

``TransportError`` / ``TransportCancelledError`` are raised by transports and
never reach callers of ``ModelRetriever``.
"""

from __future__ import annotations


class RetrievalError(Exception):
    """Base class for all model retrieval failures."""


class Cancelled(RetrievalError):
    """The transport reported that the request was cancelled.

    Cancelling the calling task raises ``asyncio.CancelledError`` instead.
    """

    def __init__(self, message: str = "Request was cancelled") -> None:
        super().__init__(message)


class NetworkError(RetrievalError):
    """The transport failed (DNS, connection reset, timeout, ...)."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(str(cause) or type(cause).__name__)
        self.cause = cause


class ServerError(RetrievalError):
    """The server reported a failure, by status code or by an error payload."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    def __repr__(self) -> str:
        return f"ServerError(status_code={self.status_code}, message={self.message!r})"


class DecodingError(RetrievalError):
    """The response did not match the expected success shape."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(str(cause) or type(cause).__name__)
        self.cause = cause


class TransportError(Exception):
    """Raised by a ``Transport`` when the HTTP exchange cannot complete."""


class TransportCancelledError(TransportError):
    """Raised by a ``Transport`` that observed cancellation itself."""
