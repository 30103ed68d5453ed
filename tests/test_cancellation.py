"""
Cancelling the calling task must propagate as asyncio.CancelledError and
beat every other outcome, including a response or transport error that
lands at the same moment.  Cancellation reported by the transport itself
surfaces as ``Cancelled``.
"""

import asyncio

import pytest

from ai_model_retriever import (
    Cancelled,
    ModelRetriever,
    RetrievalError,
    TransportCancelledError,
    TransportError,
    TransportResponse,
)


class FakeTransport:
    """Transport whose behaviour is supplied as a coroutine function."""

    def __init__(self, behaviour):
        self._behaviour = behaviour
        self.calls = 0

    async def send(self, method, url, headers):
        self.calls += 1
        return await self._behaviour()


async def _hang():
    await asyncio.Event().wait()


async def _run_in_task(coro_fn):
    """Run coro_fn in its own task; return (task, any RetrievalError raised inside it)."""
    caught = {}

    async def wrapper():
        try:
            return await coro_fn()
        except RetrievalError as exc:
            caught["exc"] = exc
            raise

    task = asyncio.create_task(wrapper())
    return task, caught


@pytest.mark.asyncio
async def test_task_cancelled_while_in_flight():
    started = asyncio.Event()

    async def hang():
        started.set()
        await _hang()

    retriever = ModelRetriever(FakeTransport(hang))
    task, caught = await _run_in_task(lambda: retriever.openai(api_key="k"))

    await started.wait()
    task.cancel()
    await asyncio.wait({task})

    assert task.cancelled()
    assert caught == {}


@pytest.mark.asyncio
async def test_timeout_around_call_raises_timeout_error():
    retriever = ModelRetriever(FakeTransport(_hang))
    with pytest.raises(TimeoutError):
        async with asyncio.timeout(0.05):
            await retriever.openai(api_key="k")


@pytest.mark.asyncio
async def test_wait_for_around_call_raises_timeout_error():
    retriever = ModelRetriever(FakeTransport(_hang))
    with pytest.raises(TimeoutError):
        await asyncio.wait_for(retriever.ollama(), timeout=0.05)


@pytest.mark.asyncio
async def test_catch_all_in_caller_does_not_swallow_cancellation():
    started = asyncio.Event()

    async def hang():
        started.set()
        await _hang()

    retriever = ModelRetriever(FakeTransport(hang))

    async def caller():
        try:
            return await retriever.cohere(api_key="k")
        except Exception:
            return "swallowed"

    task = asyncio.create_task(caller())
    await started.wait()
    task.cancel()
    await asyncio.wait({task})

    assert task.cancelled()


@pytest.mark.asyncio
async def test_transport_reported_cancellation():
    async def cancelled():
        raise TransportCancelledError("cancelled by transport")

    retriever = ModelRetriever(FakeTransport(cancelled))
    with pytest.raises(Cancelled) as info:
        await retriever.ollama()
    assert str(info.value) == "Request was cancelled"


@pytest.mark.asyncio
async def test_transport_raising_cancelled_error_without_task_cancel():
    async def cancelled():
        raise asyncio.CancelledError()

    retriever = ModelRetriever(FakeTransport(cancelled))
    with pytest.raises(Cancelled):
        await retriever.cohere(api_key="k")


@pytest.mark.asyncio
async def test_cancellation_beats_response_arriving_at_the_same_time():
    async def respond_after_cancel():
        asyncio.current_task().cancel()
        return TransportResponse(status_code=200, body=b'{"data": [{"id": "gpt-4"}]}')

    retriever = ModelRetriever(FakeTransport(respond_after_cancel))
    task, caught = await _run_in_task(lambda: retriever.openai(api_key="k"))
    await asyncio.wait({task})

    assert task.cancelled()
    assert caught == {}


@pytest.mark.asyncio
async def test_cancellation_beats_transport_error_arriving_at_the_same_time():
    async def fail_after_cancel():
        asyncio.current_task().cancel()
        raise TransportError("connection reset")

    retriever = ModelRetriever(FakeTransport(fail_after_cancel))
    task, caught = await _run_in_task(lambda: retriever.openai(api_key="k"))
    await asyncio.wait({task})

    assert task.cancelled()
    assert caught == {}


@pytest.mark.asyncio
async def test_concurrent_calls_share_one_retriever():
    async def respond():
        await asyncio.sleep(0)
        return TransportResponse(status_code=200, body=b'{"models": [{"name": "a", "model": "a:1"}]}')

    transport = FakeTransport(respond)
    retriever = ModelRetriever(transport)
    results = await asyncio.gather(*(retriever.ollama() for _ in range(5)))

    assert transport.calls == 5
    assert all(r[0].id == "a:1" for r in results)
