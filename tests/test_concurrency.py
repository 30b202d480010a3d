import asyncio

import pytest

from catalog_client.concurrency import (
    CancellableTimer,
    Debouncer,
    Failure,
    Fallback,
    Live,
    Success,
    first_success_or,
    with_timeout,
)
from catalog_client.contracts import NetworkError, NotFound, Timeout


async def value_after(delay, value):
    await asyncio.sleep(delay)
    return value


async def raise_(error):
    raise error


@pytest.mark.asyncio
async def test_with_timeout_returns_success():
    result = await with_timeout(value_after(0, "ok"), 1)

    assert result == Success("ok")


@pytest.mark.asyncio
async def test_with_timeout_turns_slow_call_into_timeout_failure():
    result = await with_timeout(value_after(1, "late"), 0.01, operation="list_products")

    assert isinstance(result, Failure)
    assert isinstance(result.error, Timeout)
    assert result.error.operation == "list_products"


@pytest.mark.asyncio
async def test_with_timeout_wraps_live_failures_and_propagates_answers():
    result = await with_timeout(raise_(NetworkError("refused")), 1, operation="get_product")
    assert isinstance(result.error, NetworkError)
    assert result.error.operation == "get_product"

    with pytest.raises(NotFound):
        await with_timeout(raise_(NotFound("Product", 9)), 1)


@pytest.mark.asyncio
async def test_first_success_or_prefers_live_and_reports_settled():
    events = []

    outcome = await first_success_or(
        value_after(0, "live"),
        lambda: "demo",
        seconds=1,
        on_live_settled=lambda: events.append("settled"),
        on_live_failed=lambda e: events.append("failed"),
    )

    assert outcome == Live("live")
    assert outcome.is_fallback is False
    assert events == ["settled"]


@pytest.mark.asyncio
async def test_first_success_or_falls_back_after_failure_hook():
    events = []

    async def fallback():
        events.append("fallback")
        return "demo"

    outcome = await first_success_or(
        value_after(1, "live"),
        fallback,
        seconds=0.01,
        on_live_failed=lambda e: events.append(type(e).__name__),
    )

    assert isinstance(outcome, Fallback)
    assert outcome.value == "demo"
    assert isinstance(outcome.reason, Timeout)
    assert events == ["Timeout", "fallback"]


@pytest.mark.asyncio
async def test_first_success_or_surfaces_answers_without_fallback():
    fallback_calls = []
    settled = []

    with pytest.raises(NotFound):
        await first_success_or(
            raise_(NotFound("Review", 5)),
            lambda: fallback_calls.append(1),
            seconds=1,
            on_live_settled=lambda: settled.append(True),
        )

    assert fallback_calls == []
    assert settled == [True]


@pytest.mark.asyncio
async def test_cancelled_timer_never_fires():
    fired = []
    timer = CancellableTimer(0.02, lambda: fired.append(1))

    assert timer.cancel() is True
    await timer.wait()
    await asyncio.sleep(0.05)

    assert fired == []
    assert timer.cancelled and not timer.fired


@pytest.mark.asyncio
async def test_debouncer_only_fires_last_callback():
    fired = []
    debouncer = Debouncer()

    for value in ("p", "ph", "pho"):
        debouncer.schedule("search", 0.03, lambda v=value: fired.append(v))
        await asyncio.sleep(0.005)

    assert debouncer.pending("search")
    await debouncer.wait("search")

    assert fired == ["pho"]
    assert not debouncer.pending("search")


@pytest.mark.asyncio
async def test_debouncer_awaits_async_callbacks():
    fired = []

    async def callback():
        await asyncio.sleep(0)
        fired.append("done")

    debouncer = Debouncer()
    debouncer.schedule("k", 0, callback)
    await debouncer.wait("k")

    assert fired == ["done"]
