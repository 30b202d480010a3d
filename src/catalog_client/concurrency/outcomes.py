"""Timeout racing and tagged live/fallback outcomes.

``with_timeout`` races a live call against a timer and turns every expected
degraded-mode failure into a ``Failure`` value instead of an exception.
``first_success_or`` composes it with a fallback and returns ``Live(value)``
or ``Fallback(value)`` so callers branch on a tag, not on exceptions.
"""

from __future__ import annotations

import asyncio
import inspect
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Optional, TypeVar, Union

from catalog_client.contracts.errors import CatalogClientError, LiveCallFailed, Timeout

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True)
class Failure:
    error: LiveCallFailed


Result = Union[Success[T], Failure]


@dataclass(frozen=True)
class Live(Generic[T]):
    value: T
    is_fallback = False


@dataclass(frozen=True)
class Fallback(Generic[T]):
    value: T
    reason: Optional[LiveCallFailed] = None
    is_fallback = True


Outcome = Union[Live[T], Fallback[T]]


async def with_timeout(call: Awaitable[T], seconds: float, *, operation: Optional[str] = None) -> Result:
    """Await ``call`` for at most ``seconds``.

    The call is cancelled when the timer wins, so a late response can never
    overwrite whatever the caller does next. Definitive backend answers
    (NotFound, Forbidden, ValidationError) are not failures and propagate.
    """
    try:
        value = await asyncio.wait_for(call, timeout=seconds)
    except asyncio.TimeoutError:
        return Failure(Timeout(seconds, operation=operation))
    except LiveCallFailed as exc:
        if exc.operation is None:
            exc.operation = operation
        return Failure(exc)
    return Success(value)


async def first_success_or(
    live: Awaitable[T],
    fallback: Callable[[], Union[T, Awaitable[T]]],
    *,
    seconds: float,
    operation: Optional[str] = None,
    on_live_settled: Optional[Callable[[], None]] = None,
    on_live_failed: Optional[Callable[[LiveCallFailed], None]] = None,
) -> Outcome:
    """Return ``Live`` when the live call settles in time, else ``Fallback``.

    ``on_live_settled`` runs once the backend has answered (successfully or
    with a definitive error); ``on_live_failed`` runs before the fallback is
    computed. Either way the hook only sees a fully determined live outcome.
    """
    try:
        result = await with_timeout(live, seconds, operation=operation)
    except CatalogClientError:
        if on_live_settled is not None:
            on_live_settled()
        raise

    if isinstance(result, Success):
        if on_live_settled is not None:
            on_live_settled()
        return Live(result.value)

    if on_live_failed is not None:
        on_live_failed(result.error)
    value = fallback()
    if inspect.isawaitable(value):
        value = await value
    return Fallback(value, reason=result.error)
