# src/batch_pacer/tasks/waiting.py

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

DEFAULT_WAIT_INTERVAL = 0.1

Predicate = Callable[[], bool | Awaitable[bool]]


async def _check(predicate: Predicate) -> bool:
    try:
        value = predicate()
        if inspect.isawaitable(value):
            value = await value
        return bool(value)
    except Exception:
        logger.debug("wait_until predicate raised; treating as not ready", exc_info=True)
        return False


async def wait_until(predicate: Predicate, interval: float = DEFAULT_WAIT_INTERVAL) -> None:
    """
    Poll `predicate` until it returns something truthy.

    - checked once immediately, then every `interval` seconds
    - sync and async predicates are both accepted
    - a predicate that raises counts as "not ready yet"

    There is no timeout; wrap in asyncio.wait_for() if you need one.
    """
    delay = float(interval) if interval and interval > 0 else DEFAULT_WAIT_INTERVAL

    while not await _check(predicate):
        await asyncio.sleep(delay)
