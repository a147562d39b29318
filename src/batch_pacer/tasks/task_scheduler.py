# src/batch_pacer/tasks/task_scheduler.py

from __future__ import annotations

"""
Bounded-concurrency task scheduler.

A small dispatch loop that:
- takes work items from a FIFO queue,
- keeps at most `concurrency_limit` of them running,
- times each item and feeds the duration to a private Smoother,
- multicasts a TaskStatus (throughput/ETA) on every completion or failure.

Everything runs on one asyncio event loop. The check -> dequeue -> increment
sequence has no await in between, so the bound holds without a lock.
"""

import asyncio
import itertools
import logging
import time
from collections import deque
from typing import Any

from ..core.ports import Action, Clock, CompletionCallback, ErrorCallback
from ..errors import ActionFailure, InvalidAction, InvalidArgument
from ..stats.smoother import DEFAULT_WINDOW_SIZE, Smoother
from .task_models import Subscription, TaskStatus, WorkItem

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 3


class Scheduler:
    """
    Run many independent async work items with a hard cap on concurrency.

    Example:
        scheduler = Scheduler(2)
        scheduler.on_completion(lambda status, result, tag: print(tag, status.remain))
        for url in urls:
            scheduler.submit(lambda url=url: fetch(url), tag=url)
        await scheduler.drain()

    Lifecycle:
        dormant  -> running   first submit(); statistics are reset
        running  -> draining  queue empty, items still in flight
        draining -> dormant   last in-flight item settles
    stop() drops the queue; in-flight items still finish and still report.
    """

    def __init__(
            self,
            concurrency_limit: int = DEFAULT_CONCURRENCY,
            *,
            window_size: int = DEFAULT_WINDOW_SIZE,
            clock: Clock = time.monotonic,
    ) -> None:
        limit = int(concurrency_limit) if concurrency_limit is not None else DEFAULT_CONCURRENCY
        self._limit = limit if limit > 0 else DEFAULT_CONCURRENCY
        self._clock = clock
        self._smoother = Smoother(window_size)

        self._pending: deque[WorkItem] = deque()
        self._ids = itertools.count(1)
        self._in_flight = 0

        self._completed = 0
        self._failed = 0
        self._durations: list[float] = []
        self._started_at = clock()
        self._run_started = False

        self._listener_ids = itertools.count(1)
        self._completion_listeners: dict[int, CompletionCallback] = {}
        self._error_listeners: dict[int, ErrorCallback] = {}

        self._dispatcher: asyncio.Task[None] | None = None
        self._running: set[asyncio.Task[None]] = set()
        self._slot_freed = asyncio.Event()
        self._idle = asyncio.Event()
        self._idle.set()

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def concurrency_limit(self) -> int:
        return self._limit

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    @property
    def in_flight(self) -> int:
        return self._in_flight

    @property
    def completed_count(self) -> int:
        return self._completed

    @property
    def failed_count(self) -> int:
        return self._failed

    @property
    def durations(self) -> tuple[float, ...]:
        """Durations (seconds) of successful items since the last statistics reset."""
        return tuple(self._durations)

    @property
    def elapsed(self) -> float:
        """Seconds since the last statistics reset."""
        return self._clock() - self._started_at

    @property
    def is_idle(self) -> bool:
        return not self._pending and self._in_flight == 0

    def __repr__(self) -> str:
        return (
            f"Scheduler(limit={self._limit}, pending={len(self._pending)}, "
            f"in_flight={self._in_flight}, completed={self._completed}, failed={self._failed})"
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def submit(self, action: Action, tag: Any = None) -> int:
        """
        Queue `action` (a zero-arg callable returning an awaitable) and return its item id.

        Never blocks. Must be called from code running on the event loop.
        """
        if not callable(action):
            raise InvalidAction(f"action must be callable, got {type(action).__name__}")

        loop = asyncio.get_running_loop()

        if not self._run_started:
            self.reset_statistics()

        item = WorkItem(id=next(self._ids), action=action, tag=tag)
        self._pending.append(item)
        self._idle.clear()

        if self._dispatcher is None or self._dispatcher.done():
            self._dispatcher = loop.create_task(self._dispatch_loop(), name="batch-pacer-dispatch")

        return item.id

    async def drain(self) -> None:
        """Wait until the queue is empty and nothing is in flight."""
        # set() wakes waiters even if a submit() clears the event again before they run.
        while not self.is_idle:
            await self._idle.wait()

    def stop(self) -> int:
        """Drop every queued item. In-flight items are left alone. Returns the number dropped."""
        dropped = len(self._pending)
        self._pending.clear()
        if dropped:
            logger.info("Scheduler stopped: dropped %d queued item(s), %d still in flight", dropped, self._in_flight)
        self._mark_idle_if_quiet()
        return dropped

    def reset_statistics(self) -> None:
        """
        Start a new measurement run: start time, counters, duration history and smoother.

        Called automatically by the first submit() after the scheduler went idle.
        """
        self._started_at = self._clock()
        self._completed = 0
        self._failed = 0
        self._durations.clear()
        self._smoother.reset()
        self._run_started = True
        logger.debug("Scheduler statistics reset")

    def on_completion(self, callback: CompletionCallback) -> Subscription:
        """Register `callback(status, result, tag)` for every successful item."""
        key = next(self._listener_ids)
        self._completion_listeners[key] = callback
        return Subscription(lambda: self._completion_listeners.pop(key, None))

    def on_error(self, callback: ErrorCallback) -> Subscription:
        """Register `callback(status, error, tag)` for every failed item."""
        key = next(self._listener_ids)
        self._error_listeners[key] = callback
        return Subscription(lambda: self._error_listeners.pop(key, None))

    def status(self) -> TaskStatus:
        """Current progress snapshot (same shape as the one sent to listeners)."""
        per_item = self._smoother.smooth_value() / self._limit
        remain_count = len(self._pending)
        return TaskStatus(
            process=per_item,
            remain=remain_count * per_item,
            remain_count=remain_count,
            process_count=self._completed,
        )

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    async def _dispatch_loop(self) -> None:
        while self._pending:
            if self._in_flight >= self._limit:
                self._slot_freed.clear()
                await self._slot_freed.wait()
                continue

            item = self._pending.popleft()
            dequeued_at = self._clock()
            self._in_flight += 1
            logger.debug("Dispatch item=%s tag=%r in_flight=%d", item.id, item.tag, self._in_flight)

            task = asyncio.create_task(self._run_item(item, dequeued_at), name=f"batch-pacer-item-{item.id}")
            self._running.add(task)
            task.add_done_callback(self._running.discard)

    async def _run_item(self, item: WorkItem, started: float) -> None:
        try:
            try:
                result = await item.action()
            except Exception as exc:
                logger.warning("Work item %s (tag=%r) failed: %r", item.id, item.tag, exc)
                failure = ActionFailure(item.id, item.tag, exc)
                failure.__cause__ = exc
                self._record_failure(item, failure)
                return

            duration = self._clock() - started  # includes time queued on the event loop
            try:
                self._smoother.add(duration)
            except InvalidArgument as exc:
                logger.warning("Work item %s: could not record duration %r: %s", item.id, duration, exc)
                self._record_failure(item, exc)
                return

            self._completed += 1
            self._durations.append(duration)
            logger.debug("Done item=%s tag=%r duration=%.3fs", item.id, item.tag, duration)
            self._emit_completion(self.status(), result, item.tag)
        finally:
            self._in_flight -= 1
            self._slot_freed.set()
            self._mark_idle_if_quiet()

    def _record_failure(self, item: WorkItem, error: BaseException) -> None:
        self._failed += 1
        status = self.status()
        for callback in list(self._error_listeners.values()):
            try:
                callback(status, error, item.tag)
            except Exception:
                logger.exception("Error listener failed for item=%s", item.id)

    def _emit_completion(self, status: TaskStatus, result: Any, tag: Any) -> None:
        for callback in list(self._completion_listeners.values()):
            try:
                callback(status, result, tag)
            except Exception:
                logger.exception("Completion listener failed tag=%r", tag)

    def _mark_idle_if_quiet(self) -> None:
        if self._pending or self._in_flight:
            return
        if not self._idle.is_set():
            logger.debug("Scheduler idle (completed=%d failed=%d)", self._completed, self._failed)
        self._idle.set()
        self._run_started = False
