# src/batch_pacer/tasks/task_models.py

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from ..core.ports import Action


@dataclass(slots=True, frozen=True)
class WorkItem:
    id: int
    action: Action = field(repr=False)
    tag: Any = None


@dataclass(slots=True, frozen=True)
class TaskStatus:
    """
    Progress snapshot delivered with every completion/error event.

    All durations are in seconds.

    process:       smoothed per-item time divided by the concurrency limit.
                   This assumes every worker moves at the smoothed rate in
                   parallel; with very uneven item costs it is a rough estimate.
    remain:        remain_count * process (estimated time left for the queue)
    remain_count:  items still waiting in the queue (not counting in-flight)
    process_count: items completed successfully since the last statistics reset
    """

    process: float
    remain: float
    remain_count: int
    process_count: int

    def as_dict(self) -> dict[str, float | int]:
        """Wire shape used by UI/progress collaborators."""
        return {
            "process": self.process,
            "remain": self.remain,
            "remainCount": self.remain_count,
            "processCount": self.process_count,
        }


class Subscription:
    """
    Handle returned by Scheduler.on_completion()/on_error().

    unsubscribe() is idempotent. Also usable as a context manager:

        with scheduler.on_completion(cb):
            ...
    """

    __slots__ = ("_cancel", "_active")

    def __init__(self, cancel: Callable[[], None]) -> None:
        self._cancel = cancel
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def unsubscribe(self) -> None:
        if not self._active:
            return
        self._active = False
        self._cancel()

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc: object) -> None:
        self.unsubscribe()
