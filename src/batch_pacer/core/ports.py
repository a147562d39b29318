# src/batch_pacer/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) at the scheduler boundary.

The scheduler depends on Protocols instead of concrete collaborators, so
progress bars, notifiers and tests can plug in plain functions.
"""

from typing import TYPE_CHECKING, Any, Awaitable, Callable, Protocol

if TYPE_CHECKING:
    from ..tasks.task_models import TaskStatus

Action = Callable[[], Awaitable[Any]]
# Zero-argument callable returning an awaitable (coroutine, Task, Future...).


class CompletionCallback(Protocol):
    """Called once per successfully finished work item."""
    def __call__(self, status: TaskStatus, result: Any, tag: Any) -> None: ...


class ErrorCallback(Protocol):
    """Called once per failed work item; error is ActionFailure or InvalidArgument."""
    def __call__(self, status: TaskStatus, error: BaseException, tag: Any) -> None: ...


class Clock(Protocol):
    """Monotonic time source in seconds (time.monotonic by default)."""
    def __call__(self) -> float: ...
