"""
batch_pacer: bounded-concurrency asyncio scheduler with live ETA estimates.

Components:
- stats/smoother.py: two-level sliding-window average
- tasks/task_scheduler.py: Scheduler (concurrency cap, completion/error events)
- tasks/waiting.py: wait_until() predicate polling helper
"""

from .errors import ActionFailure, InvalidAction, InvalidArgument, PacerError
from .stats.smoother import Smoother
from .tasks.task_models import Subscription, TaskStatus, WorkItem
from .tasks.task_scheduler import Scheduler
from .tasks.waiting import wait_until

__all__ = [
    "ActionFailure",
    "InvalidAction",
    "InvalidArgument",
    "PacerError",
    "Scheduler",
    "Smoother",
    "Subscription",
    "TaskStatus",
    "WorkItem",
    "wait_until",
]

__version__ = "0.1.0"
