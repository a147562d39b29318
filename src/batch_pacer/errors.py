# src/batch_pacer/errors.py

from __future__ import annotations

from typing import Any


class PacerError(Exception):
    """Base class for everything raised by batch_pacer."""


class InvalidArgument(PacerError, ValueError):
    """A Smoother was fed something that is not a finite real number."""


class InvalidAction(PacerError, TypeError):
    """submit() was given a work item that is not callable."""


class ActionFailure(PacerError):
    """
    A submitted action raised.

    The original exception is kept both as `original` and as `__cause__`,
    so tracebacks in logs show the real failure.
    """

    def __init__(self, item_id: int, tag: Any, original: BaseException) -> None:
        super().__init__(f"work item {item_id} failed: {original!r}")
        self.item_id = item_id
        self.tag = tag
        self.original = original
