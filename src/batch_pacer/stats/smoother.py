# src/batch_pacer/stats/smoother.py

from __future__ import annotations

"""
Two-level sliding-window average.

value():        mean of the last `window_size` samples
smooth_value(): mean of the last `window_size` values of value()

Averaging the moving averages damps one-off spikes (a single slow call)
without widening the primary window, which would slow the reaction to a real
shift in latency.
"""

import math
from collections import deque
from collections.abc import Iterable
from numbers import Real

import numpy as np

from ..errors import InvalidArgument

DEFAULT_WINDOW_SIZE = 10


def _mean(values: Iterable[float]) -> float:
    arr = np.fromiter(values, dtype=float)
    if arr.size == 0:
        return 0.0
    return float(arr.mean())


class Smoother:
    """
    Example:
        s = Smoother(3)
        for n in (10, 20, 30):
            s.add(n)
        s.value()         # 20.0
        s.smooth_value()  # 15.0  (mean of 10, 15, 20)
    """

    def __init__(self, window_size: int = DEFAULT_WINDOW_SIZE) -> None:
        size = int(window_size) if window_size is not None else DEFAULT_WINDOW_SIZE
        self._window_size = size if size > 0 else DEFAULT_WINDOW_SIZE
        self._samples: deque[float] = deque(maxlen=self._window_size)
        self._means: deque[float] = deque(maxlen=self._window_size)
        self._value = 0.0
        self._smooth = 0.0

    @property
    def window_size(self) -> int:
        return self._window_size

    @property
    def samples(self) -> tuple[float, ...]:
        return tuple(self._samples)

    @property
    def means(self) -> tuple[float, ...]:
        return tuple(self._means)

    def __len__(self) -> int:
        return len(self._samples)

    def add(self, n: float) -> None:
        # bool is a Real subclass.
        if isinstance(n, bool) or not isinstance(n, Real):
            raise InvalidArgument(f"expected a finite number, got {type(n).__name__}: {n!r}")
        x = float(n)
        if not math.isfinite(x):
            raise InvalidArgument(f"expected a finite number, got {n!r}")

        self._samples.append(x)
        self._value = _mean(self._samples)
        self._means.append(self._value)
        self._smooth = _mean(self._means)

    def value(self) -> float:
        return self._value

    def smooth_value(self) -> float:
        return self._smooth

    def reset(self) -> None:
        """Forget all samples (window size is kept)."""
        self._samples.clear()
        self._means.clear()
        self._value = 0.0
        self._smooth = 0.0

    def __repr__(self) -> str:
        return (
            f"Smoother(window_size={self._window_size}, n={len(self._samples)}, "
            f"value={self._value:.6g}, smooth={self._smooth:.6g})"
        )
