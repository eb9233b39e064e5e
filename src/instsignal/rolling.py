"""Fixed-window rolling statistics with warm-up semantics.

The window grows from the start of the sequence until it reaches ``window``
elements and then slides (expanding-then-fixed). A position whose window
holds fewer than ``min_periods`` observations yields ``None``.

``closed`` follows the pandas convention: ``"right"`` windows end at and
include position ``i``; ``"left"`` windows end just before it, so the value
at ``i`` only ever reflects strictly earlier elements.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Sequence


class RollingOp(Enum):
    """Supported window aggregations."""

    MEAN = "mean"
    MAX = "max"
    MIN = "min"


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


_OPS: dict[RollingOp, Callable[[Sequence[float]], float]] = {
    RollingOp.MEAN: _mean,
    RollingOp.MAX: max,
    RollingOp.MIN: min,
}


def _window_bounds(i: int, window: int, closed: str) -> tuple[int, int]:
    """Half-open ``[start, stop)`` index range of the window at position ``i``."""
    if closed == "right":
        stop = i + 1
    elif closed == "left":
        stop = i
    else:
        raise ValueError(f"closed must be 'right' or 'left', got {closed!r}")
    return max(0, stop - window), stop


def rolling(
    series: Sequence[float],
    window: int,
    min_periods: int,
    op: RollingOp | str,
    closed: str = "right",
) -> list[float | None]:
    """Apply ``op`` over a trailing window at every position of ``series``.

    Args:
        series: Input values in sequence order.
        window: Maximum number of observations per window.
        min_periods: Minimum observations required for a result.
        op: Aggregation: mean, max or min.
        closed: ``"right"`` to include the current element, ``"left"`` to
            aggregate only the elements before it.

    Returns:
        One value per input position; ``None`` where history is insufficient.
    """
    if window < 1:
        raise ValueError(f"window must be >= 1, got {window}")
    if min_periods < 1:
        raise ValueError(f"min_periods must be >= 1, got {min_periods}")
    fn = _OPS[RollingOp(op)]

    result: list[float | None] = []
    for i in range(len(series)):
        start, stop = _window_bounds(i, window, closed)
        if stop - start < min_periods:
            result.append(None)
            continue
        result.append(fn(series[start:stop]))
    return result


def rolling_mean(
    series: Sequence[float], window: int, min_periods: int,
) -> list[float | None]:
    return rolling(series, window, min_periods, RollingOp.MEAN)


def rolling_max(
    series: Sequence[float], window: int, min_periods: int, closed: str = "right",
) -> list[float | None]:
    return rolling(series, window, min_periods, RollingOp.MAX, closed=closed)


def rolling_min(
    series: Sequence[float], window: int, min_periods: int, closed: str = "right",
) -> list[float | None]:
    return rolling(series, window, min_periods, RollingOp.MIN, closed=closed)
