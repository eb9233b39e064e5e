"""Lagged delta of an auxiliary series (e.g. the dollar index)."""

from __future__ import annotations

import math
from typing import Sequence


def is_missing(value: float | None) -> bool:
    return value is None or math.isnan(value)


def has_series(values: Sequence[float | None]) -> bool:
    """True when at least one value of the auxiliary series is present."""
    return any(not is_missing(v) for v in values)


def dxy_delta(series: Sequence[float | None], lag: int = 12) -> list[float]:
    """``series[i] - series[i - lag]`` where both ends exist, else 0.0."""
    if lag < 1:
        raise ValueError(f"lag must be >= 1, got {lag}")

    deltas: list[float] = []
    for i, value in enumerate(series):
        if i < lag or is_missing(value) or is_missing(series[i - lag]):
            deltas.append(0.0)
        else:
            deltas.append(value - series[i - lag])
    return deltas
