"""Base features, composite score, normalization and classification."""

from __future__ import annotations

from typing import Sequence

from instsignal.config import CompositeWeights
from instsignal.models.bar import RawBar
from instsignal.models.processed import SignalClass
from instsignal.rolling import rolling_mean

# ---- base features ----


def true_range(bars: Sequence[RawBar]) -> list[float]:
    """High minus low per bar (no previous-close term)."""
    return [b.high - b.low for b in bars]


def direction(bars: Sequence[RawBar]) -> list[int]:
    """Sign of close minus open: -1, 0 or 1."""
    out: list[int] = []
    for b in bars:
        diff = b.close - b.open
        out.append((diff > 0) - (diff < 0))
    return out


def _relative(
    values: Sequence[float], window: int, min_periods: int,
) -> list[float]:
    """Each value divided by its trailing mean; 0.0 while the mean is unusable."""
    means = rolling_mean(values, window, min_periods)
    return [
        v / m if m is not None and m > 0 else 0.0
        for v, m in zip(values, means)
    ]


def volume_delta(
    volumes: Sequence[float], window: int = 20, min_periods: int = 5,
) -> list[float]:
    return _relative(volumes, window, min_periods)


def price_delta(
    ranges: Sequence[float],
    directions: Sequence[int],
    window: int = 20,
    min_periods: int = 5,
) -> list[float]:
    """True-range ratio signed by bar direction."""
    ratios = _relative(ranges, window, min_periods)
    return [r * d for r, d in zip(ratios, directions)]


# ---- composite ----


def composite(
    dv: float,
    dp: float,
    session: float,
    liq_trap: float,
    dxy_delta: float,
    weights: CompositeWeights | None = None,
) -> float:
    """Raw (unbounded) weighted composite of the five feature channels."""
    w = weights or CompositeWeights()
    return (
        w.volume * dv
        + w.price * dp
        + w.session * session
        - w.liquidity_trap * liq_trap
        - w.dxy * dxy_delta
    )


def normalize_to_unit(value: float, lo: float = -1.5, hi: float = 1.5) -> float:
    """Clip ``value`` to ``[lo, hi]`` and rescale linearly onto ``[-1, 1]``."""
    if hi <= lo:
        raise ValueError(f"hi must exceed lo, got lo={lo}, hi={hi}")
    clipped = max(lo, min(hi, value))
    return -1 + 2 * (clipped - lo) / (hi - lo)


def classify(
    value: float, buy_threshold: float = 0.70, sell_threshold: float = -0.70,
) -> SignalClass:
    if value >= buy_threshold:
        return SignalClass.BUY
    if value <= sell_threshold:
        return SignalClass.SELL
    return SignalClass.NEUTRAL
