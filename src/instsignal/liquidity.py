"""Liquidity sweep ("liquidity trap") detection.

A bar sweeps liquidity when it trades beyond the most recent swing extreme
but closes back inside, leaving a long rejection wick:

    high sweep  ->  1.0   high > prior swing high and upper wick >= threshold
    low sweep   -> -1.0   low  < prior swing low  and lower wick >= threshold

The swing extremes are the rolling max/min of the ``lookback`` bars strictly
before the current one. A high sweep wins when both conditions hold.
"""

from __future__ import annotations

from typing import Sequence

from instsignal.models.bar import RawBar
from instsignal.rolling import rolling_max, rolling_min

HIGH_SWEEP = 1.0
LOW_SWEEP = -1.0
NO_SWEEP = 0.0


def wick_ratios(bar: RawBar) -> tuple[float, float] | None:
    """Upper and lower wick as fractions of the bar range; None for flat bars."""
    rng = bar.high - bar.low
    if rng == 0:
        return None
    upper = (bar.high - max(bar.open, bar.close)) / rng
    lower = (min(bar.open, bar.close) - bar.low) / rng
    return upper, lower


def liquidity_trap(
    bars: Sequence[RawBar],
    lookback: int,
    wick_threshold: float = 0.6,
) -> list[float]:
    """Sweep flag per bar, in input order.

    ``bars`` must already be sorted by time. Bars with no earlier bar to
    compare against, and flat bars, yield 0.0.
    """
    if lookback < 1:
        raise ValueError(f"lookback must be >= 1, got {lookback}")

    prior_high = rolling_max([b.high for b in bars], lookback, 1, closed="left")
    prior_low = rolling_min([b.low for b in bars], lookback, 1, closed="left")

    flags: list[float] = []
    for bar, p_high, p_low in zip(bars, prior_high, prior_low):
        if p_high is None or p_low is None:
            flags.append(NO_SWEEP)
            continue
        wicks = wick_ratios(bar)
        if wicks is None:
            flags.append(NO_SWEEP)
            continue
        upper, lower = wicks
        if bar.high > p_high and upper >= wick_threshold:
            flags.append(HIGH_SWEEP)
        elif bar.low < p_low and lower >= wick_threshold:
            flags.append(LOW_SWEEP)
        else:
            flags.append(NO_SWEEP)
    return flags
