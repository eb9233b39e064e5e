"""Processed bar: input OHLCV plus derived features and signal."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class SignalClass(Enum):
    """Discrete classification of the institutional signal."""

    BUY = "BUY"
    SELL = "SELL"
    NEUTRAL = "NEUTRAL"


@dataclass(frozen=True)
class ProcessedBar:
    """One output row per input bar, in ascending time order.

    Attributes:
        time: Parsed bar time (UTC).
        open: Opening price.
        high: High price.
        low: Low price.
        close: Closing price.
        volume: Trading volume.
        dV: Volume relative to its trailing average (0.0 during warm-up).
        dP: True range relative to its trailing average, signed by bar direction.
        session_index: Session weight of the bar's UTC hour.
        liq_trap: 1.0 high sweep, -1.0 low sweep, 0.0 otherwise.
        dxy_delta: Lagged change of the auxiliary series (0.0 when absent).
        institution_signal: Composite score, clipped and rescaled to [-1, 1].
        signal_class: BUY / SELL / NEUTRAL bucket of ``institution_signal``.
        dxy: Auxiliary index level carried through from the input.
    """

    time: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float
    dV: float
    dP: float
    session_index: float
    liq_trap: float
    dxy_delta: float
    institution_signal: float
    signal_class: SignalClass
    dxy: float | None = None
