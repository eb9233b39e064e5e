"""Signal pipeline configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from instsignal.errors import InvalidTimeframeError


class Timeframe(Enum):
    """Supported bar intervals."""

    M1 = "m1"
    M5 = "m5"
    M15 = "m15"
    M30 = "m30"
    H1 = "h1"

    @classmethod
    def parse(cls, value: Timeframe | str) -> Timeframe:
        """Coerce a string such as ``"m5"`` or ``" H1 "`` to a Timeframe."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidTimeframeError(value)


# Swing look-back in bars, chosen so each window spans a comparable
# wall-clock period across timeframes.
DEFAULT_SWING_LOOKBACKS: dict[Timeframe, int] = {
    Timeframe.M1: 24,
    Timeframe.M5: 12,
    Timeframe.M15: 8,
    Timeframe.M30: 6,
    Timeframe.H1: 4,
}


@dataclass(frozen=True)
class SessionWeights:
    """Weight assigned to each UTC trading session.

    Attributes:
        asia: 00:00-07:59 UTC.
        london: 08:00-12:59 UTC.
        new_york: 13:00-21:59 UTC.
        off_hours: 22:00-23:59 UTC.
    """

    asia: float = 0.2
    london: float = 0.6
    new_york: float = 1.0
    off_hours: float = 0.2


@dataclass(frozen=True)
class CompositeWeights:
    """Coefficients of the raw composite score.

    ``volume``, ``price`` and ``session`` are added; ``liquidity_trap`` and
    ``dxy`` are subtracted.
    """

    volume: float = 0.40
    price: float = 0.30
    session: float = 0.20
    liquidity_trap: float = 0.10
    dxy: float = 0.05


@dataclass(frozen=True)
class SignalConfig:
    """Configuration for SignalPipeline.

    Attributes:
        default_timeframe: Timeframe used when ``process`` is called without one.
        swing_lookbacks: Liquidity-trap look-back (bars) per timeframe.
        volume_window: Trailing window for the volume average.
        volume_min_periods: Observations required before the volume average exists.
        range_window: Trailing window for the true-range average.
        range_min_periods: Observations required before the range average exists.
        wick_threshold: Minimum wick-to-range ratio for a sweep.
        dxy_lag: Lag (bars) of the cross-asset delta.
        clip_low: Lower clip bound of the raw composite.
        clip_high: Upper clip bound of the raw composite.
        buy_threshold: Normalized score at or above which a bar is BUY.
        sell_threshold: Normalized score at or below which a bar is SELL.
        session_weights: Session weight table.
        weights: Composite coefficients.
        validate: Whether to run (non-fatal) quality checks on each batch.
    """

    default_timeframe: Timeframe = Timeframe.M5
    swing_lookbacks: dict[Timeframe, int] = field(
        default_factory=lambda: dict(DEFAULT_SWING_LOOKBACKS)
    )
    volume_window: int = 20
    volume_min_periods: int = 5
    range_window: int = 20
    range_min_periods: int = 5
    wick_threshold: float = 0.6
    dxy_lag: int = 12
    clip_low: float = -1.5
    clip_high: float = 1.5
    buy_threshold: float = 0.70
    sell_threshold: float = -0.70
    session_weights: SessionWeights = field(default_factory=SessionWeights)
    weights: CompositeWeights = field(default_factory=CompositeWeights)
    validate: bool = True

    def __post_init__(self) -> None:
        for name in (
            "volume_window", "volume_min_periods",
            "range_window", "range_min_periods", "dxy_lag",
        ):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be >= 1, got {getattr(self, name)}")
        for tf, lookback in self.swing_lookbacks.items():
            if lookback < 1:
                raise ValueError(f"swing lookback for {tf.value} must be >= 1, got {lookback}")
        if self.clip_high <= self.clip_low:
            raise ValueError(
                f"clip_high must exceed clip_low, got {self.clip_low}..{self.clip_high}"
            )

    def lookback_for(self, timeframe: Timeframe | str) -> int:
        """Swing look-back for ``timeframe``."""
        tf = Timeframe.parse(timeframe)
        try:
            return self.swing_lookbacks[tf]
        except KeyError:
            raise InvalidTimeframeError(timeframe) from None
