"""SignalPipeline — batch orchestrator from raw bars to classified signals."""

from __future__ import annotations

import logging
import numbers
import re
import warnings
from collections import Counter
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

import pandas as pd

from instsignal.composer import (
    classify,
    composite,
    direction,
    normalize_to_unit,
    price_delta,
    true_range,
    volume_delta,
)
from instsignal.config import SignalConfig, Timeframe
from instsignal.cross_asset import dxy_delta, has_series
from instsignal.errors import EmptyInputError, InvalidTimeFormatError
from instsignal.liquidity import liquidity_trap
from instsignal.models.bar import RawBar
from instsignal.models.processed import ProcessedBar, SignalClass
from instsignal.quality import validate_bars
from instsignal.session import session_index_at

logger = logging.getLogger(__name__)


# String times must carry a full calendar date: numeric year-month-day in
# either order, or a month name with day and year.
_CALENDAR_DATE = re.compile(
    r"\d{4}[-/.]\d{1,2}[-/.]\d{1,2}"
    r"|\d{1,2}[-/.]\d{1,2}[-/.]\d{4}"
    r"|[A-Za-z]{3,}\.?\s+\d{1,2}(?:st|nd|rd|th)?,?\s+\d{4}"
    r"|\d{1,2}(?:st|nd|rd|th)?\s+[A-Za-z]{3,}\.?,?\s+\d{4}"
)


def parse_time(value: Any) -> datetime:
    """Parse a bar time into an aware UTC datetime.

    Numbers are epoch seconds; strings are calendar timestamps carrying a
    full date (naive ones are taken as UTC); datetimes pass through,
    converted to UTC. Sub-microsecond precision is truncated.

    Raises:
        InvalidTimeFormatError: ``value`` cannot be interpreted as a time.
    """
    if isinstance(value, bool):
        raise InvalidTimeFormatError(value)

    if isinstance(value, datetime):
        if pd.isna(value):
            raise InvalidTimeFormatError(value)
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    if isinstance(value, numbers.Real):
        try:
            return datetime.fromtimestamp(float(value), tz=timezone.utc)
        except (ValueError, OverflowError, OSError):
            raise InvalidTimeFormatError(value) from None

    if isinstance(value, str):
        text = value.strip()
        if not _CALENDAR_DATE.search(text):
            raise InvalidTimeFormatError(value)
        try:
            ts = pd.to_datetime(text, utc=True)
        except (ValueError, TypeError, OverflowError):
            raise InvalidTimeFormatError(value) from None
        if pd.isna(ts):
            raise InvalidTimeFormatError(value)
        with warnings.catch_warnings():
            # nanoseconds are discarded
            warnings.simplefilter("ignore", UserWarning)
            return ts.to_pydatetime()

    raise InvalidTimeFormatError(value)


def _as_raw_bar(bar: RawBar | Mapping[str, Any]) -> RawBar:
    if isinstance(bar, RawBar):
        return bar
    return RawBar(
        time=bar["time"],
        open=bar["open"],
        high=bar["high"],
        low=bar["low"],
        close=bar["close"],
        volume=bar["volume"],
        dxy=bar.get("dxy"),
    )


class SignalPipeline:
    """Single-pass batch transform: parse -> sort -> features -> signal.

    Usage::

        pipeline = SignalPipeline(SignalConfig())
        rows = pipeline.process(bars, "m5")

    The pipeline holds only its configuration; each ``process`` call is
    independent of every other.
    """

    def __init__(self, config: SignalConfig | None = None) -> None:
        self.config = config or SignalConfig()

    def process(
        self,
        bars: Iterable[RawBar | Mapping[str, Any]],
        timeframe: Timeframe | str | None = None,
    ) -> list[ProcessedBar]:
        """Process a batch of bars into one ProcessedBar per bar, oldest first.

        Raises:
            EmptyInputError: ``bars`` is empty.
            InvalidTimeFormatError: any bar's time cannot be parsed.
            InvalidTimeframeError: ``timeframe`` is not supported.
        """
        cfg = self.config
        raw = [_as_raw_bar(b) for b in bars]
        if not raw:
            raise EmptyInputError()

        tf = cfg.default_timeframe if timeframe is None else Timeframe.parse(timeframe)
        lookback = cfg.lookback_for(tf)

        # 1. Parse every time up front; any failure rejects the batch
        timed = [(parse_time(b.time), b) for b in raw]

        # 2. Stable ascending sort
        timed.sort(key=lambda pair: pair[0])
        times = [t for t, _ in timed]
        ordered = [b for _, b in timed]

        if cfg.validate:
            self._report_quality(ordered, times)

        # 3. Features
        ranges = true_range(ordered)
        dv = volume_delta(
            [b.volume for b in ordered], cfg.volume_window, cfg.volume_min_periods,
        )
        dp = price_delta(
            ranges, direction(ordered), cfg.range_window, cfg.range_min_periods,
        )
        sessions = [session_index_at(t, cfg.session_weights) for t in times]
        traps = liquidity_trap(ordered, lookback, cfg.wick_threshold)

        dxy_values = [b.dxy for b in ordered]
        with_dxy = has_series(dxy_values)
        if with_dxy:
            deltas = dxy_delta(dxy_values, cfg.dxy_lag)
        else:
            deltas = [0.0] * len(ordered)

        logger.debug(
            "Processing %d bars (timeframe=%s, lookback=%d, dxy=%s)",
            len(ordered), tf.value, lookback, with_dxy,
        )

        # 4. Composite, normalize, classify
        rows: list[ProcessedBar] = []
        for i, (t, b) in enumerate(timed):
            raw_score = composite(
                dv[i], dp[i], sessions[i], traps[i], deltas[i], cfg.weights,
            )
            signal = normalize_to_unit(raw_score, cfg.clip_low, cfg.clip_high)
            rows.append(ProcessedBar(
                time=t,
                open=b.open,
                high=b.high,
                low=b.low,
                close=b.close,
                volume=b.volume,
                dV=dv[i],
                dP=dp[i],
                session_index=sessions[i],
                liq_trap=traps[i],
                dxy_delta=deltas[i],
                institution_signal=signal,
                signal_class=classify(signal, cfg.buy_threshold, cfg.sell_threshold),
                dxy=b.dxy,
            ))

        counts = Counter(r.signal_class for r in rows)
        logger.info(
            "Processed %d bars: %d BUY, %d SELL, %d NEUTRAL",
            len(rows),
            counts[SignalClass.BUY],
            counts[SignalClass.SELL],
            counts[SignalClass.NEUTRAL],
        )
        return rows

    # ------------------------------------------------------------ internal

    @staticmethod
    def _report_quality(bars: list[RawBar], times: list[datetime]) -> None:
        result = validate_bars(bars, times)
        for check in result.failed_checks:
            logger.warning("Quality check '%s' failed: %s", check.name, check.message)


def process_bars(
    bars: Iterable[RawBar | Mapping[str, Any]],
    timeframe: Timeframe | str = Timeframe.M5,
    config: SignalConfig | None = None,
) -> list[ProcessedBar]:
    """Functional shortcut for ``SignalPipeline(config).process(bars, timeframe)``."""
    return SignalPipeline(config).process(bars, timeframe)
