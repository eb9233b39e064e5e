"""Raw input bar (OHLCV + optional auxiliary index level)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class RawBar:
    """Single input bar, as handed over by the ingestion layer.

    Attributes:
        time: Epoch seconds, a parseable timestamp string, or a datetime.
        open: Opening price.
        high: High price.
        low: Low price.
        close: Closing price.
        volume: Trading volume.
        dxy: Auxiliary index level (e.g. the dollar index), if supplied.
    """

    time: float | str | datetime
    open: float
    high: float
    low: float
    close: float
    volume: float
    dxy: float | None = None
