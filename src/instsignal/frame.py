"""DataFrame and CSV adapters around the signal pipeline.

Ingestion: ``read_bars_csv`` / ``bars_from_frame`` turn tabular OHLCV data
into ``RawBar`` objects. Export: ``to_frame`` / ``write_signals_csv`` turn
processed bars back into a table.
"""

from __future__ import annotations

import logging
import warnings
from datetime import datetime
from pathlib import Path
from typing import IO, Any, Sequence

import pandas as pd

from instsignal.errors import MissingColumnsError
from instsignal.models.bar import RawBar
from instsignal.models.processed import ProcessedBar

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["time", "open", "high", "low", "close", "volume"]
OUTPUT_COLUMNS = [
    "time", "open", "high", "low", "close", "volume", "dxy",
    "dV", "dP", "session_index", "liq_trap", "dxy_delta",
    "institution_signal", "signal_class",
]


def _time_values(col: pd.Series) -> list[Any]:
    """Column of bar times as epoch seconds, datetimes or raw strings."""
    if pd.api.types.is_bool_dtype(col):
        return [str(v) for v in col]
    if pd.api.types.is_numeric_dtype(col):
        return [float(v) for v in col]
    if pd.api.types.is_datetime64_any_dtype(col):
        with warnings.catch_warnings():
            # nanoseconds are discarded
            warnings.simplefilter("ignore", UserWarning)
            return [pd.Timestamp(v).to_pydatetime() for v in col]
    return ["" if pd.isna(v) else str(v) for v in col]


def bars_from_frame(df: pd.DataFrame) -> list[RawBar]:
    """Convert an OHLCV DataFrame to RawBars.

    Column names are matched case-insensitively. Rows missing any required
    price or volume value are skipped. The ``dxy`` column is optional.

    Raises:
        MissingColumnsError: a required column is absent.
    """
    df = df.rename(columns=lambda c: str(c).strip().lower())
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise MissingColumnsError(missing)

    numeric = df[REQUIRED_COLUMNS[1:]].apply(pd.to_numeric, errors="coerce")
    incomplete = numeric.isna().any(axis=1)
    if incomplete.any():
        logger.warning("Skipping %d rows with missing OHLCV values", int(incomplete.sum()))
    keep = ~incomplete

    times = _time_values(df.loc[keep, "time"])
    numeric = numeric[keep]
    if "dxy" in df.columns:
        dxy = pd.to_numeric(df.loc[keep, "dxy"], errors="coerce")
        dxy_values = [None if pd.isna(v) else float(v) for v in dxy]
    else:
        dxy_values = [None] * len(numeric)

    bars: list[RawBar] = []
    for t, row, d in zip(times, numeric.itertuples(index=False), dxy_values):
        bars.append(RawBar(
            time=t,
            open=float(row.open),
            high=float(row.high),
            low=float(row.low),
            close=float(row.close),
            volume=float(row.volume),
            dxy=d,
        ))
    return bars


def read_bars_csv(source: str | Path | IO[str]) -> list[RawBar]:
    """Read an OHLCV CSV file (or text buffer) into RawBars."""
    df = pd.read_csv(source, skipinitialspace=True)
    return bars_from_frame(df)


def to_frame(processed: Sequence[ProcessedBar]) -> pd.DataFrame:
    """One row per processed bar, columns in export order."""
    if not processed:
        return pd.DataFrame(columns=OUTPUT_COLUMNS)

    records = [
        {
            "time": r.time,
            "open": r.open,
            "high": r.high,
            "low": r.low,
            "close": r.close,
            "volume": r.volume,
            "dxy": r.dxy,
            "dV": r.dV,
            "dP": r.dP,
            "session_index": r.session_index,
            "liq_trap": r.liq_trap,
            "dxy_delta": r.dxy_delta,
            "institution_signal": r.institution_signal,
            "signal_class": r.signal_class.value,
        }
        for r in processed
    ]
    return pd.DataFrame(records, columns=OUTPUT_COLUMNS)


def _iso(ts: datetime) -> str:
    return ts.isoformat().replace("+00:00", "Z")


def write_signals_csv(
    processed: Sequence[ProcessedBar],
    path: str | Path = "out_signals.csv",
) -> Path:
    """Export processed bars as CSV with ISO-8601 UTC times."""
    df = to_frame(processed)
    df["time"] = [_iso(t) for t in df["time"]]
    out = Path(path)
    df.to_csv(out, index=False)
    return out
