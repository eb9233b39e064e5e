"""Tests for the DataFrame/CSV adapters."""

from __future__ import annotations

import io
import warnings
from datetime import datetime, timezone

import pandas as pd
import pytest

from instsignal.errors import MissingColumnsError, SignalErrorCode
from instsignal.frame import (
    OUTPUT_COLUMNS,
    bars_from_frame,
    read_bars_csv,
    to_frame,
    write_signals_csv,
)
from instsignal.pipeline import process_bars

CSV = """Time, Open, High, Low, Close, Volume
2024-01-15 09:05:00,100.1,100.7,99.7,100.4,1100
2024-01-15 09:00:00,100.0,100.6,99.6,100.3,1000
"""


class TestReadBars:
    def test_headers_case_and_whitespace(self):
        bars = read_bars_csv(io.StringIO(CSV))
        assert len(bars) == 2
        assert bars[0].time == "2024-01-15 09:05:00"
        assert bars[0].close == 100.4
        assert bars[0].dxy is None

    def test_missing_columns(self):
        df = pd.DataFrame({"time": [0], "open": [1.0], "close": [1.0]})
        with pytest.raises(MissingColumnsError) as exc_info:
            bars_from_frame(df)
        assert exc_info.value.code is SignalErrorCode.MISSING_COLUMNS
        assert exc_info.value.missing == ["high", "low", "volume"]

    def test_numeric_time_stays_epoch(self):
        df = pd.DataFrame({
            "time": [1_705_309_200, 1_705_309_500],
            "open": [1.0, 1.0], "high": [2.0, 2.0], "low": [0.5, 0.5],
            "close": [1.5, 1.5], "volume": [10, 20],
        })
        bars = bars_from_frame(df)
        assert bars[0].time == 1_705_309_200.0
        assert isinstance(bars[1].volume, float)

    def test_datetime_column(self):
        df = pd.DataFrame({
            "time": pd.to_datetime(["2024-01-15 09:00:00"], utc=True),
            "open": [1.0], "high": [2.0], "low": [0.5], "close": [1.5], "volume": [10.0],
        })
        bars = bars_from_frame(df)
        assert bars[0].time == datetime(2024, 1, 15, 9, 0, tzinfo=timezone.utc)

    def test_datetime_column_nanoseconds_truncated_quietly(self):
        df = pd.DataFrame({
            "time": pd.to_datetime(["2024-01-15 09:00:00.123456789"], utc=True),
            "open": [1.0], "high": [2.0], "low": [0.5], "close": [1.5], "volume": [10.0],
        })
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            bars = bars_from_frame(df)
        assert bars[0].time.microsecond == 123456

    def test_optional_dxy(self):
        text = "time,open,high,low,close,volume,dxy\n0,1,2,0.5,1.5,10,104.2\n300,1,2,0.5,1.5,10,\n"
        bars = read_bars_csv(io.StringIO(text))
        assert bars[0].dxy == 104.2
        assert bars[1].dxy is None

    def test_incomplete_rows_skipped(self, caplog):
        text = "time,open,high,low,close,volume\n0,1,2,0.5,1.5,10\n300,1,2,0.5,,10\n"
        bars = read_bars_csv(io.StringIO(text))
        assert len(bars) == 1
        assert "Skipping 1 rows" in caplog.text


class TestExport:
    def test_to_frame_columns(self, sample_bars):
        df = to_frame(process_bars(sample_bars, "m5"))
        assert list(df.columns) == OUTPUT_COLUMNS
        assert len(df) == len(sample_bars)
        assert set(df["signal_class"]) <= {"BUY", "SELL", "NEUTRAL"}

    def test_to_frame_empty(self):
        df = to_frame([])
        assert list(df.columns) == OUTPUT_COLUMNS
        assert len(df) == 0

    def test_write_signals_csv(self, sample_bars, tmp_path):
        rows = process_bars(sample_bars, "m5")
        out = write_signals_csv(rows, tmp_path / "out_signals.csv")

        loaded = pd.read_csv(out)
        assert len(loaded) == len(rows)
        assert loaded["time"].iloc[0] == "2024-01-15T09:00:00Z"
        assert loaded["institution_signal"].iloc[-1] == pytest.approx(rows[-1].institution_signal)

    def test_csv_to_signals(self):
        rows = process_bars(read_bars_csv(io.StringIO(CSV)), "m5")
        assert [r.time.minute for r in rows] == [0, 5]
