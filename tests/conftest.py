"""Shared fixtures for instsignal tests."""

from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Ensure src/ is on the path for editable-style imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from instsignal.models.bar import RawBar

BASE_TIME = datetime(2024, 1, 15, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_bars() -> list[RawBar]:
    """30 contiguous 5-min bars with steady volume, London session."""
    bars = []
    for i in range(30):
        ts = BASE_TIME + timedelta(minutes=5 * i)
        bars.append(RawBar(
            time=ts.timestamp(),
            open=100.0 + i * 0.1,
            high=100.6 + i * 0.1,
            low=99.6 + i * 0.1,
            close=100.3 + i * 0.1,
            volume=1000.0,
        ))
    return bars


@pytest.fixture
def sample_bars_with_dxy(sample_bars) -> list[RawBar]:
    """``sample_bars`` plus a dxy series rising 0.1 per bar."""
    return [
        RawBar(
            time=b.time, open=b.open, high=b.high, low=b.low,
            close=b.close, volume=b.volume, dxy=104.0 + i * 0.1,
        )
        for i, b in enumerate(sample_bars)
    ]
