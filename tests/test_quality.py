"""Tests for data quality validation."""

from datetime import datetime, timedelta, timezone

from instsignal.models.bar import RawBar
from instsignal.quality import validate_bars


def _make_bar(close: float = 150.0, **kwargs) -> RawBar:
    defaults = dict(
        time=1_705_309_200.0, open=150.0, high=151.0, low=149.0,
        close=close, volume=10000.0,
    )
    defaults.update(kwargs)
    return RawBar(**defaults)


def _check(result, name):
    return next(c for c in result.checks if c.name == name)


class TestValidateBars:
    def test_empty(self):
        result = validate_bars([])
        assert not result.passed
        assert result.failed_checks[0].name == "not_empty"

    def test_valid(self, sample_bars):
        assert validate_bars(sample_bars).passed

    def test_nan_detected(self):
        result = validate_bars([_make_bar(close=float("nan"))])
        assert not _check(result, "no_nulls").passed

    def test_negative_volume(self):
        result = validate_bars([_make_bar(volume=-100.0)])
        assert not _check(result, "volume_sanity").passed

    def test_ohlc_inconsistency(self):
        bar = _make_bar(high=149.0, low=151.0)  # high < low
        result = validate_bars([bar])
        assert not _check(result, "ohlc_consistency").passed

    def test_duplicate_timestamps(self):
        t = datetime(2024, 1, 15, 9, 30, tzinfo=timezone.utc)
        bars = [_make_bar(), _make_bar(), _make_bar()]
        result = validate_bars(bars, [t, t, t + timedelta(minutes=5)])
        assert "1 duplicate" in _check(result, "duplicate_timestamps").message

    def test_duplicates_skipped_without_times(self):
        names = {c.name for c in validate_bars([_make_bar()]).checks}
        assert "duplicate_timestamps" not in names

    def test_partial_dxy(self):
        bars = [_make_bar(dxy=104.0), _make_bar()]
        assert not _check(validate_bars(bars), "dxy_coverage").passed

    def test_full_dxy(self):
        bars = [_make_bar(dxy=104.0), _make_bar(dxy=104.1)]
        assert _check(validate_bars(bars), "dxy_coverage").passed
