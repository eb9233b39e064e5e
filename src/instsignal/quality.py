"""Non-fatal data quality checks for a batch of bars."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Sequence

from instsignal.cross_asset import is_missing
from instsignal.models.bar import RawBar


@dataclass
class ValidationCheck:
    """Single validation check result."""

    name: str
    passed: bool
    message: str = ""


@dataclass
class ValidationResult:
    """Aggregate validation result."""

    checks: list[ValidationCheck] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(c.passed for c in self.checks)

    @property
    def failed_checks(self) -> list[ValidationCheck]:
        return [c for c in self.checks if not c.passed]


def validate_bars(
    bars: Sequence[RawBar],
    times: Sequence[datetime] | None = None,
) -> ValidationResult:
    """Run all quality checks on a batch of bars.

    ``times`` are the parsed bar times in the same order as ``bars``; the
    duplicate check is skipped without them.

    Checks:
        1. Not empty
        2. No NaN/Inf OHLCV
        3. Volume sanity (non-negative)
        4. OHLC consistency (high >= low, high >= open/close, low <= open/close)
        5. Duplicate timestamps
        6. Auxiliary series coverage (all or nothing)
    """
    result = ValidationResult()

    # 1. Not empty
    if not bars:
        result.checks.append(ValidationCheck("not_empty", False, "No bars provided"))
        return result
    result.checks.append(ValidationCheck("not_empty", True, f"{len(bars)} bars"))

    # 2. No NaN/Inf
    bad_values = 0
    for b in bars:
        for val in (b.open, b.high, b.low, b.close, b.volume):
            if math.isnan(val) or math.isinf(val):
                bad_values += 1
    if bad_values:
        result.checks.append(ValidationCheck("no_nulls", False, f"{bad_values} NaN/Inf values"))
    else:
        result.checks.append(ValidationCheck("no_nulls", True))

    # 3. Volume sanity
    neg_vol = sum(1 for b in bars if b.volume < 0)
    if neg_vol:
        result.checks.append(
            ValidationCheck("volume_sanity", False, f"{neg_vol} bars with negative volume")
        )
    else:
        result.checks.append(ValidationCheck("volume_sanity", True))

    # 4. OHLC consistency
    inconsistent = 0
    for b in bars:
        if b.high < b.low:
            inconsistent += 1
        elif b.high < b.open or b.high < b.close:
            inconsistent += 1
        elif b.low > b.open or b.low > b.close:
            inconsistent += 1
    if inconsistent:
        result.checks.append(
            ValidationCheck("ohlc_consistency", False, f"{inconsistent} bars with H<L or H<O/C")
        )
    else:
        result.checks.append(ValidationCheck("ohlc_consistency", True))

    # 5. Duplicate timestamps
    if times is not None:
        duplicates = len(times) - len(set(times))
        if duplicates:
            result.checks.append(
                ValidationCheck("duplicate_timestamps", False, f"{duplicates} duplicate timestamps")
            )
        else:
            result.checks.append(ValidationCheck("duplicate_timestamps", True))

    # 6. Auxiliary coverage: every bar carries dxy or none does
    with_dxy = sum(1 for b in bars if not is_missing(b.dxy))
    if 0 < with_dxy < len(bars):
        result.checks.append(
            ValidationCheck(
                "dxy_coverage", False, f"dxy missing on {len(bars) - with_dxy} of {len(bars)} bars"
            )
        )
    else:
        result.checks.append(ValidationCheck("dxy_coverage", True))

    return result
