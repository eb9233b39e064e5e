"""instsignal — institutional activity signal for OHLCV bars.

Derives per-bar volume/range deltas, session weights, liquidity-sweep flags
and an optional cross-asset delta, and combines them into a bounded score
with a BUY/SELL/NEUTRAL classification.

Quick start::

    from instsignal import read_bars_csv, process_bars
    bars = read_bars_csv("eurusd_m5.csv")
    rows = process_bars(bars, "m5")
"""

from __future__ import annotations

import os

from instsignal.composer import classify, composite, normalize_to_unit
from instsignal.config import (
    DEFAULT_SWING_LOOKBACKS,
    CompositeWeights,
    SessionWeights,
    SignalConfig,
    Timeframe,
)
from instsignal.cross_asset import dxy_delta
from instsignal.errors import (
    EmptyInputError,
    InvalidTimeframeError,
    InvalidTimeFormatError,
    MissingColumnsError,
    SignalError,
    SignalErrorCode,
)
from instsignal.frame import bars_from_frame, read_bars_csv, to_frame, write_signals_csv
from instsignal.liquidity import liquidity_trap
from instsignal.models.bar import RawBar
from instsignal.models.processed import ProcessedBar, SignalClass
from instsignal.models.summary import SignalSummary
from instsignal.pipeline import SignalPipeline, parse_time, process_bars
from instsignal.quality import ValidationCheck, ValidationResult, validate_bars
from instsignal.rolling import RollingOp, rolling
from instsignal.session import Session, session_index
from instsignal.summary import summarize

__version__ = "0.1.0"

__all__ = [
    # Pipeline
    "SignalPipeline",
    "process_bars",
    "parse_time",
    "create_pipeline_from_env",
    # Config
    "SignalConfig",
    "SessionWeights",
    "CompositeWeights",
    "Timeframe",
    "DEFAULT_SWING_LOOKBACKS",
    # Errors
    "SignalError",
    "SignalErrorCode",
    "EmptyInputError",
    "InvalidTimeFormatError",
    "InvalidTimeframeError",
    "MissingColumnsError",
    # Models
    "RawBar",
    "ProcessedBar",
    "SignalClass",
    "SignalSummary",
    # Components
    "rolling",
    "RollingOp",
    "Session",
    "session_index",
    "liquidity_trap",
    "dxy_delta",
    "composite",
    "normalize_to_unit",
    "classify",
    # Quality
    "validate_bars",
    "ValidationCheck",
    "ValidationResult",
    # Tabular adapters
    "bars_from_frame",
    "read_bars_csv",
    "to_frame",
    "write_signals_csv",
    "summarize",
]

_FALSY = {"0", "false", "no", "off"}


def create_pipeline_from_env() -> SignalPipeline:
    """Zero-config factory — reads pipeline settings from env vars.

    Environment variables:
        INSTSIGNAL_TIMEFRAME: Default timeframe, one of m1/m5/m15/m30/h1 (default: "m5").
        INSTSIGNAL_DXY_LAG: Lag in bars for the cross-asset delta (default: 12).
        INSTSIGNAL_VALIDATE: Run quality checks, "0"/"false"/"no"/"off" to disable
            (default: enabled).
    """
    config = SignalConfig(
        default_timeframe=Timeframe.parse(os.getenv("INSTSIGNAL_TIMEFRAME", "m5")),
        dxy_lag=int(os.getenv("INSTSIGNAL_DXY_LAG", "12")),
        validate=os.getenv("INSTSIGNAL_VALIDATE", "true").strip().lower() not in _FALSY,
    )
    return SignalPipeline(config)
