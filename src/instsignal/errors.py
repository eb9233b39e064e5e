"""Signal pipeline error types."""

from __future__ import annotations

from enum import Enum
from typing import Any


class SignalErrorCode(Enum):
    """Error classification codes."""

    EMPTY_INPUT = "empty_input"
    INVALID_TIME_FORMAT = "invalid_time_format"
    INVALID_TIMEFRAME = "invalid_timeframe"
    MISSING_COLUMNS = "missing_columns"


class SignalError(Exception):
    """Pipeline exception with a structured error code.

    Attributes:
        message: Human-readable error description.
        code: Structured error code for programmatic handling.
    """

    def __init__(self, message: str, code: SignalErrorCode) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class EmptyInputError(SignalError):
    """The batch contains no bars."""

    def __init__(self, message: str = "No data to process.") -> None:
        super().__init__(message, SignalErrorCode.EMPTY_INPUT)


class InvalidTimeFormatError(SignalError):
    """A bar's time field could not be parsed; the whole batch is rejected."""

    def __init__(self, raw_value: Any) -> None:
        super().__init__(
            f"Invalid time format found: {raw_value}",
            SignalErrorCode.INVALID_TIME_FORMAT,
        )
        self.raw_value = raw_value


class InvalidTimeframeError(SignalError):
    """Timeframe is not one of the supported values."""

    def __init__(self, value: Any) -> None:
        super().__init__(
            f"Unsupported timeframe: {value!r} (expected one of m1, m5, m15, m30, h1)",
            SignalErrorCode.INVALID_TIMEFRAME,
        )
        self.value = value


class MissingColumnsError(SignalError):
    """Tabular input lacks one or more required columns."""

    def __init__(self, missing: list[str]) -> None:
        super().__init__(
            f"Input must contain columns: time, open, high, low, close, volume "
            f"(missing: {', '.join(missing)})",
            SignalErrorCode.MISSING_COLUMNS,
        )
        self.missing = missing
