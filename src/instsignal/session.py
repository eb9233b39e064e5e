"""UTC trading-session classification.

Sessions (closed UTC hour ranges):
    Asia       00-07
    London     08-12
    New York   13-21
    Off-hours  22-23 (weighted like Asia by default)
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from instsignal.config import SessionWeights


class Session(Enum):
    """Broad trading-hour bucket."""

    ASIA = "asia"
    LONDON = "london"
    NEW_YORK = "new_york"
    OFF_HOURS = "off_hours"


def session_for_hour(hour: int) -> Session:
    """Return the session containing UTC ``hour`` (0-23)."""
    if not 0 <= hour <= 23:
        raise ValueError(f"hour must be in 0..23, got {hour}")
    if hour <= 7:
        return Session.ASIA
    if hour <= 12:
        return Session.LONDON
    if hour <= 21:
        return Session.NEW_YORK
    return Session.OFF_HOURS


def session_index(hour: int, weights: SessionWeights | None = None) -> float:
    """Session weight for UTC ``hour``."""
    weights = weights or SessionWeights()
    return getattr(weights, session_for_hour(hour).value)


def session_index_at(ts: datetime, weights: SessionWeights | None = None) -> float:
    """Session weight for a timestamp; naive datetimes are taken as UTC."""
    if ts.tzinfo is not None:
        ts = ts.astimezone(timezone.utc)
    return session_index(ts.hour, weights)
