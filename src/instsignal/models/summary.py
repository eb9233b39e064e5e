"""Batch summary model."""

from __future__ import annotations

from dataclasses import dataclass, field

from instsignal.models.processed import ProcessedBar, SignalClass


@dataclass(frozen=True)
class SignalSummary:
    """Latest signal of a batch plus class counts.

    Attributes:
        latest: Most recent processed bar.
        counts: Number of bars per signal class (every class present).
        total: Number of processed bars.
    """

    latest: ProcessedBar
    counts: dict[SignalClass, int] = field(default_factory=dict)
    total: int = 0

    @property
    def latest_class(self) -> SignalClass:
        return self.latest.signal_class

    def share(self, signal_class: SignalClass) -> float:
        """Fraction of bars in ``signal_class``."""
        if not self.total:
            return 0.0
        return self.counts.get(signal_class, 0) / self.total
