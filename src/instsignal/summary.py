"""Latest-signal summary of a processed batch."""

from __future__ import annotations

from collections import Counter
from typing import Sequence

from instsignal.errors import EmptyInputError
from instsignal.models.processed import ProcessedBar, SignalClass
from instsignal.models.summary import SignalSummary


def summarize(processed: Sequence[ProcessedBar]) -> SignalSummary:
    """Most recent bar plus per-class counts.

    ``processed`` is expected in ascending time order, as returned by
    ``SignalPipeline.process``.
    """
    if not processed:
        raise EmptyInputError("No processed bars to summarize.")

    tally = Counter(r.signal_class for r in processed)
    return SignalSummary(
        latest=processed[-1],
        counts={c: tally.get(c, 0) for c in SignalClass},
        total=len(processed),
    )
