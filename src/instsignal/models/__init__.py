"""Signal pipeline models."""

from instsignal.models.bar import RawBar
from instsignal.models.processed import ProcessedBar, SignalClass
from instsignal.models.summary import SignalSummary

__all__ = [
    "RawBar",
    "ProcessedBar",
    "SignalClass",
    "SignalSummary",
]
