from .cells import Cell, InvalidCell, NumericCell, coerce_cell
from .profile import AnalysisProfile
from .results import AggregationResult, PeakInfo, SignalFeatures, TableSkip

__all__ = [
    "Cell",
    "InvalidCell",
    "NumericCell",
    "coerce_cell",
    "AnalysisProfile",
    "AggregationResult",
    "PeakInfo",
    "SignalFeatures",
    "TableSkip",
]
