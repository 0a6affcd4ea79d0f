from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np


@dataclass(frozen=True)
class PeakInfo:
    """One detected peak of a 1-D signal (typically an envelope).

    Attributes
    ----------
    amplitude:
        Signal value at the peak.
    fwhm:
        Full width at half maximum, in seconds.
    ratio:
        ``amplitude / fwhm``. NaN when the width is zero.
    index:
        Sample index of the peak.
    prominence:
        Height above the higher of the two surrounding minima.
    """

    amplitude: float
    fwhm: float
    ratio: float
    index: int = -1
    prominence: float = float("nan")


@dataclass(frozen=True)
class TableSkip:
    """A raw table rejected by the aggregator."""

    table_index: int
    n_samples: int
    expected: int
    reason: str


@dataclass(frozen=True)
class AggregationResult:
    """Output of :func:`~mbn_analyzer.ingest.aggregate.process_all_mbn`.

    Attributes
    ----------
    signals:
        Signal Matrix: one averaged float64 array of length ``rows`` per
        accepted table, in original relative order. Dense: skipped tables
        leave no placeholder.
    accepted:
        Original table index of each entry in ``signals``.
    skipped:
        One record per rejected table.
    warnings:
        Diagnostics (skips, dropped rows) as text.
    dropped_rows:
        ``(table_index, n_dropped)`` for every table that lost malformed rows.
    rows, channels:
        Shape parameters used for the batch.
    """

    signals: List[np.ndarray]
    accepted: Tuple[int, ...]
    skipped: Tuple[TableSkip, ...]
    rows: int
    channels: int
    warnings: Tuple[str, ...] = ()
    dropped_rows: Tuple[Tuple[int, int], ...] = ()

    @property
    def n_signals(self) -> int:
        return len(self.signals)


@dataclass(frozen=True)
class SignalFeatures:
    """Per-signal feature report.

    ``mean_abs``/``rms``/``signal_ringing`` describe the averaged raw signal;
    ``envelope_ringing`` and ``peaks`` describe its envelope.
    """

    index: int
    mean_abs: float
    rms: float
    signal_ringing: int
    envelope_ringing: int
    peaks: Tuple[PeakInfo, ...] = ()
    source_table: Optional[int] = None

    @property
    def n_peaks(self) -> int:
        return len(self.peaks)
