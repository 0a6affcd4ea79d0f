"""MBN Analyzer -- Python tooling for Magnetic Barkhausen Noise sensor recordings.

This package provides tools for:
- Loading MBN acquisition tables (SQLite ``.db`` files with a ``data`` table)
- Averaging the interleaved sensor channels into one signal per recording
- Extracting a smoothed amplitude envelope (square detection + 2nd-order
  Butterworth low-pass + square-root recovery)
- Characterising envelopes by peak amplitude, FWHM and prominence
- Counting ringing (paired positive/negative excursions)

Key principles:
- Pure, deterministic transformations: no entity is mutated after construction
- Per-table problems are recoverable: a bad recording is skipped and reported,
  never allowed to abort the batch
- Full traceability: skips and dropped rows are returned as warnings

Main subpackages:
- analysis: Filter, envelope, peak, ringing and feature-report functions
- gui: Interactive ipywidgets notebook panel
- ingest: SQLite loader and row aggregation
- models: Data models (cells, PeakInfo, AggregationResult, AnalysisProfile)
"""

__all__ = []
