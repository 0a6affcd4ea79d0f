"""Signal-processing core.

Design principle:
  - Ingest produces the Signal Matrix (one averaged signal per accepted table).
  - Analysis consumes it and produces envelopes and feature records.

Every function here is pure: inputs are finite, fully materialised arrays and
outputs are new arrays or frozen records. Empty inputs give empty results.
"""

from .filters import butterworth_coefficients, butterworth_filter
from .envelope import extract_envelope, extract_envelopes
from .peaks import calculate_prominence, find_peaks_with_width
from .ringing import count_ringing_by_peaks
from .features import analyze_all_peaks, analyze_signal, format_features, features_to_frame, signal_statistics
from .pipeline import PipelineResult, run_pipeline

__all__ = [
    "butterworth_coefficients",
    "butterworth_filter",
    "extract_envelope",
    "extract_envelopes",
    "calculate_prominence",
    "find_peaks_with_width",
    "count_ringing_by_peaks",
    "analyze_all_peaks",
    "analyze_signal",
    "format_features",
    "features_to_frame",
    "signal_statistics",
    "PipelineResult",
    "run_pipeline",
]
