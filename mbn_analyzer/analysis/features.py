"""Per-signal feature report.

Combines the raw-signal statistics (mean of ``|x|``, RMS, ringing) with the
envelope characterisation (ringing, peaks) into
:class:`~mbn_analyzer.models.results.SignalFeatures`, and renders the report
as text lines or as a peak table for export.

Functions
---------
signal_statistics
    Mean absolute value and RMS of one signal.
analyze_signal
    Feature record of one signal/envelope pair.
analyze_all_peaks
    Feature records for a whole Signal/Envelope Matrix.
format_features
    Text report lines, one block per signal.
features_to_frame
    One DataFrame row per detected peak.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from numpy.typing import ArrayLike

from mbn_analyzer.models.profile import AnalysisProfile
from mbn_analyzer.models.results import SignalFeatures

from .peaks import find_peaks_with_width
from .ringing import count_ringing_by_peaks


PEAK_COLUMNS = ["signal", "peak", "amplitude", "fwhm_s", "ratio", "prominence", "sample_index"]


def signal_statistics(x: ArrayLike) -> Tuple[float, float]:
    """Return ``(mean(|x|), rms(x))``; NaN for an empty signal."""
    arr = np.asarray(x, dtype=float)
    if arr.size == 0:
        return float("nan"), float("nan")
    return float(np.mean(np.abs(arr))), float(np.sqrt(np.mean(arr * arr)))


def analyze_signal(
    index: int,
    signal: ArrayLike,
    envelope: ArrayLike,
    profile: Optional[AnalysisProfile] = None,
    *,
    source_table: Optional[int] = None,
) -> SignalFeatures:
    """Build the feature record of one signal and its envelope."""
    profile = profile or AnalysisProfile()
    sig = np.asarray(signal, dtype=float)
    env = np.asarray(envelope, dtype=float)

    mean_abs, rms = signal_statistics(sig)
    peaks = find_peaks_with_width(env, profile.peak_fs_hz, profile.min_prominence_ratio)

    return SignalFeatures(
        index=int(index),
        mean_abs=mean_abs,
        rms=rms,
        signal_ringing=count_ringing_by_peaks(sig, profile.signal_ringing_threshold_ratio),
        envelope_ringing=count_ringing_by_peaks(env, profile.ringing_threshold_ratio),
        peaks=tuple(peaks),
        source_table=source_table,
    )


def analyze_all_peaks(
    signals: Sequence[ArrayLike],
    envelopes: Sequence[ArrayLike],
    profile: Optional[AnalysisProfile] = None,
    *,
    source_tables: Optional[Sequence[int]] = None,
) -> List[SignalFeatures]:
    """Feature records for aligned Signal and Envelope matrices."""
    if len(signals) != len(envelopes):
        raise ValueError(
            f"signals/envelopes length mismatch: {len(signals)} != {len(envelopes)}"
        )
    if source_tables is not None and len(source_tables) != len(signals):
        raise ValueError("source_tables must have one entry per signal")

    out: List[SignalFeatures] = []
    for k, (sig, env) in enumerate(zip(signals, envelopes)):
        src = int(source_tables[k]) if source_tables is not None else None
        out.append(analyze_signal(k, sig, env, profile, source_table=src))
    return out


def format_features(
    features: Sequence[SignalFeatures],
    *,
    mean_decimals: int = 15,
    rms_decimals: int = 7,
    amplitude_decimals: int = 3,
    fwhm_decimals: int = 6,
    ratio_decimals: int = 3,
) -> List[str]:
    """Render feature records as report lines (signals numbered from 1)."""
    lines: List[str] = []
    for f in features:
        lines.append(f"=== Signal {f.index + 1} Features ===")
        lines.append(f"Mean_Value[{f.index}] = {f.mean_abs:.{mean_decimals}f}")
        lines.append(f"RMS_Value[{f.index}]  = {f.rms:.{rms_decimals}f}")
        lines.append(f"Number of ringing = {f.signal_ringing}")
        lines.append(f"Envelope ringing = {f.envelope_ringing}")
        for j, p in enumerate(f.peaks, start=1):
            lines.append(
                f"Peak {j}: amplitude={p.amplitude:.{amplitude_decimals}f}, "
                f"FWHM={p.fwhm:.{fwhm_decimals}f} s, "
                f"ratio={p.ratio:.{ratio_decimals}f}"
            )
    return lines


def features_to_frame(features: Sequence[SignalFeatures]) -> pd.DataFrame:
    """One row per peak, signals and peaks numbered from 1."""
    rows = []
    for f in features:
        for j, p in enumerate(f.peaks, start=1):
            rows.append(
                {
                    "signal": f.index + 1,
                    "peak": j,
                    "amplitude": p.amplitude,
                    "fwhm_s": p.fwhm,
                    "ratio": p.ratio,
                    "prominence": p.prominence,
                    "sample_index": p.index,
                }
            )
    return pd.DataFrame(rows, columns=PEAK_COLUMNS)
