"""Peak detection with prominence filtering and FWHM metrics.

Definitions
-----------
Local maximum
    Interior sample strictly greater than both neighbours.
Prominence
    Walk left from the peak while samples stay strictly below it, tracking the
    minimum; same to the right. Prominence is the peak value minus the higher
    of the two minima. A walk that stops immediately contributes the peak
    value itself.
FWHM
    From the peak, walk outwards while samples stay strictly above half the
    peak value. The walk stops on the first sample at or below half, or at
    the signal boundary. Width is ``(R - L) / fs`` seconds.

Boundary convention
-------------------
The last sample is tested as a right-boundary peak (compared with its left
neighbour only; its FWHM walks left only). The first sample is never tested.
"""

from __future__ import annotations

from typing import List

import numpy as np
from numpy.typing import ArrayLike

from mbn_analyzer.models.results import PeakInfo


DEFAULT_PEAK_FS_HZ = 100_000.0
DEFAULT_MIN_PROMINENCE_RATIO = 0.2


def calculate_prominence(signal: ArrayLike, idx: int) -> float:
    """Prominence of the sample at ``idx`` (see module notes)."""
    sig = np.asarray(signal, dtype=float)
    n = sig.size
    idx = int(idx)
    if not (0 <= idx < n):
        raise IndexError(f"idx {idx} out of range for signal of length {n}")
    peak = float(sig[idx])

    left = sig[:idx]
    walls = np.nonzero(left >= peak)[0]
    start = int(walls[-1]) + 1 if walls.size else 0
    min_left = min(peak, float(left[start:].min())) if start < idx else peak

    right = sig[idx + 1 :]
    walls = np.nonzero(right >= peak)[0]
    stop = int(walls[0]) if walls.size else right.size
    min_right = min(peak, float(right[:stop].min())) if stop > 0 else peak

    return peak - max(min_left, min_right)


def _half_max_left(sig: np.ndarray, i: int, half: float) -> int:
    # last index in [1, i] at or below half; the walk never inspects index 0
    below = np.nonzero(sig[1 : i + 1] <= half)[0]
    return int(below[-1]) + 1 if below.size else 0


def _half_max_right(sig: np.ndarray, i: int, half: float) -> int:
    n = sig.size
    below = np.nonzero(sig[i : n - 1] <= half)[0]
    return i + int(below[0]) if below.size else n - 1


def _make_peak(amplitude: float, width_samples: int, fs: float, index: int, prominence: float) -> PeakInfo:
    width_s = float(width_samples) / fs
    # zero width only happens for non-positive peaks (nothing is above half)
    ratio = amplitude / width_s if width_s > 0.0 else float("nan")
    return PeakInfo(amplitude=amplitude, fwhm=width_s, ratio=ratio, index=index, prominence=prominence)


def find_peaks_with_width(
    signal: ArrayLike,
    fs: float = DEFAULT_PEAK_FS_HZ,
    min_prominence_ratio: float = DEFAULT_MIN_PROMINENCE_RATIO,
) -> List[PeakInfo]:
    """Detect prominent peaks and measure their FWHM.

    Parameters
    ----------
    signal:
        1-D samples (typically an envelope).
    fs:
        Sampling rate used to express widths in seconds.
    min_prominence_ratio:
        Keep peaks whose prominence is at least this fraction of the global maximum.

    Returns
    -------
    list of PeakInfo
        In left-to-right order. Empty for signals shorter than 3 samples.
    """
    if fs <= 0:
        raise ValueError(f"fs must be > 0, got {fs}")
    if not (0.0 < float(min_prominence_ratio) <= 1.0):
        raise ValueError(f"min_prominence_ratio must be in (0, 1], got {min_prominence_ratio}")

    sig = np.asarray(signal, dtype=float)
    if sig.ndim != 1:
        raise ValueError(f"signal must be 1-D, got shape {sig.shape}")
    n = sig.size
    peaks: List[PeakInfo] = []
    if n < 3:
        return peaks

    global_max = float(np.max(sig))
    prom_thresh = global_max * float(min_prominence_ratio)
    # floor on the signal scale: a zero or negative maximum must not admit
    # zero-prominence bumps
    prom_thresh = max(prom_thresh, np.finfo(float).eps * float(np.max(np.abs(sig))))

    mid = sig[1:-1]
    candidates = np.nonzero((mid > sig[:-2]) & (mid > sig[2:]))[0] + 1

    next_i = 1
    for i in candidates:
        i = int(i)
        if i < next_i:
            continue
        prom = calculate_prominence(sig, i)
        if prom <= 0.0 or prom < prom_thresh:
            continue

        amp = float(sig[i])
        half = amp / 2.0
        L = _half_max_left(sig, i, half)
        R = _half_max_right(sig, i, half)
        peaks.append(_make_peak(amp, R - L, fs, i, prom))

        # step over a flat run at the peak value
        j = i + 1
        while j < n and sig[j] == sig[i]:
            j += 1
        next_i = j

    i = n - 1
    if sig[i] > sig[i - 1]:
        prom = calculate_prominence(sig, i)
        if prom > 0.0 and prom >= prom_thresh:
            amp = float(sig[i])
            L = _half_max_left(sig, i, amp / 2.0)
            peaks.append(_make_peak(amp, i - L, fs, i, prom))

    return peaks
