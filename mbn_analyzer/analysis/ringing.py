from __future__ import annotations

import math

import numpy as np
from numpy.typing import ArrayLike


DEFAULT_RINGING_THRESHOLD_RATIO = 0.01


def _strict_extrema(x: np.ndarray, eps_val: float) -> int:
    """Count strict local maxima of ``x`` above ``eps_val``, boundaries included.

    Interior samples must beat both neighbours; the first and last sample are
    compared with their single neighbour. Strict comparisons mean a flat run
    can never be counted twice.
    """
    mid = x[1:-1]
    interior = (mid > x[:-2]) & (mid > x[2:]) & (mid > eps_val)
    count = int(np.count_nonzero(interior))
    if x[0] > x[1] and x[0] > eps_val:
        count += 1
    if x[-1] > x[-2] and x[-1] > eps_val:
        count += 1
    return count


def count_ringing_by_peaks(x: ArrayLike, threshold_ratio: float = DEFAULT_RINGING_THRESHOLD_RATIO) -> int:
    """Count oscillation cycles ("ringing") in a 1-D signal.

    Positive excursions are strict local maxima of ``x``, negative excursions
    strict local maxima of ``-x``; both must exceed
    ``threshold_ratio * max(|x|)`` in magnitude. One ring is one
    positive/negative pair, so the result is ``ceil((pos + neg) / 2)``.

    Returns 0 for signals with fewer than 2 samples and for constant signals.
    """
    if not (0.0 < float(threshold_ratio) <= 1.0):
        raise ValueError(f"threshold_ratio must be in (0, 1], got {threshold_ratio}")

    arr = np.asarray(x, dtype=float)
    if arr.ndim != 1:
        raise ValueError(f"x must be 1-D, got shape {arr.shape}")
    if arr.size < 2:
        return 0

    eps_val = float(threshold_ratio) * float(np.max(np.abs(arr)))

    pos = _strict_extrema(arr, eps_val)
    neg = _strict_extrema(-arr, eps_val)
    return int(math.ceil((pos + neg) / 2.0))
