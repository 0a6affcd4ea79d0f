from __future__ import annotations

from typing import List, Sequence

import numpy as np
from numpy.typing import ArrayLike

from .filters import butterworth_filter


ENVELOPE_CUTOFF_HZ = 20.0
ENVELOPE_FS_HZ = 10_000.0


def extract_envelope(
    x: ArrayLike,
    *,
    cutoff_hz: float = ENVELOPE_CUTOFF_HZ,
    fs_hz: float = ENVELOPE_FS_HZ,
) -> np.ndarray:
    """Amplitude envelope of one signal.

    Steps:
      1. square detection: ``x2 = 2 x^2``
      2. low-pass ``x2`` with the 2nd-order Butterworth filter
      3. recovery: ``env = 2 sqrt(max(0, y))``

    The filter can undershoot below zero after sharp transients; those samples
    are clamped to 0 before the square root, so the envelope is never negative.
    """
    x1 = np.asarray(x, dtype=float)
    if x1.ndim != 1:
        raise ValueError(f"signal must be 1-D, got shape {x1.shape}")

    x2 = 2.0 * x1 * x1
    y = butterworth_filter(x2, cutoff_hz, fs_hz)
    return 2.0 * np.sqrt(np.maximum(0.0, y))


def extract_envelopes(
    signals: Sequence[ArrayLike],
    *,
    cutoff_hz: float = ENVELOPE_CUTOFF_HZ,
    fs_hz: float = ENVELOPE_FS_HZ,
) -> List[np.ndarray]:
    """Envelope Matrix: one envelope per signal, same order and lengths."""
    return [extract_envelope(x, cutoff_hz=cutoff_hz, fs_hz=fs_hz) for x in signals]
