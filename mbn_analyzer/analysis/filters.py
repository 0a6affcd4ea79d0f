"""2nd-order Butterworth low-pass used by the envelope extractor.

Design (bilinear transform with pre-warping)
--------------------------------------------
::

    Wn   = tan(pi * fc / fs)
    norm = 1 + sqrt(2)*Wn + Wn^2
    b    = [Wn^2, 2*Wn^2, Wn^2] / norm
    a    = [1, 2*(Wn^2 - 1)/norm, (1 - sqrt(2)*Wn + Wn^2)/norm]

The filter runs causally from rest (all past inputs and outputs are zero):

    y[i] = b0 x[i] + b1 x[i-1] - a1 y[i-1] + b2 x[i-2] - a2 y[i-2]

Stability is not checked; callers keep ``fc < fs/2``.
"""

from __future__ import annotations

import math
from typing import Tuple

import numpy as np
from numpy.typing import ArrayLike
from scipy import signal


def butterworth_coefficients(cutoff_hz: float, fs_hz: float) -> Tuple[np.ndarray, np.ndarray]:
    """Return ``(b, a)`` of the 2nd-order low-pass, with ``a[0] == 1``."""
    wn = math.tan(math.pi * float(cutoff_hz) / float(fs_hz))
    wn2 = wn * wn
    norm = 1.0 + math.sqrt(2.0) * wn + wn2

    b0 = wn2 / norm
    b = np.array([b0, 2.0 * b0, b0], dtype=float)
    a = np.array(
        [
            1.0,
            2.0 * (wn2 - 1.0) / norm,
            (1.0 - math.sqrt(2.0) * wn + wn2) / norm,
        ],
        dtype=float,
    )
    return b, a


def butterworth_filter(x: ArrayLike, cutoff_hz: float, fs_hz: float) -> np.ndarray:
    """Low-pass filter a 1-D sequence.

    Parameters
    ----------
    x:
        Input samples.
    cutoff_hz:
        Cutoff frequency in Hz.
    fs_hz:
        Sampling frequency in Hz.

    Returns
    -------
    np.ndarray
        Filtered samples, same length as ``x``. An empty input gives an empty output.
    """
    data = np.asarray(x, dtype=float)
    if data.ndim != 1:
        raise ValueError(f"x must be 1-D, got shape {data.shape}")
    if data.size == 0:
        return np.zeros(0, dtype=float)

    b, a = butterworth_coefficients(cutoff_hz, fs_hz)
    # lfilter without zi starts from zero state: exactly the recursion above.
    return signal.lfilter(b, a, data)
