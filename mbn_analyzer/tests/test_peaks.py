from __future__ import annotations

import math

import numpy as np
import pytest

from mbn_analyzer.analysis.peaks import calculate_prominence, find_peaks_with_width


def test_triangular_pulse_gives_one_peak_with_exact_fwhm() -> None:
    sig = np.array([0.0, 1.0, 2.0, 3.0, 4.0, 3.0, 2.0, 1.0, 0.0])
    peaks = find_peaks_with_width(sig, fs=1.0, min_prominence_ratio=0.2)

    assert len(peaks) == 1
    p = peaks[0]
    assert p.amplitude == 4.0
    assert p.index == 4
    assert p.prominence == pytest.approx(4.0)
    # half = 2: the walks stop on the samples equal to 2 (indices 2 and 6)
    assert p.fwhm == pytest.approx(4.0)
    assert p.ratio == pytest.approx(1.0)


def test_fwhm_is_expressed_in_seconds() -> None:
    sig = np.array([0.0, 1.0, 2.0, 3.0, 4.0, 3.0, 2.0, 1.0, 0.0])
    p = find_peaks_with_width(sig, fs=100_000.0, min_prominence_ratio=0.2)[0]
    assert p.fwhm == pytest.approx(4.0 / 100_000.0)
    assert p.ratio == pytest.approx(4.0 / (4.0 / 100_000.0))


def test_triangle_at_arbitrary_position() -> None:
    n, i0, A = 200, 37, 5.0
    k = np.arange(n)
    sig = A - np.abs(k - i0) * (A / 40.0)
    peaks = find_peaks_with_width(sig, fs=1000.0, min_prominence_ratio=0.2)
    assert len(peaks) == 1
    assert peaks[0].amplitude == A
    assert peaks[0].index == i0


def test_prominence_uses_higher_of_the_two_valleys() -> None:
    sig = np.array([0.0, 5.0, 3.0, 4.0, 1.0, 6.0, 0.0])
    # peak at 3 (value 4): left walk stops at 5 with min 3, right walk reaches 1 before 6
    assert calculate_prominence(sig, 3) == pytest.approx(1.0)
    # peak at 1 (value 5): left min 0, right walk stops at 6 with min 1
    assert calculate_prominence(sig, 1) == pytest.approx(4.0)
    # global maximum: both sides fall to 0
    assert calculate_prominence(sig, 5) == pytest.approx(6.0)


def test_prominence_filter_drops_small_bumps() -> None:
    sig = np.array([0.0, 5.0, 3.0, 4.0, 1.0, 6.0, 0.0])
    all_idx = [p.index for p in find_peaks_with_width(sig, 1.0, 0.1)]
    assert all_idx == [1, 3, 5]
    strict_idx = [p.index for p in find_peaks_with_width(sig, 1.0, 0.5)]
    assert strict_idx == [1, 5]


def test_raising_ratio_returns_a_subset() -> None:
    rng = np.random.default_rng(3)
    t = np.linspace(0.0, 1.0, 3000)
    sig = np.abs(np.sin(2 * np.pi * 7 * t)) * (1.0 + t) + 0.05 * rng.random(t.size)

    low = find_peaks_with_width(sig, 1000.0, 0.05)
    high = find_peaks_with_width(sig, 1000.0, 1.0)
    low_idx = {p.index for p in low}
    high_idx = {p.index for p in high}
    assert high_idx <= low_idx
    assert len(high) <= len(low)


def test_output_is_in_scan_order() -> None:
    sig = np.array([0.0, 2.0, 0.0, 9.0, 0.0, 5.0, 0.0])
    peaks = find_peaks_with_width(sig, 1.0, 0.2)
    assert [p.index for p in peaks] == [1, 3, 5]
    assert [p.amplitude for p in peaks] == [2.0, 9.0, 5.0]


def test_short_and_degenerate_signals() -> None:
    assert find_peaks_with_width([], 1.0, 0.2) == []
    assert find_peaks_with_width([1.0, 2.0], 1.0, 0.2) == []
    assert find_peaks_with_width(np.zeros(100), 1.0, 0.2) == []
    assert find_peaks_with_width(np.full(10, 3.0), 1.0, 0.2) == []


def test_flat_top_is_not_a_strict_maximum() -> None:
    assert find_peaks_with_width([0.0, 2.0, 2.0, 0.0], 1.0, 0.2) == []


def test_boundary_asymmetry() -> None:
    # First sample is never a candidate.
    assert find_peaks_with_width([5.0, 1.0, 0.0, 0.0], 1.0, 0.2) == []
    # Last sample is tested, but nothing rises after it so its prominence is 0.
    sig = [0.0, 1.0, 2.0, 3.0]
    assert calculate_prominence(sig, 3) == 0.0
    assert find_peaks_with_width(sig, 1.0, 0.2) == []


def test_zero_width_peak_has_nan_ratio() -> None:
    sig = np.array([-3.0, -1.0, -3.0, -2.0, -3.0])
    peaks = find_peaks_with_width(sig, 1.0, 0.2)
    assert [p.index for p in peaks] == [1, 3]
    for p in peaks:
        assert p.fwhm == 0.0
        assert math.isnan(p.ratio)


def test_invalid_parameters() -> None:
    with pytest.raises(ValueError):
        find_peaks_with_width([0.0, 1.0, 0.0], 1.0, 0.0)
    with pytest.raises(ValueError):
        find_peaks_with_width([0.0, 1.0, 0.0], 1.0, 1.5)
    with pytest.raises(ValueError):
        find_peaks_with_width([0.0, 1.0, 0.0], 0.0, 0.2)
    with pytest.raises(IndexError):
        calculate_prominence([0.0, 1.0], 5)


def test_zero_maximum_does_not_admit_boundary_peak() -> None:
    # max is exactly 0 at the last sample, whose prominence is always 0
    sig = [-3.0, -1.0, -2.0, -1.5, 0.0]
    peaks = find_peaks_with_width(sig, 1.0, 0.2)
    assert [p.index for p in peaks] == [1]
    assert peaks[0].prominence == pytest.approx(1.0)
    assert all(p.prominence > 0.0 for p in peaks)
