from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from mbn_analyzer.analysis.pipeline import run_pipeline
from mbn_analyzer.models.profile import AnalysisProfile


ROWS = 100_000
CHANNELS = 5


def _sine_table(n_channels: int = CHANNELS, drop_last: bool = False) -> pd.DataFrame:
    t = np.arange(ROWS) / 100_000.0
    stream = np.tile(np.sin(2.0 * np.pi * 50.0 * t), n_channels)
    if drop_last:
        stream = stream[:-1]
    return pd.DataFrame({"id": np.arange(stream.size), "mbn": stream, "c2": 0.0, "c3": 0.0})


@pytest.fixture(scope="module")
def sine_result():
    return run_pipeline([_sine_table(), _sine_table(drop_last=True)], AnalysisProfile())


def test_end_to_end_signal_and_envelope_shapes(sine_result) -> None:
    res = sine_result
    assert res.aggregation.n_signals == 1
    assert res.aggregation.accepted == (0,)
    assert res.aggregation.skipped[0].table_index == 1
    assert len(res.envelopes) == len(res.signals) == len(res.features) == 1

    sig = res.signals[0]
    env = res.envelopes[0]
    t = np.arange(ROWS) / 100_000.0
    assert np.allclose(sig, np.sin(2.0 * np.pi * 50.0 * t), atol=1e-12)
    assert env.shape == sig.shape
    assert np.all(env >= 0.0)


def test_end_to_end_peaks_follow_each_crest(sine_result) -> None:
    f = sine_result.features[0]
    # sin^2 has 100 crests per second; each one shows up in the envelope
    assert 98 <= f.n_peaks <= 101
    idx = np.array([p.index for p in f.peaks])
    assert np.median(np.diff(idx)) == pytest.approx(1000.0, abs=2.0)

    steady = f.peaks[1:]
    amps = np.array([p.amplitude for p in steady])
    assert np.median(amps) == pytest.approx(2.807, rel=1e-2)
    fwhm = np.array([p.fwhm for p in steady])
    assert np.median(fwhm) == pytest.approx(0.00675, rel=2e-2)
    assert all(p.ratio > 0 for p in steady)


def test_end_to_end_statistics_and_ringing(sine_result) -> None:
    f = sine_result.features[0]
    assert f.source_table == 0
    assert f.mean_abs == pytest.approx(2.0 / np.pi, rel=1e-3)
    assert f.rms == pytest.approx(1.0 / np.sqrt(2.0), rel=1e-3)
    assert f.signal_ringing == 50
    # envelope is non-negative: only positive excursions count
    assert 49 <= f.envelope_ringing <= 51


def test_empty_batch_is_a_no_op() -> None:
    res = run_pipeline([], AnalysisProfile(rows=10))
    assert res.signals == []
    assert res.envelopes == []
    assert res.features == []
    assert res.warnings == ()


def test_small_custom_profile() -> None:
    rows, channels = 50, 10
    stream = np.tile(np.linspace(0.0, 1.0, rows), channels)
    table = [[k, v, 0, 0] for k, v in enumerate(stream)]
    res = run_pipeline([table], AnalysisProfile(rows=rows, channels=channels))
    assert res.aggregation.n_signals == 1
    assert np.allclose(res.signals[0], np.linspace(0.0, 1.0, rows))


def test_invalid_profile_is_rejected() -> None:
    with pytest.raises(ValueError):
        run_pipeline([], AnalysisProfile(channels=0))
