"""Tests for AnalysisProfile."""

from __future__ import annotations

import dataclasses
import json

import pytest

from mbn_analyzer.models.profile import AnalysisProfile


def test_profile_defaults() -> None:
    p = AnalysisProfile()
    assert p.rows == 100_000
    assert p.channels == 5
    assert p.envelope_cutoff_hz == 20.0
    assert p.envelope_fs_hz == 10_000.0
    assert p.peak_fs_hz == 100_000.0
    assert p.min_prominence_ratio == 0.2
    assert p.ringing_threshold_ratio == 0.01
    assert p.signal_ringing_threshold_ratio == 0.02
    assert p.samples_per_table == 500_000
    p.validate()


def test_profile_frozen() -> None:
    p = AnalysisProfile()
    with pytest.raises(dataclasses.FrozenInstanceError):
        p.channels = 10  # type: ignore[misc]


def test_profile_replace() -> None:
    p2 = dataclasses.replace(AnalysisProfile(), channels=10)
    assert p2.channels == 10
    assert p2.rows == 100_000  # unchanged
    assert p2.samples_per_table == 1_000_000


def test_profile_dict_roundtrip_through_json() -> None:
    p = AnalysisProfile(rows=2048, channels=10, min_prominence_ratio=0.35)
    d = json.loads(json.dumps(p.to_dict()))
    assert AnalysisProfile.from_dict(d) == p


def test_profile_from_dict_unknown_key() -> None:
    with pytest.raises(TypeError):
        AnalysisProfile.from_dict({"rows": 10, "bogus": 1})


@pytest.mark.parametrize(
    "overrides",
    [
        {"rows": 0},
        {"channels": -1},
        {"envelope_fs_hz": 0.0},
        {"envelope_cutoff_hz": 0.0},
        {"envelope_cutoff_hz": 5_000.0},
        {"peak_fs_hz": -1.0},
        {"min_prominence_ratio": 0.0},
        {"ringing_threshold_ratio": 1.5},
        {"signal_ringing_threshold_ratio": -0.1},
    ],
)
def test_profile_validate_rejects(overrides) -> None:
    with pytest.raises(ValueError):
        AnalysisProfile(**overrides).validate()
