from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

import numpy as np

from mbn_analyzer.ingest.aggregate import process_all_mbn
from mbn_analyzer.models.profile import AnalysisProfile
from mbn_analyzer.models.results import AggregationResult, SignalFeatures

from .envelope import extract_envelopes
from .features import analyze_all_peaks


@dataclass(frozen=True)
class PipelineResult:
    """Everything derived from one batch of raw tables.

    ``signals[k]``, ``envelopes[k]`` and ``features[k]`` describe the same
    recording, which came from table ``aggregation.accepted[k]``.
    """

    profile: AnalysisProfile
    aggregation: AggregationResult
    envelopes: List[np.ndarray]
    features: List[SignalFeatures]

    @property
    def signals(self) -> List[np.ndarray]:
        return self.aggregation.signals

    @property
    def warnings(self) -> Tuple[str, ...]:
        return self.aggregation.warnings


def run_pipeline(tables: Sequence[Any], profile: Optional[AnalysisProfile] = None) -> PipelineResult:
    """Raw tables -> Signal Matrix -> Envelope Matrix -> feature records."""
    profile = profile or AnalysisProfile()
    profile.validate()

    agg = process_all_mbn(tables, rows=profile.rows, channels=profile.channels)
    envelopes = extract_envelopes(
        agg.signals,
        cutoff_hz=profile.envelope_cutoff_hz,
        fs_hz=profile.envelope_fs_hz,
    )
    features = analyze_all_peaks(agg.signals, envelopes, profile, source_tables=agg.accepted)

    return PipelineResult(profile=profile, aggregation=agg, envelopes=envelopes, features=features)
