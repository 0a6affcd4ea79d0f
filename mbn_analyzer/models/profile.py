"""Analysis profile -- bundles all pipeline-relevant configuration.

An AnalysisProfile groups every parameter that affects the analysis output
into one frozen dataclass.  It can be:

- Constructed with defaults matching the MBN acquisition setup
- Overridden field-by-field via ``dataclasses.replace()``
- Serialized to/from a dict for JSON provenance
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class AnalysisProfile:
    """Frozen configuration for the full MBN pipeline.

    Acquisition shape
    -----------------
    rows : int
        Samples per channel in one recording.
    channels : int
        Number of channel blocks stacked in column 1. Recordings have been
        produced with both 5 and 10 channels; set this to match the data.

    Envelope
    --------
    envelope_cutoff_hz : float
        Low-pass cutoff of the envelope filter.
    envelope_fs_hz : float
        Nominal sampling rate used to design the envelope filter. This is a
        design constant and does not have to equal the acquisition rate.

    Features
    --------
    peak_fs_hz : float
        Rate used to convert FWHM from samples to seconds.
    min_prominence_ratio : float
        Peak acceptance threshold as a fraction of the global maximum.
    ringing_threshold_ratio : float
        Ringing noise floor (fraction of max |x|) applied to envelopes.
    signal_ringing_threshold_ratio : float
        Ringing noise floor applied to the averaged raw signal.
    """

    rows: int = 100_000
    channels: int = 5

    envelope_cutoff_hz: float = 20.0
    envelope_fs_hz: float = 10_000.0

    peak_fs_hz: float = 100_000.0
    min_prominence_ratio: float = 0.2
    ringing_threshold_ratio: float = 0.01
    signal_ringing_threshold_ratio: float = 0.02

    @property
    def samples_per_table(self) -> int:
        return int(self.rows) * int(self.channels)

    def validate(self) -> None:
        """Raise ValueError if any field is out of range."""
        if int(self.rows) <= 0:
            raise ValueError(f"rows must be > 0, got {self.rows}")
        if int(self.channels) <= 0:
            raise ValueError(f"channels must be > 0, got {self.channels}")
        if self.envelope_fs_hz <= 0:
            raise ValueError(f"envelope_fs_hz must be > 0, got {self.envelope_fs_hz}")
        if not (0.0 < self.envelope_cutoff_hz < 0.5 * self.envelope_fs_hz):
            raise ValueError(
                f"envelope_cutoff_hz must be in (0, {0.5 * self.envelope_fs_hz:g}), "
                f"got {self.envelope_cutoff_hz}"
            )
        if self.peak_fs_hz <= 0:
            raise ValueError(f"peak_fs_hz must be > 0, got {self.peak_fs_hz}")
        for name in ("min_prominence_ratio", "ringing_threshold_ratio", "signal_ringing_threshold_ratio"):
            v = float(getattr(self, name))
            if not (0.0 < v <= 1.0):
                raise ValueError(f"{name} must be in (0, 1], got {v}")

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly dict."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> AnalysisProfile:
        """Reconstruct from a dict (e.g. loaded from JSON). Unknown keys raise TypeError."""
        return cls(**dict(d))
