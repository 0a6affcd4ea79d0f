"""Command-line MBN feature report.

Examples
--------
Analyze one recording (5 channels, default thresholds)::

    python -m mbn_analyzer.scripts.analyze_db recording.db

Analyze a folder of 10-channel recordings and export the peak table::

    python -m mbn_analyzer.scripts.analyze_db data/ --channels 10 --csv peaks.csv
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Optional, Sequence

from mbn_analyzer.analysis.features import features_to_frame, format_features
from mbn_analyzer.analysis.pipeline import run_pipeline
from mbn_analyzer.ingest.db_loader import load_all_db_files
from mbn_analyzer.models.profile import AnalysisProfile


def build_parser() -> argparse.ArgumentParser:
    defaults = AnalysisProfile()
    p = argparse.ArgumentParser(
        prog="mbn-analyze",
        description="Average, envelope and characterise MBN recordings stored in SQLite .db files.",
    )
    p.add_argument("path", help="A .db file, or a folder containing .db files (non-recursive)")
    p.add_argument("--rows", type=int, default=defaults.rows, help="Samples per channel")
    p.add_argument("--channels", type=int, default=defaults.channels, help="Channel blocks per table (5 or 10)")
    p.add_argument(
        "--prominence",
        type=float,
        default=defaults.min_prominence_ratio,
        help="Minimum peak prominence as a fraction of the envelope maximum",
    )
    p.add_argument(
        "--ringing-threshold",
        type=float,
        default=defaults.ringing_threshold_ratio,
        help="Envelope ringing noise floor (fraction of max |x|)",
    )
    p.add_argument(
        "--signal-ringing-threshold",
        type=float,
        default=defaults.signal_ringing_threshold_ratio,
        help="Raw-signal ringing noise floor (fraction of max |x|)",
    )
    p.add_argument("--peak-fs", type=float, default=defaults.peak_fs_hz, help="Rate [Hz] used for FWHM in seconds")
    p.add_argument("--csv", default=None, help="Write the peak table to this CSV file")
    p.add_argument("--profile-json", default=None, help="Write the analysis profile used to this JSON file")
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    ns = build_parser().parse_args(list(argv) if argv is not None else None)

    profile = AnalysisProfile(
        rows=int(ns.rows),
        channels=int(ns.channels),
        peak_fs_hz=float(ns.peak_fs),
        min_prominence_ratio=float(ns.prominence),
        ringing_threshold_ratio=float(ns.ringing_threshold),
        signal_ringing_threshold_ratio=float(ns.signal_ringing_threshold),
    )
    try:
        profile.validate()
    except ValueError as e:
        print(f"ERROR: {e}")
        return 2

    try:
        loaded = load_all_db_files(ns.path)
    except FileNotFoundError as e:
        print(f"ERROR: path not found: {e}")
        return 1

    for msg in loaded.warnings:
        print(f"[warn] {msg}")
    print(f"[info] loaded {len(loaded.tables)} .db file(s)")
    if not loaded.tables:
        return 1

    result = run_pipeline(loaded.tables, profile)
    for msg in result.warnings:
        print(f"[warn] {msg}")
    print(f"[info] processed {result.aggregation.n_signals} valid MBN signals")

    for line in format_features(result.features):
        print(line)

    if ns.csv:
        df = features_to_frame(result.features)
        out = Path(ns.csv).expanduser()
        df.to_csv(out, index=False)
        print(f"[info] wrote {len(df)} peak row(s): {out}")

    if ns.profile_json:
        out = Path(ns.profile_json).expanduser()
        out.write_text(json.dumps(profile.to_dict(), indent=2), encoding="utf-8")
        print(f"[info] wrote profile: {out}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
