from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Optional

import ipywidgets as w

from mbn_analyzer.analysis.features import format_features
from mbn_analyzer.analysis.pipeline import PipelineResult, run_pipeline
from mbn_analyzer.gui.log_view import HtmlLog
from mbn_analyzer.ingest.db_loader import load_all_db_files
from mbn_analyzer.models.profile import AnalysisProfile


# Keep a single active GUI instance per kernel to avoid duplicated callbacks / stacked widgets.
_ACTIVE_GUI: Optional[w.Widget] = None


def load_and_process(path: str | Path, profile: AnalysisProfile, log: HtmlLog) -> Optional[PipelineResult]:
    """Load ``.db`` file(s), run the pipeline and log the outcome.

    Returns the PipelineResult, or None when nothing could be loaded.
    """
    loaded = load_all_db_files(path)
    log.report_load(loaded)
    if not loaded.tables:
        log.error("ERROR: no data loaded: file cannot be opened or contains no data")
        return None

    result = run_pipeline(loaded.tables, profile)
    log.report_aggregation(result.aggregation)
    return result


def log_signal_report(result: Optional[PipelineResult], index: int, log: HtmlLog) -> None:
    """Write the feature report of one signal into the log."""
    if result is None or not result.features:
        log.warning("WARNING: no data detected")
        return
    if not (0 <= index < len(result.features)):
        log.error(f"ERROR: signal index {index} out of range [0, {len(result.features)})")
        return
    for line in format_features([result.features[index]]):
        log.info(line)


def build_gui(profile: Optional[AnalysisProfile] = None) -> w.Widget:
    """
    MBN notebook panel (Jupyter / VSCode notebooks).

    Load one ``.db`` file (or a folder of them), process it with the selected
    channel count, then print per-signal feature reports into the log.
    """
    global _ACTIVE_GUI

    if _ACTIVE_GUI is not None:
        _ACTIVE_GUI.close()
        _ACTIVE_GUI = None

    base_profile = profile or AnalysisProfile()
    log = HtmlLog(title="Log")

    path_txt = w.Text(
        description="Path",
        placeholder=".../recording.db (or a folder of .db files)",
        layout=w.Layout(width="70%"),
    )
    dd_channels = w.Dropdown(
        description="Channels",
        options=[("5", 5), ("10", 10)],
        value=base_profile.channels if base_profile.channels in (5, 10) else 5,
        layout=w.Layout(width="180px"),
    )
    btn_load = w.Button(description="Load", button_style="primary", layout=w.Layout(width="120px"))

    dd_signal = w.Dropdown(options=[], description="Signal", layout=w.Layout(width="220px"))
    btn_analyze = w.Button(description="Analyze", layout=w.Layout(width="120px"))
    btn_clear = w.Button(description="Clear log", layout=w.Layout(width="120px"))

    state: Dict[str, Any] = {"result": None}

    def _on_load(_):
        path = path_txt.value.strip()
        if not path:
            log.error("ERROR: file path is empty")
            return
        try:
            prof = replace(base_profile, channels=int(dd_channels.value))
            result = load_and_process(Path(path), prof, log)
        except Exception as e:
            log.error(f"ERROR: {e!r}")
            return
        state["result"] = result
        n = len(result.features) if result is not None else 0
        dd_signal.options = [(f"Signal {k + 1}", k) for k in range(n)]
        if n:
            dd_signal.value = 0
            log_signal_report(result, 0, log)

    def _on_analyze(_):
        if dd_signal.value is None:
            log.warning("WARNING: no data detected")
            return
        log_signal_report(state["result"], int(dd_signal.value), log)

    btn_load.on_click(_on_load)
    btn_analyze.on_click(_on_analyze)
    btn_clear.on_click(lambda _: log.clear())

    top = w.HBox([path_txt, dd_channels, btn_load])
    mid = w.HBox([dd_signal, btn_analyze, btn_clear])
    gui = w.VBox([top, mid, log.panel])

    _ACTIVE_GUI = gui
    return gui
