"""Log panel of the MBN notebook GUI.

Severity comes from the caller, never from parsing the text. Pipeline
diagnostics are reported straight from the result objects:

- ``LoadResult``: each unreadable file is a warning, the file count is info
- ``AggregationResult``: a skipped table is a warning, a table that merely
  lost malformed rows is info (its signal is still produced)
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from typing import List, Literal, Optional

import ipywidgets as w

from mbn_analyzer.ingest.db_loader import LoadResult
from mbn_analyzer.models.results import AggregationResult


Severity = Literal["info", "warning", "error"]

SEVERITY_COLORS = {"info": "#222222", "warning": "#b26a00", "error": "#b00020"}


@dataclass
class LogLine:
    severity: Severity
    text: str
    repeats: int = 1

    def to_html(self) -> str:
        label = self.text if self.repeats == 1 else f"{self.text} (x{self.repeats})"
        return (
            f"<div style='color:{SEVERITY_COLORS[self.severity]}; font-family:monospace; "
            f"white-space:pre-wrap;'>{html.escape(label)}</div>"
        )


class HtmlLog:
    """Bounded, colour-coded message list rendered into one ``ipywidgets.HTML``.

    A message equal to the previous one (same text and severity) bumps a
    repeat counter instead of adding a line.
    """

    def __init__(self, *, title: Optional[str] = None, height_px: int = 260, max_entries: int = 2000) -> None:
        self._lines: List[LogLine] = []
        self._height_px = int(height_px)
        self._max_entries = max(1, int(max_entries))
        self.widget = w.HTML()
        header = [w.HTML(f"<b>{html.escape(title)}</b>")] if title else []
        self.panel = w.VBox(header + [self.widget])
        self.clear()

    @property
    def messages(self) -> List[str]:
        return [line.text for line in self._lines]

    def clear(self) -> None:
        self._lines = []
        self._refresh()

    def info(self, text: str) -> None:
        self._append("info", text)

    def warning(self, text: str) -> None:
        self._append("warning", text)

    def error(self, text: str) -> None:
        self._append("error", text)

    def report_load(self, loaded: LoadResult) -> None:
        for msg in loaded.warnings:
            self.warning(f"WARNING: {msg}")
        self.info(f"Actually loaded {len(loaded.tables)} .db file(s)")

    def report_aggregation(self, agg: AggregationResult) -> None:
        for table_index, n_dropped in agg.dropped_rows:
            self.info(f"table {table_index}: dropped {n_dropped} malformed row(s)")
        for skip in agg.skipped:
            self.warning(f"CHECK: table {skip.table_index}: {skip.reason}; skipping table")
        self.info(f"Processed {agg.n_signals} valid MBN signals")

    def _append(self, severity: Severity, text: str) -> None:
        last = self._lines[-1] if self._lines else None
        if last is not None and last.severity == severity and last.text == text:
            last.repeats += 1
        else:
            self._lines.append(LogLine(severity, str(text)))
            del self._lines[: -self._max_entries]
        self._refresh()

    def _refresh(self) -> None:
        body = "".join(line.to_html() for line in self._lines)
        if not body:
            body = "<div style='color:#666;'>Log is empty.</div>"
        self.widget.value = (
            f"<div style='border:1px solid #ddd; padding:8px; height:{self._height_px}px; "
            f"overflow-y:auto; background:#fff;'>{body}</div>"
        )
