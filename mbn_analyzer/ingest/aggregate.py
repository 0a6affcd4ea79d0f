"""Row aggregation: raw loader tables -> one averaged MBN signal per recording.

Table layout
------------
Each valid row carries one MBN sample in column 1 (rows with fewer than 4
cells are malformed). The column-1 values of a recording are ``channels``
consecutive blocks of ``rows`` samples::

    channel 0 -> stream[0 : rows]
    channel 1 -> stream[rows : 2*rows]
    ...

The averaged signal is the per-sample mean across the channel blocks.

Shape policy
------------
The stream length must be exactly ``rows * channels``. Anything else rejects
the whole table: no trimming, no padding. A rejected table is recorded as a
:class:`~mbn_analyzer.models.results.TableSkip` and the batch continues.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from mbn_analyzer.models.cells import NumericCell, coerce_cell
from mbn_analyzer.models.results import AggregationResult, TableSkip


MIN_ROW_CELLS = 4
SAMPLE_COLUMN = 1


def _iter_rows(table: Any) -> Iterable[Sequence[Any]]:
    if isinstance(table, pd.DataFrame):
        return table.itertuples(index=False, name=None)
    return table


def _numeric_frame_stream(df: pd.DataFrame) -> Optional[Tuple[np.ndarray, int]]:
    """Vectorised column-1 extraction for frames with a real-valued sample column.

    Returns None when the column needs per-cell coercion (object/string/bool dtype).
    """
    if df.shape[1] < MIN_ROW_CELLS:
        return np.zeros(0, dtype=np.float64), len(df)
    col = df.iloc[:, SAMPLE_COLUMN]
    if pd.api.types.is_bool_dtype(col) or not pd.api.types.is_numeric_dtype(col):
        return None
    values = col.to_numpy(dtype=np.float64, na_value=np.nan)
    keep = np.isfinite(values)
    return values[keep], int(values.size - np.count_nonzero(keep))


def extract_channel_stream(table: Any) -> Tuple[np.ndarray, int]:
    """Collect the column-1 samples of a raw table.

    Parameters
    ----------
    table:
        Sequence of rows (each a sequence of cell values) or a DataFrame.

    Returns
    -------
    stream:
        float64 array of usable samples, in row order.
    n_dropped:
        Number of rows excluded (too short, or column 1 not numeric).
    """
    if isinstance(table, pd.DataFrame):
        fast = _numeric_frame_stream(table)
        if fast is not None:
            return fast

    values: List[float] = []
    n_dropped = 0
    for row in _iter_rows(table):
        if len(row) < MIN_ROW_CELLS:
            n_dropped += 1
            continue
        cell = coerce_cell(row[SAMPLE_COLUMN])
        if not isinstance(cell, NumericCell):
            n_dropped += 1
            continue
        values.append(cell.value)
    return np.asarray(values, dtype=np.float64), n_dropped


def check_stream_shape(stream: np.ndarray, rows: int, channels: int) -> Optional[str]:
    """Return a rejection reason if the stream does not hold exactly ``rows * channels`` samples."""
    need = int(rows) * int(channels)
    n = int(np.asarray(stream).size)
    if n != need:
        return f"MBN size mismatch: got {n} samples, expected rows*channels={rows}*{channels}={need}"
    return None


def average_channels(stream: np.ndarray, rows: int, channels: int) -> np.ndarray:
    """Average ``channels`` stacked blocks of ``rows`` samples into one signal."""
    x = np.asarray(stream, dtype=np.float64)
    if x.ndim != 1:
        raise ValueError(f"Expected 1D array, got shape {x.shape}")
    reason = check_stream_shape(x, rows, channels)
    if reason is not None:
        raise ValueError(reason)
    return x.reshape((int(channels), int(rows))).mean(axis=0)


def process_all_mbn(
    tables: Sequence[Any],
    *,
    rows: int = 100_000,
    channels: int = 5,
) -> AggregationResult:
    """Turn a batch of raw tables into the Signal Matrix.

    Parameters
    ----------
    tables:
        Raw tables from the loader, in file order.
    rows:
        Samples per channel.
    channels:
        Number of channel blocks per table.

    Returns
    -------
    AggregationResult
        ``signals`` is dense (rejected tables are absent, not padded) and
        ``accepted`` maps each signal back to its table index.
    """
    rows = int(rows)
    channels = int(channels)
    if rows <= 0:
        raise ValueError(f"rows must be > 0, got {rows}")
    if channels <= 0:
        raise ValueError(f"channels must be > 0, got {channels}")

    signals: List[np.ndarray] = []
    accepted: List[int] = []
    skipped: List[TableSkip] = []
    warnings: List[str] = []
    dropped_rows: List[Tuple[int, int]] = []

    for k, table in enumerate(tables):
        stream, n_dropped = extract_channel_stream(table)
        if n_dropped:
            dropped_rows.append((k, n_dropped))
            warnings.append(f"table {k}: dropped {n_dropped} malformed row(s)")

        reason = check_stream_shape(stream, rows, channels)
        if reason is not None:
            skipped.append(
                TableSkip(table_index=k, n_samples=int(stream.size), expected=rows * channels, reason=reason)
            )
            warnings.append(f"table {k}: {reason}; skipping table")
            continue

        signals.append(average_channels(stream, rows, channels))
        accepted.append(k)

    return AggregationResult(
        signals=signals,
        accepted=tuple(accepted),
        skipped=tuple(skipped),
        rows=rows,
        channels=channels,
        warnings=tuple(warnings),
        dropped_rows=tuple(dropped_rows),
    )
