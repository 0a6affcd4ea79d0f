"""Typed view of the loosely-typed cell values produced by the table loader.

SQLite columns come back as int, float, str, bytes or None depending on how
the acquisition software wrote them. The aggregator only needs to know one
thing per cell: does it hold a usable number or not. That decision is made
here, once, and encoded in the type of the returned object.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
from numbers import Real
from typing import Any, Union

import numpy as np


@dataclass(frozen=True)
class NumericCell:
    """A cell holding a finite float."""

    value: float


@dataclass(frozen=True)
class InvalidCell:
    """A cell that cannot be used as a sample.

    Attributes
    ----------
    raw:
        The original value, kept for diagnostics.
    reason:
        Short human-readable explanation.
    """

    raw: Any
    reason: str


Cell = Union[NumericCell, InvalidCell]


def coerce_cell(value: Any) -> Cell:
    """Classify a raw cell value.

    Accepted: Python/numpy integers and floats, and numeric strings/bytes
    (surrounding whitespace allowed). Rejected: ``None``, booleans, empty or
    non-numeric strings, NaN/Inf and any other type.
    """
    if isinstance(value, (NumericCell, InvalidCell)):
        return value
    if value is None:
        return InvalidCell(raw=value, reason="missing value")
    if isinstance(value, (bool, np.bool_)):
        return InvalidCell(raw=value, reason="boolean is not a sample")

    if isinstance(value, bytes):
        try:
            value_s = value.decode("ascii")
        except UnicodeDecodeError:
            return InvalidCell(raw=value, reason="undecodable bytes")
        return _from_text(value, value_s)
    if isinstance(value, str):
        return _from_text(value, value)

    if isinstance(value, (Real, np.integer, np.floating)):
        v = float(value)
        if not math.isfinite(v):
            return InvalidCell(raw=value, reason="non-finite number")
        return NumericCell(value=v)

    return InvalidCell(raw=value, reason=f"unsupported type {type(value).__name__}")


def _from_text(raw: Any, text: str) -> Cell:
    s = text.strip()
    if not s:
        return InvalidCell(raw=raw, reason="empty string")
    try:
        v = float(s)
    except ValueError:
        return InvalidCell(raw=raw, reason="not a number")
    if not math.isfinite(v):
        return InvalidCell(raw=raw, reason="non-finite number")
    return NumericCell(value=v)
