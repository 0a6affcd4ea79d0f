"""Ingest package - table loading and row aggregation.

This package handles:
- Reading the ``data`` table of MBN SQLite recordings (*.db)
- Extracting the column-1 sample stream of each table
- Validating the stream shape (rows * channels) and averaging channels

Key functions:
- load_all_db_files: Loads every *.db file of a folder into DataFrames
- process_all_mbn: Builds the Signal Matrix from a batch of raw tables

Design principle:
- A malformed row is dropped, a mis-shaped table is skipped; both are
  reported as warnings and neither aborts the batch
"""
from __future__ import annotations

from .aggregate import average_channels, check_stream_shape, extract_channel_stream, process_all_mbn
from .db_loader import LoadResult, load_all_db_files, load_db_table

__all__ = [
    "average_channels",
    "check_stream_shape",
    "extract_channel_stream",
    "process_all_mbn",
    "LoadResult",
    "load_all_db_files",
    "load_db_table",
]
