from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple
import sqlite3

import pandas as pd


DATA_QUERY = "SELECT * FROM data"


@dataclass(frozen=True)
class LoadResult:
    """Tables loaded from a folder of MBN ``.db`` files.

    ``tables[k]`` was read from ``sources[k]``. Files that could not be opened
    or queried are absent and reported in ``warnings``.
    """

    tables: List[pd.DataFrame]
    sources: Tuple[Path, ...]
    warnings: Tuple[str, ...] = ()


def load_db_table(path: str | Path) -> pd.DataFrame:
    """Read the ``data`` table of one SQLite file, rows in storage order.

    Raises FileNotFoundError for a missing file; sqlite/pandas errors propagate.
    """
    p = Path(path).expanduser().resolve()
    if not p.is_file():
        raise FileNotFoundError(str(p))

    # read-only URI so a wrong path never creates an empty database
    con = sqlite3.connect(f"{p.as_uri()}?mode=ro", uri=True)
    try:
        return pd.read_sql_query(DATA_QUERY, con)
    finally:
        con.close()


def load_all_db_files(path: str | Path) -> LoadResult:
    """Load every ``*.db`` file in a folder (non-recursive, sorted by name).

    A single file path is accepted too. Unreadable files are skipped with a
    warning; the batch never aborts on one bad file.
    """
    p = Path(path).expanduser().resolve()
    if p.is_file():
        files = [p]
    elif p.is_dir():
        files = sorted(f for f in p.glob("*.db") if f.is_file())
    else:
        raise FileNotFoundError(str(p))

    tables: List[pd.DataFrame] = []
    sources: List[Path] = []
    warnings: List[str] = []

    for f in files:
        try:
            df = load_db_table(f)
        except (sqlite3.Error, pd.errors.DatabaseError, OSError) as e:
            warnings.append(f"failed to load {f.name}: {e}")
            continue
        tables.append(df)
        sources.append(f)

    if not files:
        warnings.append(f"no .db files found in {p}")

    return LoadResult(tables=tables, sources=tuple(sources), warnings=tuple(warnings))
