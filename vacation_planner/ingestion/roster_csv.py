"""
CSV roster reader.

Reads an employee roster into a list of ``RawRow`` dicts (header → cell
string), preserving column and row order. Header names are kept verbatim;
interpreting them is the record parser's job.

Format — comma delimited, UTF-8 (a leading BOM is tolerated), header row
required. Repeated header labels get a " #2", " #3" suffix so no cell is
lost. Short rows are padded with empty strings; cells beyond the last
header are dropped.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from vacation_planner.models.employee import RawRow

logger = logging.getLogger(__name__)


def read_roster(path: Path) -> list[RawRow]:
    """Read every data row of the roster at ``path``.

    Args:
        path: Path to the CSV file (must exist).

    Returns:
        List of row dicts in file order.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the file has no header row.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Roster file not found: {path}")

    with open(path, encoding="utf-8-sig", newline="") as f:
        # Skip leading blank lines the way DictReader does.
        header = next((cells for cells in csv.reader(f) if cells), None)
        if header is None:
            raise ValueError(f"CSV file is empty or has no header row: {path}")

        reader = csv.DictReader(f, fieldnames=_unique_headers(header), restval="")
        rows = [_clean_row(row) for row in reader]

    if not rows:
        logger.warning("Roster CSV is empty (header only): %s", path)
    else:
        logger.info("Read %d roster row(s) from %s", len(rows), path.name)
    return rows


def _clean_row(row: dict) -> RawRow:
    """Drop overflow cells (keyed ``None`` by DictReader) and ``None`` values."""
    return {
        key: (value if value is not None else "")
        for key, value in row.items()
        if key is not None
    }


def _unique_headers(header: list[str]) -> list[str]:
    """Suffix repeated labels (``Name``, ``Name #2``) so every cell keeps a key."""
    seen: set[str] = set()
    unique = []
    for label in header:
        candidate, n = label, 1
        while candidate in seen:
            n += 1
            candidate = f"{label} #{n}"
        seen.add(candidate)
        unique.append(candidate)
    return unique
