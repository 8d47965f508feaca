"""
Export helpers for computed entitlements.

All functions write to disk and return the written ``Path``.
``export_to_csv`` accepts generic ``list[dict]`` data and a field projection
so it stays decoupled from the entitlement result shape.

Writes go to a temporary file next to the destination which is then renamed
into place, so a failed write never leaves a half-written result file.
"""

from __future__ import annotations

import csv
import os
import tempfile
from pathlib import Path

from vacation_planner.models.entitlement import OUTPUT_FIELDS, EntitlementResult


def export_to_csv(
    records: list[dict],
    path: Path,
    fieldnames: list[str] | None = None,
) -> Path:
    """Write ``records`` to a UTF-8 CSV file.

    Args:
        records:    List of row dicts.
        path:       Destination file path (parent dirs created if missing).
        fieldnames: Column order and projection. If None, uses the keys of
                    the first record. Keys not listed are ignored.

    Returns:
        ``path`` as written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    cols = fieldnames or (list(records[0].keys()) if records else [])

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
    )
    try:
        with os.fdopen(fd, "w", newline="", encoding="utf-8") as f:
            if cols:
                writer = csv.DictWriter(f, fieldnames=cols, extrasaction="ignore")
                writer.writeheader()
                writer.writerows(records)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    return path


def export_entitlements(results: list[EntitlementResult], path: Path) -> Path:
    """Write entitlement results as ``name,days`` rows, preserving order."""
    return export_to_csv([r.to_row() for r in results], path, fieldnames=OUTPUT_FIELDS)
