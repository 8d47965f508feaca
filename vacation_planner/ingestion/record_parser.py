"""
Record parser — normalizes one free-form roster row into an ``EmployeeRecord``.

Column headers are matched case-insensitively by substring. For each
header the first keyword in ``COLUMN_KEYWORDS`` that it contains decides the
target field, so ``"Contract start"`` maps to ``start_date``. Columns are
visited in file order and the last column mapped to a field wins.

Parsing never fails: unknown columns are ignored, unparseable dates become
``None`` and an empty contract cell means "no contract".
"""

from __future__ import annotations

from typing import Optional

from vacation_planner.models.employee import EmployeeRecord, RawRow
from vacation_planner.utils.time_utils import parse_roster_date

# Order matters: first match per header wins.
COLUMN_KEYWORDS: tuple[tuple[str, str], ...] = (
    ("name", "name"),
    ("birth", "birth_date"),
    ("start", "start_date"),
    ("contract", "contract"),
)


def match_column(header: str) -> Optional[str]:
    """Return the ``EmployeeRecord`` field ``header`` maps to, or ``None``."""
    lowered = header.lower()
    for keyword, field in COLUMN_KEYWORDS:
        if keyword in lowered:
            return field
    return None


def parse_row(raw_row: RawRow) -> EmployeeRecord:
    """Build an :class:`EmployeeRecord` from a roster row.

    Args:
        raw_row: Header → cell mapping as read from the CSV.

    Returns:
        Parsed record; invalid dates are ``None``.
    """
    fields: dict = {}
    for header, value in raw_row.items():
        field = match_column(header)
        if field is None:
            continue
        value = (value or "").strip()

        if field in ("birth_date", "start_date"):
            fields[field] = parse_roster_date(value)
        elif field == "contract":
            fields[field] = value or None
        else:
            fields[field] = value

    return EmployeeRecord(
        **fields,
        raw_values=tuple((v or "") for v in raw_row.values()),
    )
