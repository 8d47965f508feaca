"""Record validation — decides whether an employee has enough data to compute."""

from __future__ import annotations

from vacation_planner.models.employee import EmployeeRecord


def is_valid(record: EmployeeRecord) -> bool:
    """True iff the record has a name and valid birth and start dates.

    The special contract is never required.
    """
    return bool(record.name) and record.birth_date is not None and record.start_date is not None


def invalid_row_message(record: EmployeeRecord) -> str:
    """Warning text for a rejected row, quoting its original cell values."""
    return f"The following row is not valid: {', '.join(record.raw_values)}"
