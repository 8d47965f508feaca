"""
Employee roster models.

``RawRow`` is a roster line exactly as read from the CSV (header → cell).
``EmployeeRecord`` is the typed, normalized view produced by the record
parser. Records are frozen after construction; the vacation day accumulator
lives in the rule engine, never on the record.

Date fields use ``None`` as the "invalid date" sentinel — both a missing
column and an unparseable cell end up as ``None``. Validity is decided by
``vacation_planner.rules.validator``, not here.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict

RawRow = dict[str, str]


class EmployeeRecord(BaseModel):
    """One employee as parsed from a roster row.

    Attributes:
        name: Employee name (empty string when missing).
        birth_date: Date of birth, or ``None`` when absent/invalid.
        start_date: First day of employment, or ``None`` when absent/invalid.
        contract: Special contract text (may embed a day count, e.g.
            ``"30 vacation days"``), or ``None`` when absent/empty.
        raw_values: Original cell values in column order, for diagnostics.
    """

    model_config = ConfigDict(frozen=True)

    name: str = ""
    birth_date: Optional[date] = None
    start_date: Optional[date] = None
    contract: Optional[str] = None
    raw_values: tuple[str, ...] = ()

    @property
    def start_year(self) -> Optional[int]:
        return self.start_date.year if self.start_date else None
