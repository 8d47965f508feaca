"""
Date utilities for roster parsing and run bookkeeping.

Roster dates are written day-first with dots (``DD.MM.YYYY``). Parsing is
strict: the whole cell must match the pattern and name a real calendar day,
otherwise ``None`` is returned. Nothing here guesses at alternate formats.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Optional

ROSTER_DATE_PATTERN = re.compile(r"([0-9]{2})\.([0-9]{2})\.([0-9]{4})")


def parse_roster_date(value: str) -> Optional[date]:
    """Parse a ``DD.MM.YYYY`` string into a :class:`date`, or ``None``.

    ``"01.01.2001"`` parses; ``"01.01.2001a"``, ``"1.1.2001"`` and
    ``"31.02.2001"`` do not.
    """
    match = ROSTER_DATE_PATTERN.fullmatch(value)
    if match is None:
        return None
    day, month, year = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def month_index(d: date) -> int:
    """Return the 0-based month of ``d`` (January = 0)."""
    return d.month - 1


def utcnow() -> datetime:
    """Return the current UTC datetime (timezone-aware)."""
    return datetime.now(tz=timezone.utc)
