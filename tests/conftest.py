"""
Shared pytest fixtures for the Vacation Planner test suite.

Provides:
  - ``policy``: default ``PolicyConfig`` (26 days, bonus from 30, every 5 years).
  - ``make_record``: factory for parsed ``EmployeeRecord`` objects.
  - ``roster_row``: factory for raw roster rows with the usual column labels.
  - ``write_roster``: writes a roster CSV into ``tmp_path`` and returns its path.
"""

from __future__ import annotations

import csv
from datetime import date
from pathlib import Path
from typing import Callable, Optional

import pytest

from vacation_planner.config import PolicyConfig
from vacation_planner.models.employee import EmployeeRecord

ROSTER_HEADER = ["Name", "Date of birth", "Start date", "Special contract"]


@pytest.fixture
def policy() -> PolicyConfig:
    return PolicyConfig()


@pytest.fixture
def make_record() -> Callable[..., EmployeeRecord]:
    """Build an ``EmployeeRecord`` with sensible defaults (valid, long-tenured)."""

    def _make(
        name: str = "Hans",
        birth_date: Optional[date] = date(2000, 1, 1),
        start_date: Optional[date] = date(2010, 1, 1),
        contract: Optional[str] = None,
    ) -> EmployeeRecord:
        return EmployeeRecord(
            name=name,
            birth_date=birth_date,
            start_date=start_date,
            contract=contract,
        )

    return _make


@pytest.fixture
def roster_row() -> Callable[..., dict[str, str]]:
    """Build a raw roster row keyed by the standard column labels."""

    def _row(
        name: str = "Hans",
        birth: str = "01.01.2000",
        start: str = "01.01.2016",
        contract: str = "",
    ) -> dict[str, str]:
        return dict(zip(ROSTER_HEADER, [name, birth, start, contract]))

    return _row


@pytest.fixture
def write_roster(tmp_path: Path) -> Callable[..., Path]:
    """Write rows (dicts keyed by ``header``) to ``tmp_path/<filename>``."""

    def _write(
        rows: list[dict[str, str]],
        filename: str = "input.csv",
        header: Optional[list[str]] = None,
    ) -> Path:
        path = tmp_path / filename
        with path.open("w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=header or ROSTER_HEADER)
            writer.writeheader()
            writer.writerows(rows)
        return path

    return _write
