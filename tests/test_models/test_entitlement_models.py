"""
Tests for models/entitlement.py, models/employee.py and models/meta.py.

Covers:
  - round_days(): half-up rounding to one decimal
  - Entitlement: NaN handling
  - EntitlementResult.to_row(): CSV cell formatting
  - EmployeeRecord / RunMetadata validation
"""

from __future__ import annotations

import math
from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from vacation_planner.models.employee import EmployeeRecord
from vacation_planner.models.entitlement import Entitlement, EntitlementResult, round_days
from vacation_planner.models.meta import RunMetadata


@pytest.mark.parametrize(
    "days,expected",
    [(26.0, 26.0), (26 / 12, 2.2), (0.25, 0.3), (2.75, 2.8), (0.04, 0.0), (13 / 6 * 5, 10.8)],
)
def test_round_days(days, expected):
    assert round_days(days) == expected


@pytest.mark.parametrize("days", [1.1e28, 9.99e28, 1e300])
def test_round_days_large_values(days):
    assert round_days(days) == days


class TestEntitlement:
    def test_rounded_days(self):
        assert Entitlement(days=26 + 26 / 12).rounded_days() == 28.2

    def test_nan_is_not_computable(self):
        ent = Entitlement(days=math.nan)
        assert not ent.is_computable
        assert ent.rounded_days() is None


class TestEntitlementResult:
    def test_to_row_whole_number(self):
        assert EntitlementResult(name="Hans", days=27.0).to_row() == {"name": "Hans", "days": "27"}

    def test_to_row_fraction(self):
        assert EntitlementResult(name="Hans", days=28.2).to_row() == {"name": "Hans", "days": "28.2"}

    def test_to_row_none(self):
        assert EntitlementResult(name="", days=None).to_row() == {"name": "", "days": ""}

    def test_frozen(self):
        result = EntitlementResult(name="Hans", days=1.0)
        with pytest.raises(ValidationError):
            result.days = 2.0  # type: ignore[misc]


class TestEmployeeRecord:
    def test_defaults(self):
        record = EmployeeRecord()
        assert record.name == ""
        assert record.birth_date is None
        assert record.start_year is None

    def test_start_year(self):
        assert EmployeeRecord(name="Hans", start_date=date(2017, 11, 1)).start_year == 2017


class TestRunMetadata:
    def _make(self, **overrides) -> RunMetadata:
        defaults = dict(
            run_slug="abc",
            pipeline_stage="vacation",
            config_snapshot={},
            started_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
        )
        defaults.update(overrides)
        return RunMetadata(**defaults)

    def test_defaults(self):
        run = self._make()
        assert run.status == "started"
        assert run.rows_processed == 0
        assert run.finished_at is None

    def test_mutable(self):
        run = self._make()
        run.status = "success"
        run.rows_processed = 3
        assert run.rows_processed == 3

    def test_unknown_stage_rejected(self):
        with pytest.raises(ValidationError):
            self._make(pipeline_stage="forecast")

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError):
            self._make(status="paused")
