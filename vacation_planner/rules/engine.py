"""
Vacation rule engine — turns one employee plus a target year into a day count.

Rules run strictly in ``RULE_CHAIN`` order against an accumulator that
starts at 0. Each rule is a pure function::

    rule(state, record, year, policy) -> (new_days, diagnostics)

and never logs; diagnostics are returned to the caller, which decides how
to present them. ``state`` is the ``_ChainState`` of the current run (days
so far, plus the ``carried`` fraction the newcomer rule may set).

Rules:
  1. minimum   — add ``policy.min_vacation_days``.
  2. age       — one extra day at ``min_age_for_bonus`` and one more every
                 ``bonus_period_years`` after; age is the calendar-year
                 difference, so turning 30 on 31 Dec counts for that year.
  3. contract  — a special contract's leading integer REPLACES the total;
                 no leading integer makes the result NaN.
  4. newcomer  — start year: pro-rate by the full months after the start
                 month, ``days * (11 - start_month0) / 12``, and remember
                 ``days / 12`` as carried. Second year: add the carried
                 fraction of the recomputed previous year. Not started yet:
                 NaN.
  5. start_day — warn when employment did not start on an allowed day.

The caller must only pass records accepted by ``rules.validator.is_valid``.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Callable

from vacation_planner.config import PolicyConfig
from vacation_planner.models.employee import EmployeeRecord
from vacation_planner.models.entitlement import Diagnostic, Entitlement
from vacation_planner.utils.time_utils import month_index

MONTHS_PER_YEAR = 12

# No contract can grant more days than a leap year has.
MAX_CONTRACT_DAYS = 366

_LEADING_INT = re.compile(r"\s*([+-]?)(\d+)")


@dataclass
class _ChainState:
    days: float = 0.0
    carried: float = 0.0


RuleResult = tuple[float, list[Diagnostic]]
Rule = Callable[[_ChainState, EmployeeRecord, int, PolicyConfig], RuleResult]


# ── Rules ─────────────────────────────────────────────────────────────────────


def apply_minimum_days(
    state: _ChainState, record: EmployeeRecord, year: int, policy: PolicyConfig
) -> RuleResult:
    return state.days + policy.min_vacation_days, []


def apply_age_bonus(
    state: _ChainState, record: EmployeeRecord, year: int, policy: PolicyConfig
) -> RuleResult:
    return state.days + age_bonus(year - record.birth_date.year, policy), []


def age_bonus(age: int, policy: PolicyConfig) -> int:
    """Extra days for an employee of ``age`` (calendar-year difference)."""
    difference = age - policy.min_age_for_bonus
    if difference < 0:
        return 0
    return difference // policy.bonus_period_years + 1


def apply_special_contract(
    state: _ChainState, record: EmployeeRecord, year: int, policy: PolicyConfig
) -> RuleResult:
    if not record.contract:
        return state.days, []

    contract_days = parse_contract_days(record.contract)
    if contract_days is None:
        return math.nan, [
            Diagnostic("contract", f"Invalid special contract for {record.name}")
        ]
    return float(contract_days), []


def parse_contract_days(contract: str) -> int | None:
    """Leading integer of a contract text, e.g. ``"30 days"`` → 30.

    Returns ``None`` when there is no leading integer or it falls outside
    ``0..MAX_CONTRACT_DAYS``.
    """
    match = _LEADING_INT.match(contract)
    if match is None:
        return None
    sign, digits = match.groups()
    digits = digits.lstrip("0") or "0"
    if len(digits) > len(str(MAX_CONTRACT_DAYS)):
        return None
    value = int(sign + digits)
    return value if 0 <= value <= MAX_CONTRACT_DAYS else None


def apply_newcomer_rule(
    state: _ChainState, record: EmployeeRecord, year: int, policy: PolicyConfig
) -> RuleResult:
    start_year = record.start_date.year
    days = state.days

    if start_year == year:
        state.carried = days / MONTHS_PER_YEAR
        remaining_months = MONTHS_PER_YEAR - 1 - month_index(record.start_date)
        return days * remaining_months / MONTHS_PER_YEAR, []

    if start_year + 1 == year:
        # Recursion floor: the previous year is the start year, so it never
        # reaches this branch again.
        previous = compute_days(record, year - 1, policy)
        return days + previous.carried, []

    if start_year > year:
        return math.nan, [
            Diagnostic("newcomer", f"{record.name} did not work in {year}")
        ]

    return days, []


def check_start_day(
    state: _ChainState, record: EmployeeRecord, year: int, policy: PolicyConfig
) -> RuleResult:
    if record.start_date.day in policy.allowed_start_days:
        return state.days, []
    return state.days, [
        Diagnostic(
            "start_day",
            f"{record.name} started not in a correct day. Please double check it.",
        )
    ]


RULE_CHAIN: tuple[tuple[str, Rule], ...] = (
    ("minimum", apply_minimum_days),
    ("age", apply_age_bonus),
    ("contract", apply_special_contract),
    ("newcomer", apply_newcomer_rule),
    ("start_day", check_start_day),
)


# ── Entry point ───────────────────────────────────────────────────────────────


def compute_days(
    record: EmployeeRecord,
    year: int,
    policy: PolicyConfig | None = None,
) -> Entitlement:
    """Run the full rule chain for ``record`` in ``year``.

    Args:
        record: A validated employee record.
        year:   Target calendar year.
        policy: Policy constants; defaults to ``PolicyConfig()``.

    Returns:
        Unrounded :class:`Entitlement` (``days`` may be NaN) with the
        diagnostics of this year's chain.
    """
    policy = policy or PolicyConfig()
    state = _ChainState()
    diagnostics: list[Diagnostic] = []

    for _name, rule in RULE_CHAIN:
        state.days, found = rule(state, record, year, policy)
        diagnostics.extend(found)

    return Entitlement(
        days=state.days,
        carried=state.carried,
        diagnostics=tuple(diagnostics),
    )
