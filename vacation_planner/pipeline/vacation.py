"""
VacationStage — compute vacation day entitlements for a roster and year.

Processing steps:
  1. Parse the target year; an invalid year aborts before any file I/O.
  2. Read every roster row (``ingestion.roster_csv``).
  3. Per row: parse → validate → rule engine → ``EntitlementResult``.
     Rule diagnostics are logged here, at their own level.
  4. Write all results, in roster order, as ``name,days``
     (``reporting.export``) to the given or default output path.

Rows are independent; an invalid row yields ``days=None`` and a warning,
and processing continues. Anything that escapes row processing (unreadable
file, failed write) is logged and re-raised, and no output is written.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from vacation_planner.config import AppConfig, OutputConfig, PolicyConfig
from vacation_planner.ingestion.record_parser import parse_row
from vacation_planner.ingestion.roster_csv import read_roster
from vacation_planner.models.employee import RawRow
from vacation_planner.models.entitlement import Diagnostic, EntitlementResult
from vacation_planner.models.meta import RunMetadata
from vacation_planner.pipeline.base import PipelineStage
from vacation_planner.reporting.export import export_entitlements
from vacation_planner.rules.engine import compute_days
from vacation_planner.rules.validator import invalid_row_message, is_valid

logger = logging.getLogger(__name__)

_YEAR_PATTERN = re.compile(r"[+-]?[0-9]+")


# ── Custom exceptions ─────────────────────────────────────────────────────────


class VacationPlannerError(RuntimeError):
    """Base class for errors raised by the vacation planner."""


class InvalidYearError(VacationPlannerError):
    """Raised when the target year is not an integer.

    Attributes:
        year_text: The rejected input.
    """

    def __init__(self, year_text: str) -> None:
        self.year_text = year_text
        super().__init__(f"Year is not valid: '{year_text}'")


# ── Result type ───────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class RowOutcome:
    """Outcome of processing one roster row.

    Attributes:
        result:      The ``{name, days}`` output record.
        valid:       Whether the row passed validation.
        diagnostics: Rule diagnostics for this row (empty for invalid rows).
    """

    result: EntitlementResult
    valid: bool
    diagnostics: tuple[Diagnostic, ...] = ()


# ── Pure helpers ──────────────────────────────────────────────────────────────


def parse_year(year: str | int) -> int:
    """Parse a base-10 integer year; surrounding whitespace is allowed.

    Raises:
        InvalidYearError: If ``year`` is not an integer.
    """
    if isinstance(year, int) and not isinstance(year, bool):
        return year
    text = str(year).strip()
    if not _YEAR_PATTERN.fullmatch(text):
        raise InvalidYearError(str(year))
    return int(text)


def resolve_output_path(
    input_file: str | Path,
    year: int,
    output_file: str | Path | None = None,
    output_config: OutputConfig | None = None,
) -> Path:
    """Return ``output_file`` or the default ``<stem>_vacation_<year>.csv``.

    The default lives in ``output_config.output_dir`` when set, otherwise in
    the current working directory.
    """
    if output_file:
        return Path(output_file)
    output_config = output_config or OutputConfig()
    directory = Path(output_config.output_dir) if output_config.output_dir else Path.cwd()
    stem = Path(input_file).stem
    return directory / f"{stem}_{output_config.file_suffix}_{year}.csv"


def process_row(raw_row: RawRow, year: int, policy: PolicyConfig) -> RowOutcome:
    """Parse, validate and compute one roster row. Never logs."""
    record = parse_row(raw_row)
    if not is_valid(record):
        return RowOutcome(
            result=EntitlementResult(name=record.name, days=None),
            valid=False,
            diagnostics=(Diagnostic("validator", invalid_row_message(record)),),
        )

    entitlement = compute_days(record, year, policy)
    return RowOutcome(
        result=EntitlementResult(name=record.name, days=entitlement.rounded_days()),
        valid=True,
        diagnostics=entitlement.diagnostics,
    )


def compute_entitlements(
    rows: Iterable[RawRow],
    year: int,
    policy: PolicyConfig | None = None,
) -> list[RowOutcome]:
    """Process ``rows`` in order; the I/O-free core of :class:`VacationStage`."""
    policy = policy or PolicyConfig()
    return [process_row(row, year, policy) for row in rows]


def _log_diagnostics(outcome: RowOutcome) -> None:
    for diag in outcome.diagnostics:
        logger.log(
            diag.level,
            "%s",
            diag.message,
            extra={"rule": diag.rule, "employee": outcome.result.name},
        )


# ── Stage ─────────────────────────────────────────────────────────────────────


class VacationStage(PipelineStage):
    """Compute entitlements for a roster file and write the result CSV."""

    stage_name = "vacation"

    def _execute(
        self,
        run: RunMetadata,
        year: str | int = "",
        input_file: str | Path = "",
        output_file: str | Path | None = None,
        **kwargs,
    ) -> int:
        """Run the vacation computation.

        Args:
            run:         In-progress run record; counters and paths are filled in.
            year:        Target year as given on the command line.
            input_file:  Roster CSV path.
            output_file: Result CSV path; defaults to ``resolve_output_path()``.

        Returns:
            Number of result rows written.

        Raises:
            InvalidYearError: Before any I/O when ``year`` is not an integer.
            Exception: Any read/write failure, after logging it.
        """
        try:
            target_year = parse_year(year)
        except InvalidYearError:
            logger.error("Year is not valid")
            raise
        run.year = target_year
        run.input_path = str(input_file)

        try:
            rows = read_roster(Path(input_file))
            outcomes = compute_entitlements(rows, target_year, self.config.policy)
            for outcome in outcomes:
                _log_diagnostics(outcome)

            out_path = resolve_output_path(
                input_file, target_year, output_file, self.config.output
            )
            export_entitlements([o.result for o in outcomes], out_path)
        except Exception as exc:
            logger.error("Failed to calculate vacation days. Error: %s", exc)
            raise

        run.output_path = str(out_path)
        run.invalid_rows = sum(1 for o in outcomes if not o.valid)
        run.null_results = sum(1 for o in outcomes if o.result.days is None)
        logger.info(
            "Computed %d entitlement(s) for %d → %s (invalid rows: %d, empty results: %d)",
            len(outcomes), target_year, out_path, run.invalid_rows, run.null_results,
        )
        return len(outcomes)


def calculate(
    year: str | int,
    input_file: str | Path,
    output_file: Optional[str | Path] = None,
    config: AppConfig | None = None,
) -> RunMetadata:
    """Compute vacation days for ``year`` from ``input_file``.

    Convenience wrapper around ``VacationStage(config).run(...)``.
    """
    stage = VacationStage(config=config or AppConfig())
    return stage.run(year=year, input_file=input_file, output_file=output_file)
