"""
Vacation Planner — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Validate inputs.
  4. Execute action.
  5. Report result to stdout.

Install and run::

    pip install -e .
    vacation-planner --help
    vacation-planner vacation 2017 data/employees.csv
    vacation-planner vac 2017 data/employees.csv out/vacation.csv
    vacation-planner validate-config --full
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

from vacation_planner import __version__

app = typer.Typer(
    name="vacation-planner",
    help="Employees information system — vacation day entitlements.",
    add_completion=False,
    no_args_is_help=True,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from vacation_planner.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from vacation_planner.utils.logging import configure_logging
    configure_logging(config.logging)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Employees information system."""


# ── Commands ──────────────────────────────────────────────────────────────────

def vacation(
    year: str = typer.Argument(..., help="Target year, e.g. 2017."),
    input_file: str = typer.Argument(..., help="Employee roster CSV."),
    output_file: Optional[str] = typer.Argument(
        None,
        help="Result CSV. Defaults to <input name>_vacation_<year>.csv in the current directory.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Calculate vacation days for a given year.

    \b
    Roster columns are matched by name, case-insensitively:
      *name*      → employee name (required)
      *birth*     → date of birth, DD.MM.YYYY (required)
      *start*     → start date, DD.MM.YYYY (required)
      *contract*  → special contract, e.g. "30 vacation days" (optional)

    Rows that cannot be computed are written with an empty ``days`` cell.
    """
    from vacation_planner.pipeline.vacation import InvalidYearError, calculate

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    typer.echo(f"Calculating vacation days for {year} from: {input_file}")

    try:
        run = calculate(year, input_file, output_file, config=config)
    except InvalidYearError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Failed to calculate vacation days: {exc}", err=True)
        raise typer.Exit(code=1)

    if run.invalid_rows or run.null_results:
        typer.echo(
            f"  {run.invalid_rows} invalid row(s), "
            f"{run.null_results} row(s) without a day count."
        )
    typer.echo(f"[OK] Wrote {run.rows_processed} row(s) to {run.output_path}")


app.command("vacation")(vacation)
app.command("vac", hidden=True)(vacation)


@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)
    policy = config.policy

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Minimum vacation days: {policy.min_vacation_days}")
    typer.echo(
        f"  Age bonus:             +1 day from age {policy.min_age_for_bonus}, "
        f"every {policy.bonus_period_years} years"
    )
    typer.echo(f"  Allowed start days:    {', '.join(str(d) for d in policy.allowed_start_days)}")
    typer.echo(f"  Log level:             {config.logging.level}")
    typer.echo(f"  Debug mode:            {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


if __name__ == "__main__":
    app()
