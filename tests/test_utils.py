"""Tests for vacation_planner/utils — date parsing and logging setup."""

from __future__ import annotations

import json
import logging
from datetime import date

import pytest

from vacation_planner.config import LoggingConfig
from vacation_planner.utils.logging import _JsonFormatter, _TextFormatter, configure_logging
from vacation_planner.utils.time_utils import month_index, parse_roster_date, utcnow


# ── time_utils ────────────────────────────────────────────────────────────────


def test_parse_roster_date_valid():
    assert parse_roster_date("29.02.2016") == date(2016, 2, 29)


@pytest.mark.parametrize(
    "value", ["29.02.2017", "01.13.2001", "01.01.01", "01/01/2001", " 01.01.2001", "01.01.2001\n"]
)
def test_parse_roster_date_rejects(value):
    assert parse_roster_date(value) is None


def test_month_index():
    assert month_index(date(2017, 1, 31)) == 0
    assert month_index(date(2017, 12, 1)) == 11


def test_utcnow_is_aware():
    assert utcnow().tzinfo is not None


# ── logging ───────────────────────────────────────────────────────────────────


def test_json_formatter_includes_extras():
    record = logging.makeLogRecord({
        "name": "vacation_planner.pipeline.vacation",
        "levelno": logging.WARNING,
        "levelname": "WARNING",
        "msg": "%s",
        "args": ("Hans did not work in 2018",),
        "rule": "newcomer",
    })
    payload = json.loads(_JsonFormatter().format(record))

    assert payload["level"] == "WARNING"
    assert payload["msg"] == "Hans did not work in 2018"
    assert payload["rule"] == "newcomer"
    assert "args" not in payload


def _diagnostic_record(**extra) -> logging.LogRecord:
    return logging.makeLogRecord({
        "name": "vacation_planner.pipeline.vacation",
        "levelno": logging.WARNING,
        "levelname": "WARNING",
        "msg": "Invalid special contract for Otto",
        **extra,
    })


def test_text_formatter_appends_row_context():
    line = _TextFormatter().format(_diagnostic_record(rule="contract", employee="Otto"))
    assert line.endswith(
        "[WARNING] vacation_planner.pipeline.vacation: "
        "Invalid special contract for Otto (rule=contract, employee=Otto)"
    )


def test_text_formatter_skips_empty_context():
    assert _TextFormatter().format(_diagnostic_record()).endswith("for Otto")
    line = _TextFormatter().format(_diagnostic_record(rule="validator", employee=""))
    assert line.endswith("for Otto (rule=validator)")


def test_json_formatter_row_context():
    payload = json.loads(
        _JsonFormatter().format(_diagnostic_record(rule="contract", employee="Otto"))
    )
    assert payload["employee"] == "Otto"
    assert set(payload) == {"ts", "level", "logger", "msg", "rule", "employee"}


@pytest.fixture
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_configure_logging_with_file(tmp_path, _restore_root_logger):
    log_file = tmp_path / "logs" / "planner.log"
    configure_logging(LoggingConfig(level="WARNING", log_file=str(log_file), json_format=True))

    logging.getLogger("vacation_planner.test").warning("hello")
    for handler in logging.getLogger().handlers:
        handler.flush()

    line = log_file.read_text(encoding="utf-8").strip().splitlines()[-1]
    assert json.loads(line)["msg"] == "hello"
    assert logging.getLogger().level == logging.WARNING


def test_configure_logging_text_format_shows_row_context(tmp_path, _restore_root_logger):
    log_file = tmp_path / "planner.log"
    configure_logging(LoggingConfig(level="INFO", log_file=str(log_file)))

    logging.getLogger("vacation_planner.test").warning(
        "%s", "Lena did not work in 2000", extra={"rule": "newcomer", "employee": "Lena"}
    )
    for handler in logging.getLogger().handlers:
        handler.flush()

    line = log_file.read_text(encoding="utf-8").strip().splitlines()[-1]
    assert line.endswith("Lena did not work in 2000 (rule=newcomer, employee=Lena)")
