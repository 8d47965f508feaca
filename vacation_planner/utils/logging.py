"""
Logging setup for the vacation planner.

``configure_logging(config)`` is called once by the CLI, before the roster
is read. Library modules only ever use ``logging.getLogger(__name__)``.

Per-row warnings are logged by the orchestrator with two extras, ``rule``
(which check fired) and ``employee`` (the row's name). Both formatters know
about them:

Text::

    2026-02-24T15:00:00Z [WARNING] vacation_planner.pipeline.vacation: Invalid special contract for Otto (rule=contract, employee=Otto)

JSON lines (``json_format = true`` in config/default.toml [logging])::

    {"ts": "2026-02-24T15:00:00Z", "level": "WARNING", "logger": "...", "msg": "...", "rule": "contract", "employee": "Otto"}
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vacation_planner.config import LoggingConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# Extras attached to per-row diagnostics, in display order.
ROW_CONTEXT_FIELDS = ("rule", "employee")


def row_context(record: logging.LogRecord) -> dict[str, str]:
    """Non-empty row-context extras carried by ``record``."""
    context = {}
    for field in ROW_CONTEXT_FIELDS:
        value = getattr(record, field, None)
        if value not in (None, ""):
            context[field] = str(value)
    return context


class _TextFormatter(logging.Formatter):
    """``LOG_FORMAT`` plus a ``(rule=..., employee=...)`` suffix on row warnings."""

    def __init__(self) -> None:
        super().__init__(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        context = row_context(record)
        if context:
            line += " (" + ", ".join(f"{k}={v}" for k, v in context.items()) + ")"
        return line


class _JsonFormatter(logging.Formatter):
    """One JSON object per line: ``ts``, ``level``, ``logger``, ``msg``, row context."""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: dict = {
            "ts": created.strftime(LOG_DATE_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            **row_context(record),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def _handler(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def configure_logging(config: "LoggingConfig") -> None:
    """Configure the root logger from the ``[logging]`` config section.

    Always logs to stdout; also appends to ``config.log_file`` (parent
    directories created) when one is set.
    """
    level = logging.getLevelName(config.level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    formatter = _JsonFormatter() if config.json_format else _TextFormatter()

    handlers = [_handler(logging.StreamHandler(sys.stdout), level, formatter)]
    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            _handler(logging.FileHandler(log_path, encoding="utf-8"), level, formatter)
        )

    logging.basicConfig(level=level, handlers=handlers, force=True)
