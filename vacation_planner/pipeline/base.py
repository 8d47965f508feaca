"""
Abstract base class for pipeline stages.

Every stage follows the same contract:
  1. Receive ``AppConfig`` at construction.
  2. ``run(**kwargs)`` is the sole public API.
  3. ``run()`` creates a ``RunMetadata`` record, calls ``_execute()``,
     and returns the run record with its final status.
  4. ``_execute()`` is the stage-specific implementation (overridden by subclasses).

Status transitions (started → success/failed) are handled here; stages never
swallow exceptions — a failure is logged, recorded on the run and re-raised.

Usage::

    class MyStage(PipelineStage):
        stage_name = "vacation"

        def _execute(self, run: RunMetadata, **kwargs) -> int:
            # Do work, return row count
            return 42

    stage = MyStage(config=app_config)
    result = stage.run(year="2017", input_file="roster.csv")
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from uuid import uuid4

from vacation_planner.config import AppConfig
from vacation_planner.models.meta import RunMetadata
from vacation_planner.utils.time_utils import utcnow

logger = logging.getLogger(__name__)


class PipelineStage(ABC):
    """Abstract base for pipeline stages.

    Subclasses must:
      1. Set ``stage_name`` class variable.
      2. Implement ``_execute(run, **kwargs) -> int``.

    Attributes:
        stage_name: String identifier matching a valid ``RunMetadata.pipeline_stage``.
        config: The application configuration for this run.
        last_run: The ``RunMetadata`` of the most recent ``run()`` call,
            including failed ones.
    """

    stage_name: str  # Override in subclass

    def __init__(self, config: AppConfig) -> None:
        self.config = config
        self.last_run: RunMetadata | None = None

    def run(self, **kwargs) -> RunMetadata:
        """Execute this pipeline stage.

        Args:
            **kwargs: Stage-specific keyword arguments passed to ``_execute()``.

        Returns:
            ``RunMetadata`` with ``status='success'``, ``rows_processed``
            and ``finished_at`` set.

        Raises:
            Exception: Re-raises any exception from ``_execute()`` after
                recording ``status='failed'`` on ``self.last_run``.
        """
        run = RunMetadata(
            run_slug=str(uuid4()),
            pipeline_stage=self.stage_name,
            config_snapshot=self.config.model_dump(),
            started_at=utcnow(),
        )
        self.last_run = run
        logger.debug(
            "Stage [%s] starting | run_slug=%s", self.stage_name, run.run_slug
        )

        try:
            rows = self._execute(run=run, **kwargs)
        except Exception as exc:
            run.status = "failed"
            run.error_message = str(exc)
            run.finished_at = utcnow()
            logger.debug(
                "Stage [%s] failed | run_slug=%s", self.stage_name, run.run_slug
            )
            raise

        run.status = "success"
        run.rows_processed = rows
        run.finished_at = utcnow()
        logger.info(
            "Stage [%s] completed | rows=%d | run_slug=%s",
            self.stage_name, rows, run.run_slug,
        )
        return run

    @abstractmethod
    def _execute(self, run: RunMetadata, **kwargs) -> int:
        """Stage-specific implementation.

        Args:
            run: The in-progress ``RunMetadata`` record (mutable).
            **kwargs: Stage-specific parameters.

        Returns:
            Integer count of rows/records processed.
        """
        ...
