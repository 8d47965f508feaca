"""Tests for the pipeline stage abstract base."""

from __future__ import annotations

import pytest

from vacation_planner.config import AppConfig
from vacation_planner.models.meta import RunMetadata
from vacation_planner.pipeline.base import PipelineStage


class _CountingStage(PipelineStage):
    stage_name = "vacation"

    def _execute(self, run: RunMetadata, **kwargs) -> int:
        if kwargs.get("fail"):
            raise OSError("cannot write")
        return kwargs.get("rows", 0)


class TestPipelineStageABC:
    def test_cannot_instantiate_base_directly(self):
        with pytest.raises(TypeError):
            PipelineStage(config=None)  # type: ignore

    def test_concrete_subclass_without_execute_raises(self):
        class IncompleteStage(PipelineStage):
            stage_name = "vacation"

        with pytest.raises(TypeError):
            IncompleteStage(config=None)  # type: ignore


class TestRun:
    def test_success_run_record(self):
        stage = _CountingStage(config=AppConfig())
        run = stage.run(rows=5)

        assert run.status == "success"
        assert run.rows_processed == 5
        assert run.pipeline_stage == "vacation"
        assert run.finished_at is not None
        assert run.finished_at >= run.started_at
        assert run.config_snapshot["policy"]["min_vacation_days"] == 26
        assert stage.last_run is run

    def test_each_run_gets_new_slug(self):
        stage = _CountingStage(config=AppConfig())
        assert stage.run().run_slug != stage.run().run_slug

    def test_failure_recorded_and_reraised(self):
        stage = _CountingStage(config=AppConfig())
        with pytest.raises(OSError, match="cannot write"):
            stage.run(fail=True)

        assert stage.last_run.status == "failed"
        assert stage.last_run.error_message == "cannot write"
        assert stage.last_run.finished_at is not None
