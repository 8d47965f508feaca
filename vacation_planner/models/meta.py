"""
Run metadata — the audit record of one pipeline execution.

Every run records a complete ``config_snapshot`` (full AppConfig as a dict)
so a result file can be reproduced by restoring that config and re-running
against the same roster.

``RunMetadata`` is NOT frozen — its ``status``, counters, ``error_message``
and ``finished_at`` fields are updated as the stage executes.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

VALID_PIPELINE_STAGES = frozenset({"vacation"})
VALID_RUN_STATUSES = frozenset({"started", "success", "failed"})


class RunMetadata(BaseModel):
    """Pipeline execution audit record.

    Attributes:
        run_slug: UUID4 string uniquely identifying this run.
        pipeline_stage: Which stage produced this run record.
        status: Current execution status.
        config_snapshot: Full ``AppConfig.model_dump()`` at run start time.
        year: Target year of the computation, once parsed.
        input_path: Roster file that was read.
        output_path: Result file that was written.
        rows_processed: Number of roster rows turned into results.
        invalid_rows: Rows rejected by the validator.
        null_results: Results written with empty ``days`` (invalid or NaN).
        error_message: Error description if ``status == "failed"``.
        started_at: UTC datetime when the run began.
        finished_at: UTC datetime when the run completed or failed.
    """

    model_config = ConfigDict(frozen=False)

    run_slug: str
    pipeline_stage: str
    status: str = "started"
    config_snapshot: dict[str, Any]
    year: Optional[int] = None
    input_path: Optional[str] = None
    output_path: Optional[str] = None
    rows_processed: int = 0
    invalid_rows: int = 0
    null_results: int = 0
    error_message: Optional[str] = None
    started_at: datetime
    finished_at: Optional[datetime] = None

    @field_validator("pipeline_stage")
    @classmethod
    def validate_pipeline_stage(cls, v: str) -> str:
        if v not in VALID_PIPELINE_STAGES:
            raise ValueError(
                f"Unknown pipeline_stage '{v}'. Must be one of {sorted(VALID_PIPELINE_STAGES)}."
            )
        return v

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: str) -> str:
        if v not in VALID_RUN_STATUSES:
            raise ValueError(
                f"Unknown status '{v}'. Must be one of {sorted(VALID_RUN_STATUSES)}."
            )
        return v
