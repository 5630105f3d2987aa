"""Run logger for recording engine stage results to JSON files."""

import dataclasses
import uuid
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from launchfeed.data import ResultPage


class StageRecord(BaseModel):
    """Record of a single engine stage execution."""

    stage: str
    component: str
    input_count: int = 0
    output_count: int = 0
    timestamp: str = ""
    duration_seconds: float = 0.0


class RunRecord(BaseModel):
    """Record of a complete query run."""

    run_id: str
    run_type: str
    params: dict[str, Any]
    started_at: str
    completed_at: str | None = None
    stages: list[StageRecord] = []
    cache_hit: bool = False
    total: int | None = None
    returned_count: int = 0
    has_more: bool | None = None


def _serialize(obj: Any) -> Any:
    """Serialize an object to JSON-compatible format.

    Handles dataclasses, Pydantic models, enums, lists, dicts, and primitives.
    """
    if obj is None:
        return None
    if isinstance(obj, Enum):
        return obj.value
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: _serialize(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    if isinstance(obj, list | tuple):
        return [_serialize(item) for item in obj]
    if isinstance(obj, dict):
        return {k: _serialize(v) for k, v in obj.items()}
    if isinstance(obj, Path):
        return str(obj)
    return obj


class RunLogger:
    """Writes one JSON trace file per engine query.

    Each query gets its own ``RunRecord`` handle so concurrent queries do not
    share state. When ``enabled=False``, all methods are no-ops.

    Args:
        log_dir: Directory to write JSON log files.
        enabled: If False, all methods become no-ops.
    """

    def __init__(self, log_dir: Path, *, enabled: bool = True) -> None:
        self._log_dir = log_dir
        self._enabled = enabled
        self._last_log_path: Path | None = None

    @property
    def enabled(self) -> bool:
        """Whether logging is active."""
        return self._enabled

    @property
    def last_log_path(self) -> Path | None:
        """Path to the last written log file, or None."""
        return self._last_log_path

    def start_run(self, run_type: str, params: Any) -> RunRecord | None:
        """Open a new run record.

        Args:
            run_type: Kind of run (e.g. "query", "years").
            params: The run input, serialized into the record.

        Returns:
            The record to pass to ``log_stage``/``finish_run``, or None when
            logging is disabled.
        """
        if not self._enabled:
            return None

        serialized = _serialize(params)
        return RunRecord(
            run_id=str(uuid.uuid4()),
            run_type=run_type,
            params=serialized if isinstance(serialized, dict) else {"value": serialized},
            started_at=datetime.now(tz=UTC).isoformat(),
        )

    def log_stage(
        self,
        record: RunRecord | None,
        stage: str,
        component: str,
        input_count: int,
        output_count: int,
        duration_seconds: float,
    ) -> None:
        """Append a stage record to a run.

        Args:
            record: Handle returned by ``start_run``.
            stage: Stage name (e.g. "normalize", "filter").
            component: Function or class that ran the stage.
            input_count: Records entering the stage.
            output_count: Records leaving the stage.
            duration_seconds: Wall-clock time for this stage.
        """
        if not self._enabled or record is None:
            return

        record.stages.append(
            StageRecord(
                stage=stage,
                component=component,
                input_count=input_count,
                output_count=output_count,
                timestamp=datetime.now(tz=UTC).isoformat(),
                duration_seconds=round(duration_seconds, 4),
            )
        )

    def finish_run(
        self,
        record: RunRecord | None,
        page: ResultPage | None,
        *,
        cache_hit: bool = False,
    ) -> Path | None:
        """Write the run record to a JSON file.

        Args:
            record: Handle returned by ``start_run``.
            page: The page produced by the run, if any.
            cache_hit: Whether the run was served from a cached view.

        Returns:
            Path to the written JSON file, or None if logging is disabled.
        """
        if not self._enabled or record is None:
            return None

        record.completed_at = datetime.now(tz=UTC).isoformat()
        record.cache_hit = cache_hit
        if page is not None:
            record.total = page.total
            record.returned_count = len(page.launches)
            record.has_more = page.has_more

        self._log_dir.mkdir(parents=True, exist_ok=True)

        # run_2026-02-12T14-30-00_1a2b3c4d.json (colons -> dashes)
        ts = record.started_at.replace(":", "-")
        ts = ts.split(".")[0].split("+")[0]
        filepath = self._log_dir / f"run_{ts}_{record.run_id[:8]}.json"

        filepath.write_text(record.model_dump_json(indent=2))
        self._last_log_path = filepath
        return filepath
