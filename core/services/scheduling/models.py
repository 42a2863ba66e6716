from __future__ import annotations

from dataclasses import dataclass, field

from core.diagnostics import EngineWarning
from core.domain import Task


@dataclass(frozen=True)
class CPMTaskInfo:
    """Theoretical schedule of one task, as day offsets from the project start (day 0)."""

    task: Task
    duration_days: int
    earliest_start: int
    earliest_finish: int
    latest_start: int
    latest_finish: int
    total_float_days: int
    is_critical: bool


@dataclass(frozen=True)
class CriticalPathResult:
    critical_path: tuple[str, ...]
    slack: dict[str, int]
    tasks: dict[str, CPMTaskInfo] = field(default_factory=dict)
    project_duration: int = 0
    warnings: tuple[EngineWarning, ...] = ()

    @property
    def critical_task_ids(self) -> frozenset[str]:
        return frozenset(self.critical_path)

    def is_critical(self, task_id: str) -> bool:
        return self.slack.get(task_id) == 0


__all__ = ["CPMTaskInfo", "CriticalPathResult"]
