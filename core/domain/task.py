from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from core.domain.dates import coerce_date, is_valid_range
from core.domain.enums import TaskType
from core.domain.identifiers import generate_id


def _unique_ids(values: Iterable[str] | None) -> tuple[str, ...]:
    seen: set[str] = set()
    out: list[str] = []
    for value in values or ():
        key = str(value)
        if key in seen:
            continue
        seen.add(key)
        out.append(key)
    return tuple(out)


@dataclass(frozen=True)
class Task:
    id: str
    name: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    dependencies: tuple[str, ...] = ()
    type: TaskType = TaskType.TASK
    assignee: Optional[str] = None
    project_id: Optional[str] = None
    progress: float = 0.0

    def __post_init__(self) -> None:
        # frozen: normalize through object.__setattr__
        object.__setattr__(self, "start_date", coerce_date(self.start_date))
        object.__setattr__(self, "end_date", coerce_date(self.end_date))
        object.__setattr__(self, "dependencies", _unique_ids(self.dependencies))
        object.__setattr__(self, "type", TaskType(self.type))

    @property
    def is_milestone(self) -> bool:
        return self.type == TaskType.MILESTONE

    @property
    def has_valid_dates(self) -> bool:
        return is_valid_range(self.start_date, self.end_date)

    @property
    def duration_days(self) -> int:
        """Whole days between start and end; 0 for milestones and for unusable dates."""
        if self.type == TaskType.MILESTONE:
            return 0
        if self.type in (TaskType.TASK, TaskType.GROUP):
            if not self.has_valid_dates:
                return 0
            return (self.end_date - self.start_date).days
        raise ValueError(f"Unsupported task type: {self.type!r}")

    @staticmethod
    def create(name: str, **extra) -> "Task":
        return Task(id=generate_id(), name=name, **extra)


__all__ = ["Task"]
