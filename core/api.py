"""Pure entry points used by the dependency editor, network diagram, heatmap and conflict panel."""

from __future__ import annotations

from datetime import date
from typing import Collection, Dict, Iterable, List, Mapping, Optional

from core.domain import Granularity, Project, ResourcePoolItem, Task
from core.services.resource_planning import (
    ResourceConflict,
    ResourceLoad,
    ResourceLoadReport,
    TimeBucket,
)
from core.services.resource_planning import calculate_resource_load as _calculate_resource_load
from core.services.resource_planning import detect_resource_conflicts as _detect_resource_conflicts
from core.services.resource_planning import generate_time_buckets as _generate_time_buckets
from core.services.resource_planning.units import DEFAULT_DAYS_PER_MONTH
from core.services.scheduling import CriticalPathResult, SchedulingEngine

_ENGINE = SchedulingEngine()


def compute_critical_path(tasks: Iterable[Task]) -> CriticalPathResult:
    return _ENGINE.compute_critical_path(tasks)


def detect_circular_dependency(tasks: Iterable[Task], from_task_id: str, to_task_id: str) -> bool:
    return _ENGINE.detect_circular_dependency(tasks, from_task_id, to_task_id)


def assign_levels(tasks: Iterable[Task]) -> Dict[str, int]:
    return _ENGINE.assign_levels(tasks)


def generate_time_buckets(
    projects: Iterable[Project],
    count: int = 12,
    granularity: Granularity | str = Granularity.MONTH,
    *,
    today: Optional[date] = None,
    days_per_month: int = DEFAULT_DAYS_PER_MONTH,
) -> tuple[TimeBucket, ...]:
    return _generate_time_buckets(projects, count, granularity, today=today, days_per_month=days_per_month)


def calculate_resource_load(
    projects: Iterable[Project],
    resources: Iterable[ResourcePoolItem],
    buckets: Iterable[TimeBucket],
    *,
    days_per_month: int = DEFAULT_DAYS_PER_MONTH,
) -> ResourceLoadReport:
    return _calculate_resource_load(projects, resources, buckets, days_per_month=days_per_month)


def detect_resource_conflicts(
    resource_loads: Iterable[ResourceLoad],
    *,
    critical_assignments: Mapping[str, Collection[str]] | None = None,
) -> List[ResourceConflict]:
    return _detect_resource_conflicts(resource_loads, critical_assignments=critical_assignments)


__all__ = [
    "compute_critical_path",
    "detect_circular_dependency",
    "assign_levels",
    "generate_time_buckets",
    "calculate_resource_load",
    "detect_resource_conflicts",
]
