from __future__ import annotations

import logging
from collections import defaultdict
from typing import Collection, Iterable, List, Mapping

from core.domain import ConflictSeverity, Project, ResourcePoolItem
from core.services.resource_planning.load import calculate_resource_load
from core.services.resource_planning.models import (
    ConflictingProject,
    ResourceConflict,
    ResourceLoad,
    TimeBucket,
)
from core.services.resource_planning.units import DEFAULT_DAYS_PER_MONTH

logger = logging.getLogger(__name__)

_EPSILON = 1e-9


def detect_resource_conflicts(
    resource_loads: Iterable[ResourceLoad],
    *,
    critical_assignments: Mapping[str, Collection[str]] | None = None,
) -> List[ResourceConflict]:
    """
    One conflict per (resource, bucket) whose total demand exceeds capacity,
    sorted by overallocation descending. Near-capacity buckets are not conflicts.

    critical_assignments maps resource id -> project ids that have a critical-path
    task assigned to that resource; such conflicts are flagged CRITICAL.
    """
    critical_assignments = critical_assignments or {}
    conflicts: List[ResourceConflict] = []

    for load in resource_loads:
        critical_projects = set(critical_assignments.get(load.resource_id, ()))
        for label, bucket in load.allocations.items():
            total = bucket.total
            if total <= load.capacity + _EPSILON:
                continue

            entries = tuple(
                ConflictingProject(
                    project_id=item.project_id,
                    project_name=item.project_name,
                    allocation=item.amount,
                )
                for item in bucket.projects
            )
            is_critical = any(item.project_id in critical_projects for item in bucket.projects)
            conflicts.append(
                ResourceConflict(
                    resource_id=load.resource_id,
                    resource_name=load.resource_name,
                    period=label,
                    period_start=bucket.period_start,
                    period_end=bucket.period_end,
                    capacity=load.capacity,
                    allocated=total,
                    overallocation=total - load.capacity,
                    conflicting_projects=entries,
                    severity=ConflictSeverity.CRITICAL if is_critical else ConflictSeverity.NORMAL,
                )
            )

    conflicts.sort(
        key=lambda c: (
            -c.overallocation,
            c.period_start,
            c.resource_name.lower(),
        )
    )
    if conflicts:
        logger.info("Detected %s resource conflicts", len(conflicts))
    return conflicts


def critical_assignments_by_resource(
    projects: Iterable[Project],
    critical_task_ids: Collection[str],
) -> dict[str, frozenset[str]]:
    """resource id -> ids of projects with a critical task assigned to that resource."""
    critical = set(critical_task_ids)
    out: dict[str, set[str]] = defaultdict(set)
    for project in projects:
        for task in project.tasks:
            if task.assignee and task.id in critical:
                out[task.assignee].add(project.id)
    return {resource_id: frozenset(ids) for resource_id, ids in out.items()}


def check_project_resource_conflicts(
    candidate: Project,
    existing_projects: Iterable[Project],
    resources: Iterable[ResourcePoolItem],
    buckets: Iterable[TimeBucket],
    *,
    days_per_month: int = DEFAULT_DAYS_PER_MONTH,
) -> List[ResourceConflict]:
    """Conflicts the portfolio would have if `candidate` were added. Inputs are not modified."""
    projects = [p for p in existing_projects if p.id != candidate.id]
    projects.append(candidate)
    report = calculate_resource_load(projects, resources, buckets, days_per_month=days_per_month)
    return detect_resource_conflicts(report)


__all__ = [
    "detect_resource_conflicts",
    "critical_assignments_by_resource",
    "check_project_resource_conflicts",
]
