from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Sequence

from core.diagnostics import WarningCollector
from core.domain import Granularity, Project, ProjectStatus, ResourcePoolItem
from core.services.resource_planning.buckets import buckets_for_range
from core.services.resource_planning.models import (
    BucketAllocation,
    ProjectAllocation,
    ResourceAvailability,
    ResourceLoad,
    ResourceLoadReport,
    TimeBucket,
)
from core.services.resource_planning.units import DEFAULT_DAYS_PER_MONTH, requirement_end

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Demand:
    project: Project
    amount: float
    start: date
    end: date  # exclusive

    def overlaps(self, bucket: TimeBucket) -> bool:
        # a zero-length window occupies no day
        if self.end <= self.start:
            return False
        return self.start <= bucket.period_end and self.end > bucket.period_start


def _contributes(project: Project) -> bool:
    if project.status in (ProjectStatus.ACTIVE, ProjectStatus.PLANNING):
        return True
    if project.status in (ProjectStatus.COMPLETED, ProjectStatus.ON_HOLD):
        return False
    raise ValueError(f"Unsupported project status: {project.status!r}")


def collect_demands(
    projects: Iterable[Project],
    resources: Sequence[ResourcePoolItem],
    collector: WarningCollector,
    days_per_month: int = DEFAULT_DAYS_PER_MONTH,
) -> Dict[str, List[_Demand]]:
    """Requirement windows per resource id, for projects that contribute demand."""
    known = {resource.id for resource in resources}
    demands: Dict[str, List[_Demand]] = {resource.id: [] for resource in resources}

    for project in projects:
        if not _contributes(project):
            continue
        if not project.has_valid_dates:
            collector.invalid_dates(
                "PROJECT_DATES_INVALID",
                f"Project '{project.name or project.id}' has missing or inverted dates; excluded from resource load.",
                project.id,
            )
            continue

        seen_resources: set[str] = set()
        for requirement in project.resource_requirements:
            resource_id = requirement.resource_id
            if resource_id not in known:
                collector.missing_reference(
                    "RESOURCE_MISSING",
                    f"Project '{project.name or project.id}' requires unknown resource '{resource_id}'; requirement ignored.",
                    project.id,
                )
                continue
            if resource_id in seen_resources:
                collector.invalid_value(
                    "REQUIREMENT_DUPLICATE",
                    f"Project '{project.name or project.id}' lists resource '{resource_id}' more than once; using the first entry.",
                    project.id,
                )
                continue
            seen_resources.add(resource_id)

            count = float(requirement.count or 0.0)
            duration = float(requirement.duration or 0.0)
            if count < 0 or duration < 0:
                collector.invalid_value(
                    "REQUIREMENT_NEGATIVE",
                    f"Project '{project.name or project.id}' has a negative requirement for '{resource_id}'; clamped to 0.",
                    project.id,
                )
            count = max(0.0, count)
            duration = max(0.0, duration)

            end = requirement_end(project.start_date, duration, requirement.unit, days_per_month)
            demands[resource_id].append(
                _Demand(project=project, amount=count, start=project.start_date, end=end)
            )
    return demands


def _resource_load(
    resource: ResourcePoolItem,
    demands: Sequence[_Demand],
    buckets: Sequence[TimeBucket],
) -> ResourceLoad:
    allocations: Dict[str, BucketAllocation] = {}
    for bucket in buckets:
        active = 0.0
        planning = 0.0
        contributing: list[ProjectAllocation] = []
        for demand in demands:
            if not demand.overlaps(bucket):
                continue
            status = demand.project.status
            if status == ProjectStatus.ACTIVE:
                active += demand.amount
            elif status == ProjectStatus.PLANNING:
                planning += demand.amount
            else:
                continue
            contributing.append(
                ProjectAllocation(
                    project_id=demand.project.id,
                    project_name=demand.project.name,
                    amount=demand.amount,
                    status=status,
                )
            )
        allocations[bucket.label] = BucketAllocation(
            label=bucket.label,
            period_start=bucket.period_start,
            period_end=bucket.period_end,
            active=active,
            planning=planning,
            projects=tuple(contributing),
        )
    return ResourceLoad(
        resource_id=resource.id,
        resource_name=resource.name,
        capacity=resource.capacity,
        allocations=allocations,
    )


def calculate_resource_load(
    projects: Iterable[Project],
    resources: Iterable[ResourcePoolItem],
    buckets: Iterable[TimeBucket],
    *,
    days_per_month: int = DEFAULT_DAYS_PER_MONTH,
    max_workers: int = 1,
) -> ResourceLoadReport:
    """
    Demand per resource and bucket, split into active and planning demand.
    Each resource is an independent unit of work over read-only inputs; with
    max_workers > 1 they run on a thread pool. Output follows the resource order.
    """
    project_list = list(projects)
    resource_list = list(resources)
    bucket_list = list(buckets)
    collector = WarningCollector(logger)

    for resource in resource_list:
        if float(resource.total_quantity or 0.0) < 0:
            collector.invalid_value(
                "RESOURCE_CAPACITY_NEGATIVE",
                f"Resource '{resource.name}' has negative capacity; clamped to 0.",
                resource.id,
            )

    demands = collect_demands(project_list, resource_list, collector, days_per_month)

    def _work(resource: ResourcePoolItem) -> ResourceLoad:
        return _resource_load(resource, demands[resource.id], bucket_list)

    if max_workers > 1 and len(resource_list) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            loads = list(pool.map(_work, resource_list))
    else:
        loads = [_work(resource) for resource in resource_list]

    logger.debug(
        "Resource load computed for %s resources x %s buckets (%s projects)",
        len(resource_list),
        len(bucket_list),
        len(project_list),
    )
    return ResourceLoadReport(loads=tuple(loads), warnings=collector.as_tuple())


def get_resource_availability(
    resource_id: str,
    start: date,
    end: date,
    projects: Iterable[Project],
    resources: Iterable[ResourcePoolItem],
    granularity: Granularity | str = Granularity.MONTH,
    *,
    days_per_month: int = DEFAULT_DAYS_PER_MONTH,
) -> List[ResourceAvailability]:
    """Remaining capacity of one resource per period between start and end."""
    resource = next((r for r in resources if r.id == resource_id), None)
    if resource is None:
        return []

    buckets = buckets_for_range(start, end, granularity)
    report = calculate_resource_load(projects, [resource], buckets, days_per_month=days_per_month)
    load = report.loads[0]
    return [
        ResourceAvailability(
            period=bucket.label,
            period_start=bucket.period_start,
            capacity=load.capacity,
            allocated=load.allocations[bucket.label].total,
            available=load.capacity - load.allocations[bucket.label].total,
        )
        for bucket in buckets
    ]


__all__ = ["calculate_resource_load", "collect_demands", "get_resource_availability"]
