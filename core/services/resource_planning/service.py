from __future__ import annotations

import logging
from datetime import date
from typing import Collection, Iterable, List, Mapping, Optional

from core.config import EngineConfig
from core.diagnostics import WarningCollector
from core.domain import Granularity, Project, ResourcePoolItem
from core.services.resource_planning.buckets import generate_time_buckets
from core.services.resource_planning.conflicts import (
    check_project_resource_conflicts,
    critical_assignments_by_resource,
    detect_resource_conflicts,
)
from core.services.resource_planning.load import calculate_resource_load, get_resource_availability
from core.services.resource_planning.models import (
    PortfolioAnalysis,
    ResourceAvailability,
    ResourceConflict,
    ResourceLoad,
    ResourceLoadReport,
    TimeBucket,
)
from core.services.scheduling import SchedulingEngine

logger = logging.getLogger(__name__)


class ResourcePlanningService:
    """
    Time-bucketed resource demand and conflict analysis over a portfolio snapshot.
    Defaults (bucket count, granularity, day/month basis, worker count) come from EngineConfig.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        scheduling_engine: SchedulingEngine | None = None,
    ):
        self._config: EngineConfig = config or EngineConfig()
        self._scheduling: SchedulingEngine = scheduling_engine or SchedulingEngine()

    @property
    def config(self) -> EngineConfig:
        return self._config

    def generate_time_buckets(
        self,
        projects: Iterable[Project],
        count: Optional[int] = None,
        granularity: Granularity | str | None = None,
        *,
        today: Optional[date] = None,
    ) -> tuple[TimeBucket, ...]:
        return generate_time_buckets(
            projects,
            self._config.bucket_count if count is None else count,
            granularity or self._config.bucket_granularity,
            today=today,
            days_per_month=self._config.days_per_month,
        )

    def calculate_resource_load(
        self,
        projects: Iterable[Project],
        resources: Iterable[ResourcePoolItem],
        buckets: Iterable[TimeBucket],
    ) -> ResourceLoadReport:
        return calculate_resource_load(
            projects,
            resources,
            buckets,
            days_per_month=self._config.days_per_month,
            max_workers=self._config.load_workers,
        )

    def detect_resource_conflicts(
        self,
        resource_loads: Iterable[ResourceLoad],
        *,
        critical_assignments: Mapping[str, Collection[str]] | None = None,
    ) -> List[ResourceConflict]:
        return detect_resource_conflicts(resource_loads, critical_assignments=critical_assignments)

    def check_project_resource_conflicts(
        self,
        candidate: Project,
        existing_projects: Iterable[Project],
        resources: Iterable[ResourcePoolItem],
        *,
        today: Optional[date] = None,
    ) -> List[ResourceConflict]:
        existing = list(existing_projects)
        buckets = self.generate_time_buckets([*existing, candidate], today=today)
        return check_project_resource_conflicts(
            candidate,
            existing,
            resources,
            buckets,
            days_per_month=self._config.days_per_month,
        )

    def get_resource_availability(
        self,
        resource_id: str,
        start: date,
        end: date,
        projects: Iterable[Project],
        resources: Iterable[ResourcePoolItem],
        granularity: Granularity | str | None = None,
    ) -> List[ResourceAvailability]:
        return get_resource_availability(
            resource_id,
            start,
            end,
            projects,
            resources,
            granularity or self._config.bucket_granularity,
            days_per_month=self._config.days_per_month,
        )

    def analyze_portfolio(
        self,
        projects: Iterable[Project],
        resources: Iterable[ResourcePoolItem],
        *,
        count: Optional[int] = None,
        granularity: Granularity | str | None = None,
        today: Optional[date] = None,
    ) -> PortfolioAnalysis:
        """
        Buckets -> load -> conflicts in one call. Conflicts where a project's
        critical-path task is assigned to the overallocated resource are flagged CRITICAL.
        A cyclic task graph in any project aborts the analysis with CyclicDependencyError.
        """
        project_list = list(projects)
        resource_list = list(resources)

        buckets = self.generate_time_buckets(project_list, count, granularity, today=today)
        load = self.calculate_resource_load(project_list, resource_list, buckets)

        collector = WarningCollector(logger)
        collector.extend(load.warnings)
        critical_task_ids: set[str] = set()
        for project in project_list:
            if not project.tasks:
                continue
            result = self._scheduling.compute_critical_path(project.tasks)
            critical_task_ids.update(result.critical_path)
            collector.extend(result.warnings)

        conflicts = self.detect_resource_conflicts(
            load,
            critical_assignments=critical_assignments_by_resource(project_list, critical_task_ids),
        )
        logger.info(
            "Portfolio analysis: %s projects, %s resources, %s buckets, %s conflicts",
            len(project_list),
            len(resource_list),
            len(buckets),
            len(conflicts),
        )
        return PortfolioAnalysis(
            buckets=buckets,
            load=load,
            conflicts=tuple(conflicts),
            warnings=collector.as_tuple(),
        )


__all__ = ["ResourcePlanningService"]
