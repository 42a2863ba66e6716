from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterator

from core.diagnostics import EngineWarning
from core.domain import ConflictSeverity, Granularity, ProjectStatus


@dataclass(frozen=True)
class TimeBucket:
    label: str
    period_start: date
    period_end: date
    granularity: Granularity = Granularity.MONTH

    @property
    def date(self) -> date:
        return self.period_start

    def contains(self, day: date) -> bool:
        return self.period_start <= day <= self.period_end


@dataclass(frozen=True)
class ProjectAllocation:
    project_id: str
    project_name: str
    amount: float
    status: ProjectStatus


@dataclass(frozen=True)
class BucketAllocation:
    label: str
    period_start: date
    period_end: date
    active: float
    planning: float
    projects: tuple[ProjectAllocation, ...] = ()

    @property
    def total(self) -> float:
        return self.active + self.planning


@dataclass(frozen=True)
class ResourceLoad:
    resource_id: str
    resource_name: str
    capacity: float
    allocations: dict[str, BucketAllocation] = field(default_factory=dict)

    def utilization_percent(self, label: str) -> float | None:
        bucket = self.allocations.get(label)
        if bucket is None or self.capacity <= 0:
            return None
        return bucket.total / self.capacity * 100.0


@dataclass(frozen=True)
class ResourceLoadReport:
    loads: tuple[ResourceLoad, ...]
    warnings: tuple[EngineWarning, ...] = ()

    def __iter__(self) -> Iterator[ResourceLoad]:
        return iter(self.loads)

    def __len__(self) -> int:
        return len(self.loads)

    def for_resource(self, resource_id: str) -> ResourceLoad | None:
        for load in self.loads:
            if load.resource_id == resource_id:
                return load
        return None


@dataclass(frozen=True)
class ConflictingProject:
    project_id: str
    project_name: str
    allocation: float


@dataclass(frozen=True)
class ResourceConflict:
    resource_id: str
    resource_name: str
    period: str
    period_start: date
    period_end: date
    capacity: float
    allocated: float
    overallocation: float
    conflicting_projects: tuple[ConflictingProject, ...]
    severity: ConflictSeverity = ConflictSeverity.NORMAL


@dataclass(frozen=True)
class ResourceAvailability:
    period: str
    period_start: date
    capacity: float
    allocated: float
    available: float


@dataclass(frozen=True)
class PortfolioAnalysis:
    buckets: tuple[TimeBucket, ...]
    load: ResourceLoadReport
    conflicts: tuple[ResourceConflict, ...]
    warnings: tuple[EngineWarning, ...] = ()


__all__ = [
    "TimeBucket",
    "ProjectAllocation",
    "BucketAllocation",
    "ResourceLoad",
    "ResourceLoadReport",
    "ConflictingProject",
    "ResourceConflict",
    "ResourceAvailability",
    "PortfolioAnalysis",
]
