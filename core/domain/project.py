from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from core.domain.dates import coerce_date, is_valid_range
from core.domain.enums import ProjectStatus, ResourceUnit
from core.domain.identifiers import generate_id
from core.domain.task import Task


@dataclass(frozen=True)
class ResourceRequirement:
    resource_id: str
    count: float = 0.0
    duration: float = 0.0
    unit: ResourceUnit = ResourceUnit.MONTH

    def __post_init__(self) -> None:
        object.__setattr__(self, "unit", ResourceUnit(self.unit))


@dataclass(frozen=True)
class Project:
    id: str
    name: str = ""
    status: ProjectStatus = ProjectStatus.PLANNING
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    resource_requirements: tuple[ResourceRequirement, ...] = ()
    tasks: tuple[Task, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "status", ProjectStatus(self.status))
        object.__setattr__(self, "start_date", coerce_date(self.start_date))
        object.__setattr__(self, "end_date", coerce_date(self.end_date))
        object.__setattr__(self, "resource_requirements", tuple(self.resource_requirements or ()))
        object.__setattr__(self, "tasks", tuple(self.tasks or ()))

    @property
    def has_valid_dates(self) -> bool:
        return is_valid_range(self.start_date, self.end_date)

    def requirement_for(self, resource_id: str) -> Optional[ResourceRequirement]:
        for requirement in self.resource_requirements:
            if requirement.resource_id == resource_id:
                return requirement
        return None

    @staticmethod
    def create(name: str, **extra) -> "Project":
        return Project(id=generate_id(), name=name, **extra)


__all__ = ["Project", "ResourceRequirement"]
