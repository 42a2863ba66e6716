"""Map the dashboard store's camelCase dict snapshot onto immutable domain objects."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, Mapping, Optional

from core.diagnostics import EngineWarning, WarningCollector
from core.domain import (
    Project,
    ProjectStatus,
    ResourcePoolItem,
    ResourceRequirement,
    ResourceUnit,
    Task,
    TaskType,
    TeamMember,
    coerce_date,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshot:
    tasks: tuple[Task, ...]
    projects: tuple[Project, ...]
    resources: tuple[ResourcePoolItem, ...]
    warnings: tuple[EngineWarning, ...] = ()


def _as_float(value: Any, default: float = 0.0) -> float:
    if value in (None, ""):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _as_date(value: Any, field_name: str, entity_id: str, collector: WarningCollector) -> Optional[date]:
    parsed = coerce_date(value)
    if parsed is None and value not in (None, ""):
        collector.invalid_dates(
            "DATE_UNPARSEABLE",
            f"Unparseable {field_name} {value!r} on '{entity_id}'.",
            entity_id,
        )
    return parsed


def _as_task_type(value: Any, entity_id: str, collector: WarningCollector) -> TaskType:
    if isinstance(value, TaskType):
        return value
    try:
        return TaskType((value or TaskType.TASK.value))
    except ValueError:
        collector.invalid_value(
            "TASK_TYPE_UNKNOWN",
            f"Unknown task type {value!r} on '{entity_id}'; treated as task.",
            entity_id,
        )
        return TaskType.TASK


def task_from_dict(data: Mapping[str, Any], collector: WarningCollector | None = None) -> Task:
    if collector is None:
        collector = WarningCollector(logger)
    task_id = str(data["id"])
    return Task(
        id=task_id,
        name=str(data.get("name") or ""),
        start_date=_as_date(data.get("startDate"), "startDate", task_id, collector),
        end_date=_as_date(data.get("endDate"), "endDate", task_id, collector),
        dependencies=tuple(str(d) for d in (data.get("dependencies") or ())),
        type=_as_task_type(data.get("type"), task_id, collector),
        assignee=data.get("assignee") or None,
        project_id=data.get("projectId") or None,
        progress=_as_float(data.get("progress")),
    )


def requirement_from_dict(
    data: Mapping[str, Any],
    project_id: str,
    collector: WarningCollector,
) -> Optional[ResourceRequirement]:
    raw_unit = data.get("unit") or ResourceUnit.MONTH.value
    try:
        unit = ResourceUnit(raw_unit)
    except ValueError:
        collector.invalid_value(
            "REQUIREMENT_UNIT_UNKNOWN",
            f"Unknown requirement unit {raw_unit!r} on project '{project_id}'; requirement ignored.",
            project_id,
        )
        return None
    return ResourceRequirement(
        resource_id=str(data.get("resourceId") or ""),
        count=_as_float(data.get("count")),
        duration=_as_float(data.get("duration")),
        unit=unit,
    )


def project_from_dict(data: Mapping[str, Any], collector: WarningCollector | None = None) -> Optional[Project]:
    """None when the project's status is not one the engine knows."""
    if collector is None:
        collector = WarningCollector(logger)
    project_id = str(data["id"])
    raw_status = data.get("status") or ProjectStatus.PLANNING.value
    try:
        status = ProjectStatus(raw_status)
    except ValueError:
        collector.invalid_value(
            "PROJECT_STATUS_UNKNOWN",
            f"Unknown status {raw_status!r} on project '{project_id}'; project skipped.",
            project_id,
        )
        return None

    requirements = [
        requirement_from_dict(item, project_id, collector)
        for item in (data.get("resourceRequirements") or ())
    ]
    tasks = [
        task_from_dict({**item, "projectId": item.get("projectId") or project_id}, collector)
        for item in (data.get("tasks") or ())
    ]
    return Project(
        id=project_id,
        name=str(data.get("name") or ""),
        status=status,
        start_date=_as_date(data.get("startDate"), "startDate", project_id, collector),
        end_date=_as_date(data.get("endDate"), "endDate", project_id, collector),
        resource_requirements=tuple(r for r in requirements if r is not None),
        tasks=tuple(tasks),
    )


def resource_from_dict(data: Mapping[str, Any]) -> ResourcePoolItem:
    members = tuple(
        TeamMember(
            id=str(member["id"]),
            name=str(member.get("name") or ""),
            role=str(member.get("role") or ""),
            availability=_as_float(member.get("availability"), 100.0),
            skills=tuple(str(s) for s in (member.get("skills") or ())),
        )
        for member in (data.get("members") or ())
    )
    return ResourcePoolItem(
        id=str(data["id"]),
        name=str(data.get("name") or ""),
        total_quantity=_as_float(data.get("totalQuantity")),
        members=members,
    )


def load_snapshot(
    tasks: Iterable[Mapping[str, Any]] = (),
    projects: Iterable[Mapping[str, Any]] = (),
    resources: Iterable[Mapping[str, Any]] = (),
) -> Snapshot:
    collector = WarningCollector(logger)
    task_objs = tuple(task_from_dict(item, collector) for item in tasks)
    project_objs = tuple(
        p for p in (project_from_dict(item, collector) for item in projects) if p is not None
    )
    resource_objs = tuple(resource_from_dict(item) for item in resources)
    logger.info(
        "Loaded snapshot: %s tasks, %s projects, %s resources",
        len(task_objs),
        len(project_objs),
        len(resource_objs),
    )
    return Snapshot(
        tasks=task_objs,
        projects=project_objs,
        resources=resource_objs,
        warnings=collector.as_tuple(),
    )


__all__ = [
    "Snapshot",
    "task_from_dict",
    "requirement_from_dict",
    "project_from_dict",
    "resource_from_dict",
    "load_snapshot",
]
