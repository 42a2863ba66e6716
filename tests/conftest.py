# tests/conftest.py
from datetime import date, timedelta

import pytest

from core.config import EngineConfig
from core.domain import Project, ProjectStatus, ResourcePoolItem, ResourceRequirement, ResourceUnit, Task, TaskType
from infra.services import build_service_dict


BASE_DATE = date(2024, 1, 1)


def make_task(task_id, days, deps=(), *, start=BASE_DATE, task_type=TaskType.TASK, assignee=None):
    return Task(
        id=task_id,
        name=f"Task {task_id}",
        start_date=start,
        end_date=start + timedelta(days=days),
        dependencies=tuple(deps),
        type=task_type,
        assignee=assignee,
    )


def make_project(
    project_id,
    status,
    start,
    end,
    requirements=(),
    tasks=(),
):
    return Project(
        id=project_id,
        name=f"Project {project_id}",
        status=ProjectStatus(status),
        start_date=start,
        end_date=end,
        resource_requirements=tuple(
            ResourceRequirement(resource_id=rid, count=count, duration=duration, unit=ResourceUnit(unit))
            for rid, count, duration, unit in requirements
        ),
        tasks=tuple(tasks),
    )


@pytest.fixture
def services():
    # Fixed config so tests do not depend on PM_* variables in the environment
    return build_service_dict(EngineConfig())


@pytest.fixture
def diamond_tasks():
    # A(3) -> B(5), A -> C(2), B + C -> D(1)
    return [
        make_task("A", 3),
        make_task("B", 5, ["A"]),
        make_task("C", 2, ["A"]),
        make_task("D", 1, ["B", "C"]),
    ]


@pytest.fixture
def shared_resource():
    return ResourcePoolItem(id="R", name="Software Department", total_quantity=5)
