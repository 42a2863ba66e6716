from datetime import date, datetime

import pytest

from core.domain import (
    Project,
    ProjectStatus,
    ResourcePoolItem,
    ResourceRequirement,
    ResourceUnit,
    Task,
    TaskType,
    coerce_date,
)
from core.services.resource_planning import TimeBucket


def test_factories_assign_unique_ids():
    first = Task.create("Design", start_date="2025-01-01", end_date="2025-01-05")
    second = Task.create("Build")
    project = Project.create("Website", status="active")
    pool = ResourcePoolItem.create("QA", total_quantity=3)

    assert first.id != second.id
    assert first.duration_days == 4
    assert project.status == ProjectStatus.ACTIVE
    assert pool.capacity == 3
    assert len({first.id, second.id, project.id, pool.id}) == 4


def test_task_normalizes_inputs():
    task = Task(
        id="t1",
        name="Kickoff",
        start_date=datetime(2025, 2, 1, 9, 30),
        end_date="2025-02-01",
        dependencies=["a", "b", "a"],
        type="milestone",
    )

    assert task.start_date == date(2025, 2, 1)
    assert task.dependencies == ("a", "b")
    assert task.is_milestone
    assert task.duration_days == 0


@pytest.mark.parametrize(
    "start,end",
    [(None, date(2025, 1, 5)), (date(2025, 1, 5), None), (date(2025, 1, 5), date(2025, 1, 1))],
)
def test_unusable_task_dates_give_zero_duration(start, end):
    task = Task(id="t1", name="X", start_date=start, end_date=end, type=TaskType.TASK)

    assert not task.has_valid_dates
    assert task.duration_days == 0


def test_coerce_date_rejects_garbage():
    assert coerce_date("2025-13-40") is None
    assert coerce_date("   ") is None
    assert coerce_date(42) is None
    assert coerce_date("2025-03-04T10:00:00+02:00") == date(2025, 3, 4)


def test_project_requirement_lookup():
    project = Project(
        id="p1",
        resource_requirements=(
            ResourceRequirement("R", count=2, duration=3, unit="year"),
            ResourceRequirement("S", count=1, duration=1),
        ),
    )

    assert project.requirement_for("R").unit == ResourceUnit.YEAR
    assert project.requirement_for("missing") is None
    assert not project.has_valid_dates


def test_negative_pool_quantity_reads_as_zero_capacity():
    assert ResourcePoolItem(id="R", name="Pool", total_quantity=-2).capacity == 0


def test_time_bucket_contains_both_ends():
    bucket = TimeBucket("2025-03", date(2025, 3, 1), date(2025, 3, 31))

    assert bucket.contains(date(2025, 3, 1))
    assert bucket.contains(date(2025, 3, 31))
    assert not bucket.contains(date(2025, 4, 1))
    assert bucket.date == date(2025, 3, 1)
