from datetime import date

import pytest

from core.api import calculate_resource_load, detect_resource_conflicts, generate_time_buckets
from core.domain import ConflictSeverity, ResourcePoolItem
from core.exceptions import CyclicDependencyError
from core.services.resource_planning import critical_assignments_by_resource
from tests.conftest import make_project, make_task


@pytest.fixture
def march_projects():
    return [
        make_project("P1", "active", date(2025, 3, 1), date(2025, 3, 31), [("R", 3, 1, "month")]),
        make_project("P2", "planning", date(2025, 3, 10), date(2025, 3, 25), [("R", 4, 10, "day")]),
    ]


def _conflicts(projects, resources, *, today=date(2025, 1, 1), count=12):
    buckets = generate_time_buckets(projects, count, "month", today=today)
    return detect_resource_conflicts(calculate_resource_load(projects, resources, buckets))


def test_overallocated_month_is_reported(march_projects, shared_resource):
    conflicts = _conflicts(march_projects, [shared_resource])

    assert len(conflicts) == 1
    conflict = conflicts[0]
    assert conflict.resource_id == "R"
    assert conflict.resource_name == "Software Department"
    assert conflict.period == "2025-03"
    assert conflict.period_start == date(2025, 3, 1)
    assert conflict.capacity == 5
    assert conflict.allocated == pytest.approx(7)
    assert conflict.overallocation == pytest.approx(2)
    assert [(p.project_id, p.allocation) for p in conflict.conflicting_projects] == [("P1", 3), ("P2", 4)]
    assert conflict.severity == ConflictSeverity.NORMAL


def test_demand_equal_to_capacity_is_not_a_conflict(shared_resource):
    projects = [
        make_project("P1", "active", date(2025, 3, 1), date(2025, 3, 31), [("R", 3, 1, "month")]),
        make_project("P2", "planning", date(2025, 3, 1), date(2025, 3, 31), [("R", 2, 1, "month")]),
    ]

    assert _conflicts(projects, [shared_resource]) == []


def test_every_overallocated_bucket_is_reported_once(shared_resource):
    projects = [
        make_project("P1", "active", date(2025, 1, 1), date(2025, 6, 30), [("R", 4, 3, "month")]),
        make_project("P2", "active", date(2025, 2, 1), date(2025, 6, 30), [("R", 2, 4, "month")]),
    ]
    buckets = generate_time_buckets(projects, 12, "month", today=date(2025, 1, 1))
    report = calculate_resource_load(projects, [shared_resource], buckets)

    conflicts = detect_resource_conflicts(report)

    over = {
        label
        for label, bucket in report.loads[0].allocations.items()
        if bucket.total > report.loads[0].capacity
    }
    assert {c.period for c in conflicts} == over == {"2025-02", "2025-03"}
    assert len(conflicts) == len(over)


def test_conflicts_sorted_by_overallocation_then_period():
    small = ResourcePoolItem(id="S", name="Small team", total_quantity=1)
    big = ResourcePoolItem(id="B", name="Big team", total_quantity=10)
    projects = [
        make_project("P1", "active", date(2025, 1, 1), date(2025, 3, 31), [("S", 2, 2, "month")]),
        make_project("P2", "active", date(2025, 3, 1), date(2025, 3, 31), [("B", 14, 1, "month")]),
    ]

    conflicts = _conflicts(projects, [small, big])

    assert [(c.resource_id, c.period, c.overallocation) for c in conflicts] == [
        ("B", "2025-03", 4),
        ("S", "2025-01", 1),
        ("S", "2025-02", 1),
    ]


def test_conflict_on_critical_task_resource_is_critical(services, march_projects, shared_resource):
    p1 = make_project(
        "P1",
        "active",
        date(2025, 3, 1),
        date(2025, 3, 31),
        [("R", 3, 1, "month")],
        tasks=[
            make_task("T1", 10, start=date(2025, 3, 1), assignee="R"),
            make_task("T2", 2, start=date(2025, 3, 1)),
        ],
    )
    planning = services["resource_planning_service"]

    analysis = planning.analyze_portfolio([p1, march_projects[1]], [shared_resource], today=date(2025, 3, 1))

    assert len(analysis.conflicts) == 1
    assert analysis.conflicts[0].severity == ConflictSeverity.CRITICAL
    assert len(analysis.buckets) == 12
    assert analysis.load.for_resource("R") is not None


def test_non_critical_assignment_keeps_normal_severity(march_projects, shared_resource):
    p1 = make_project(
        "P1",
        "active",
        date(2025, 3, 1),
        date(2025, 3, 31),
        [("R", 3, 1, "month")],
        tasks=[
            make_task("T1", 10, start=date(2025, 3, 1)),
            make_task("T2", 2, start=date(2025, 3, 1), assignee="R"),
        ],
    )
    buckets = generate_time_buckets([p1], 12, "month", today=date(2025, 1, 1))
    report = calculate_resource_load([p1, march_projects[1]], [shared_resource], buckets)

    assignments = critical_assignments_by_resource([p1], {"T1"})
    conflicts = detect_resource_conflicts(report, critical_assignments=assignments)

    assert assignments == {}
    assert conflicts[0].severity == ConflictSeverity.NORMAL


def test_portfolio_analysis_rejects_cyclic_project(services, shared_resource):
    project = make_project(
        "P1",
        "active",
        date(2025, 3, 1),
        date(2025, 3, 31),
        tasks=[make_task("A", 1, ["B"]), make_task("B", 1, ["A"])],
    )

    with pytest.raises(CyclicDependencyError):
        services["resource_planning_service"].analyze_portfolio([project], [shared_resource])


def test_candidate_check_reports_conflicts_without_mutating_inputs(services, march_projects, shared_resource):
    existing = [march_projects[0]]
    snapshot = list(existing)
    candidate = march_projects[1]

    conflicts = services["resource_planning_service"].check_project_resource_conflicts(
        candidate, existing, [shared_resource], today=date(2025, 1, 1)
    )

    assert existing == snapshot
    assert [c.period for c in conflicts] == ["2025-03"]
    assert {p.project_id for p in conflicts[0].conflicting_projects} == {"P1", "P2"}


def test_candidate_replaces_existing_project_with_same_id(services, march_projects, shared_resource):
    existing = list(march_projects)
    smaller = make_project("P2", "planning", date(2025, 3, 10), date(2025, 3, 25), [("R", 1, 10, "day")])

    conflicts = services["resource_planning_service"].check_project_resource_conflicts(
        smaller, existing, [shared_resource], today=date(2025, 1, 1)
    )

    assert conflicts == []
