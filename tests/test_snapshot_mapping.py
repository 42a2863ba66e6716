from datetime import date

from core.diagnostics import WarningCollector
from core.domain import ProjectStatus, ResourceUnit, TaskType
from core.services.scheduling import SchedulingEngine
from infra.snapshot import load_snapshot, project_from_dict, task_from_dict


def test_task_mapping_reads_camel_case_keys():
    task = task_from_dict(
        {
            "id": "t1",
            "name": "Design",
            "startDate": "2025-03-01",
            "endDate": "2025-03-11T00:00:00",
            "dependencies": ["t0", "t0"],
            "type": "milestone",
            "assignee": "R",
            "projectId": "p1",
            "progress": "40",
        }
    )

    assert task.start_date == date(2025, 3, 1)
    assert task.end_date == date(2025, 3, 11)
    assert task.dependencies == ("t0",)
    assert task.type == TaskType.MILESTONE
    assert task.duration_days == 0
    assert task.assignee == "R"
    assert task.project_id == "p1"
    assert task.progress == 40.0


def test_bad_fields_become_warnings_not_errors():
    snapshot = load_snapshot(
        tasks=[{"id": "t1", "name": "X", "startDate": "not-a-date", "type": "epic"}],
        projects=[
            {"id": "p1", "status": "archived"},
            {
                "id": "p2",
                "status": "active",
                "startDate": "2025-01-01",
                "endDate": "2025-06-30",
                "resourceRequirements": [
                    {"resourceId": "R", "count": 2, "duration": 3, "unit": "month"},
                    {"resourceId": "R", "count": 1, "duration": 1, "unit": "week"},
                ],
            },
        ],
    )

    assert snapshot.tasks[0].start_date is None
    assert snapshot.tasks[0].type == TaskType.TASK
    assert [p.id for p in snapshot.projects] == ["p2"]
    assert len(snapshot.projects[0].resource_requirements) == 1
    codes = {w.code for w in snapshot.warnings}
    assert codes == {
        "DATE_UNPARSEABLE",
        "TASK_TYPE_UNKNOWN",
        "PROJECT_STATUS_UNKNOWN",
        "REQUIREMENT_UNIT_UNKNOWN",
    }


def test_caller_supplied_empty_collector_receives_warnings():
    collector = WarningCollector()

    task_from_dict({"id": "t1", "type": "epic"}, collector)
    project_from_dict({"id": "p1", "status": "archived"}, collector)

    assert [w.code for w in collector] == ["TASK_TYPE_UNKNOWN", "PROJECT_STATUS_UNKNOWN"]


def test_project_tasks_inherit_project_id_and_feed_the_engine():
    project = project_from_dict(
        {
            "id": "p1",
            "name": "Website",
            "status": "on-hold",
            "tasks": [
                {"id": "a", "name": "A", "startDate": "2025-01-01", "endDate": "2025-01-04"},
                {"id": "b", "name": "B", "startDate": "2025-01-01", "endDate": "2025-01-03", "dependencies": ["a"]},
            ],
        }
    )

    assert project.status == ProjectStatus.ON_HOLD
    assert {t.project_id for t in project.tasks} == {"p1"}

    result = SchedulingEngine().compute_critical_path(project.tasks)
    assert result.critical_path == ("a", "b")
    assert result.project_duration == 5


def test_resources_and_members_are_mapped():
    snapshot = load_snapshot(
        resources=[
            {
                "id": "R",
                "name": "Software Department",
                "totalQuantity": "5",
                "members": [{"id": "m1", "name": "Kim", "role": "dev", "skills": ["python"]}],
            }
        ]
    )

    resource = snapshot.resources[0]
    assert resource.capacity == 5.0
    assert resource.members[0].availability == 100.0
    assert resource.members[0].skills == ("python",)
    assert snapshot.warnings == ()


def test_requirement_units_default_to_month():
    project = project_from_dict(
        {"id": "p1", "status": "planning", "resourceRequirements": [{"resourceId": "R", "count": 1, "duration": 2}]}
    )

    assert project.resource_requirements[0].unit == ResourceUnit.MONTH
