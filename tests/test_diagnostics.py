import logging

from core.api import compute_critical_path
from core.diagnostics import InvalidValueWarning, MissingReferenceWarning, WarningCollector
from tests.conftest import make_task


def test_distinct_warnings_sharing_code_and_entity_are_kept():
    collector = WarningCollector(logging.getLogger("tests.diagnostics"))

    collector.missing_reference("RESOURCE_MISSING", "requires unknown resource 'g1'", "P1")
    collector.missing_reference("RESOURCE_MISSING", "requires unknown resource 'g2'", "P1")
    collector.missing_reference("RESOURCE_MISSING", "requires unknown resource 'g1'", "P1")

    assert len(collector) == 2
    assert [w.message for w in collector] == [
        "requires unknown resource 'g1'",
        "requires unknown resource 'g2'",
    ]


def test_same_code_and_message_of_another_kind_is_kept():
    collector = WarningCollector()

    collector.missing_reference("X", "same text", "T1")
    collector.invalid_value("X", "same text", "T1")

    assert [type(w) for w in collector] == [MissingReferenceWarning, InvalidValueWarning]


def test_extend_merges_without_logging_again(caplog):
    caplog.set_level(logging.WARNING)
    source = WarningCollector(logging.getLogger("tests.diagnostics.source"))
    source.missing_reference("DEPENDENCY_MISSING", "depends on unknown task 'later'", "B")
    target = WarningCollector(logging.getLogger("tests.diagnostics.target"))

    caplog.clear()
    target.extend(source.as_tuple())

    assert len(target) == 1
    assert caplog.records == []


def test_dangling_dependency_is_logged_once_per_schedule(caplog):
    caplog.set_level(logging.WARNING)

    result = compute_critical_path([make_task("A", 1), make_task("B", 1, ["A", "later"])])

    logged = [r for r in caplog.records if "DEPENDENCY_MISSING" in r.getMessage()]
    assert len(logged) == 1
    assert [w.code for w in result.warnings] == ["DEPENDENCY_MISSING"]
