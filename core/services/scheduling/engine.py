from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, Iterable, List

from core.diagnostics import WarningCollector
from core.domain import Task, TaskType
from core.services.scheduling.graph import DependencyGraph
from core.services.scheduling.layering import compute_levels, group_by_level
from core.services.scheduling.models import CriticalPathResult
from core.services.scheduling.passes import run_backward_pass, run_forward_pass
from core.services.scheduling.results import build_schedule_result

logger = logging.getLogger(__name__)


class SchedulingEngine:
    """
    CPM-style scheduling engine over an immutable task snapshot:
    - Forward pass: ES/EF
    - Backward pass: LS/LF
    - Finish-to-start precedence only, whole-day durations, no calendar
    - Theoretical schedule: day 0 is the project start, assigned dates are not used
    Tasks are only read; every result is a new object.
    """

    def build_graph(
        self,
        tasks: Iterable[Task],
        *,
        validate: bool = True,
        reject_self: bool = True,
    ) -> DependencyGraph:
        return DependencyGraph.build(tasks, validate=validate, reject_self=reject_self)

    def compute_critical_path(self, tasks: Iterable[Task]) -> CriticalPathResult:
        """
        Full CPM calculation:
        - raises CyclicDependencyError when the tasks cannot be ordered
        - returns slack per task and the zero-slack set in topological order
        """
        graph = DependencyGraph.build(tasks, validate=False)
        if not len(graph):
            return CriticalPathResult(critical_path=(), slack={}, warnings=graph.warnings)

        collector = WarningCollector(logger)
        collector.extend(graph.warnings)

        topo_order = graph.topological_order()
        durations = self._task_durations(graph, collector)

        es, ef, project_finish = run_forward_pass(graph, topo_order, durations)
        ls, lf = run_backward_pass(graph, topo_order, durations, project_finish)

        result = build_schedule_result(
            graph=graph,
            topo_order=topo_order,
            durations=durations,
            es=es,
            ef=ef,
            ls=ls,
            lf=lf,
            project_finish=project_finish,
            warnings=collector.as_tuple(),
        )
        logger.debug(
            "Critical path computed: %s tasks, %s critical, duration %s days",
            len(graph),
            len(result.critical_path),
            project_finish,
        )
        return result

    def detect_circular_dependency(self, tasks: Iterable[Task], from_task_id: str, to_task_id: str) -> bool:
        """
        Would making `to_task_id` depend on `from_task_id` create a cycle?
        Runs on every "add dependency" edit, before the edit is committed.
        A snapshot holding a self-referencing task is corrupt: it raises
        CyclicDependencyError (DEPENDENCY_SELF) whichever edge is asked about.
        """
        if from_task_id == to_task_id:
            return True
        graph = DependencyGraph.build(tasks, validate=False)
        if to_task_id not in graph or from_task_id not in graph:
            return False
        return graph.would_create_cycle(from_task_id, to_task_id)

    def assign_levels(self, tasks: Iterable[Task]) -> Dict[str, int]:
        """Self-references and cycles degrade to bounded levels instead of raising."""
        graph = DependencyGraph.build(tasks, validate=False, reject_self=False)
        return compute_levels(graph)

    def layout_columns(self, tasks: Iterable[Task]) -> Dict[int, List[str]]:
        task_list = list(tasks)
        return group_by_level(task_list, self.assign_levels(task_list))

    def adjust_task_dates(self, tasks: Iterable[Task]) -> List[Task]:
        """
        Push each task so it starts no earlier than the latest end of its predecessors,
        keeping its own duration. Returns new Task objects in input order; tasks without
        usable dates are returned unchanged and do not constrain their successors.
        """
        task_list = list(tasks)
        graph = DependencyGraph.build(task_list)
        adjusted: Dict[str, Task] = {}

        for task_id in graph.topological_order():
            task = graph.task(task_id)
            if not self._has_schedulable_dates(task):
                adjusted[task_id] = task
                continue

            pred_ends = [
                adjusted[pred_id].end_date or adjusted[pred_id].start_date
                for pred_id in graph.predecessors(task_id)
                if self._has_schedulable_dates(adjusted[pred_id])
            ]
            new_start = max([task.start_date, *pred_ends])
            if new_start == task.start_date:
                adjusted[task_id] = task
                continue

            span = (task.end_date or task.start_date) - task.start_date
            adjusted[task_id] = replace(task, start_date=new_start, end_date=new_start + span)

        moved = sum(1 for t in task_list if adjusted.get(t.id, t) is not t)
        logger.info("Adjusted dates for %s of %s tasks", moved, len(task_list))
        return [adjusted.get(t.id, t) for t in task_list]

    @staticmethod
    def _has_schedulable_dates(task: Task) -> bool:
        if task.is_milestone:
            return task.start_date is not None
        return task.has_valid_dates

    @staticmethod
    def _task_durations(graph: DependencyGraph, collector: WarningCollector) -> Dict[str, int]:
        durations: Dict[str, int] = {}
        for task_id in graph.task_ids:
            task = graph.task(task_id)
            if task.type == TaskType.MILESTONE:
                durations[task_id] = 0
            elif task.type in (TaskType.TASK, TaskType.GROUP):
                if not task.has_valid_dates:
                    collector.invalid_dates(
                        "TASK_DATES_INVALID",
                        f"Task '{task.name}' has missing or inverted dates; duration treated as 0.",
                        task_id,
                    )
                durations[task_id] = task.duration_days
            else:
                raise ValueError(f"Unsupported task type: {task.type!r}")
        return durations


__all__ = ["SchedulingEngine"]
