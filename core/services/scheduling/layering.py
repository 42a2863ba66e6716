from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, Iterator

from core.domain import Task
from core.services.scheduling.graph import DependencyGraph


def compute_levels(graph: DependencyGraph) -> Dict[str, int]:
    """
    level(t) = 1 + max(level(p) for p in predecessors(t)), 0 without predecessors.

    Iterative post-order DFS with memoization. A predecessor that is still on the
    traversal stack closes a cycle; it counts as level 0 so corrupt input stays bounded.
    """
    levels: Dict[str, int] = {}
    on_stack: set[str] = set()

    for start in graph.task_ids:
        if start in levels:
            continue
        stack: list[tuple[str, Iterator[str]]] = [(start, iter(graph.predecessors(start)))]
        on_stack.add(start)
        while stack:
            node, pending = stack[-1]
            descended = False
            for pred_id in pending:
                if pred_id in levels or pred_id in on_stack:
                    continue
                on_stack.add(pred_id)
                stack.append((pred_id, iter(graph.predecessors(pred_id))))
                descended = True
                break
            if descended:
                continue

            stack.pop()
            on_stack.discard(node)
            preds = graph.predecessors(node)
            if not preds:
                levels[node] = 0
            else:
                levels[node] = 1 + max(levels.get(pred_id, 0) for pred_id in preds)

    return levels


def assign_levels(tasks: Iterable[Task]) -> Dict[str, int]:
    graph = DependencyGraph.build(tasks, validate=False, reject_self=False)
    return compute_levels(graph)


def group_by_level(tasks: Iterable[Task], levels: Dict[str, int] | None = None) -> Dict[int, list[str]]:
    """Diagram columns: level -> task ids, ordered by start date then id within a column."""
    task_list = list(tasks)
    if levels is None:
        levels = assign_levels(task_list)

    columns: Dict[int, list[Task]] = {}
    for task in task_list:
        if task.id not in levels:
            continue
        columns.setdefault(levels[task.id], []).append(task)

    return {
        level: [t.id for t in sorted(columns[level], key=lambda t: (t.start_date or date.max, t.id))]
        for level in sorted(columns)
    }


__all__ = ["compute_levels", "assign_levels", "group_by_level"]
