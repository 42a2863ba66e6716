from __future__ import annotations

import heapq
import logging
from collections import deque
from typing import Dict, Iterable, List, Optional

from core.diagnostics import EngineWarning, WarningCollector
from core.domain import Task
from core.exceptions import CyclicDependencyError

logger = logging.getLogger(__name__)


class DependencyGraph:
    """
    Directed graph over a task snapshot. An edge runs from each predecessor to the task
    that lists it in `dependencies`. Tasks are held in an id-indexed arena and edges are
    plain ids resolved through it, so no object cycles are ever materialized.
    """

    def __init__(
        self,
        tasks_by_id: Dict[str, Task],
        predecessors: Dict[str, List[str]],
        successors: Dict[str, List[str]],
        warnings: tuple[EngineWarning, ...] = (),
    ):
        self._tasks_by_id = tasks_by_id
        self._predecessors = predecessors
        self._successors = successors
        self.warnings = warnings

    @classmethod
    def build(
        cls,
        tasks: Iterable[Task],
        *,
        validate: bool = True,
        reject_self: bool = True,
    ) -> "DependencyGraph":
        """
        Build the graph; with `validate` the graph must be acyclic.
        Self-references raise unless `reject_self` is off, in which case the self-edge is
        dropped with a warning (diagram layout of corrupt data). Dangling ids are skipped
        with a warning.
        """
        collector = WarningCollector(logger)
        tasks_by_id: Dict[str, Task] = {}
        for task in tasks:
            if task.id in tasks_by_id:
                collector.invalid_value(
                    "TASK_DUPLICATE_ID",
                    f"Duplicate task id '{task.id}'; keeping the first occurrence.",
                    task.id,
                )
                continue
            tasks_by_id[task.id] = task

        predecessors: Dict[str, List[str]] = {task_id: [] for task_id in tasks_by_id}
        successors: Dict[str, List[str]] = {task_id: [] for task_id in tasks_by_id}

        for task_id, task in tasks_by_id.items():
            for dep_id in task.dependencies:
                if dep_id == task_id:
                    if not reject_self:
                        collector.invalid_value(
                            "DEPENDENCY_SELF",
                            f"Task '{task.name}' depends on itself; dependency ignored.",
                            task_id,
                        )
                        continue
                    raise CyclicDependencyError(
                        f"Task '{task.name}' cannot depend on itself.",
                        task_id=task_id,
                        cycle_path=(task_id, task_id),
                        code="DEPENDENCY_SELF",
                    )
                if dep_id not in tasks_by_id:
                    collector.missing_reference(
                        "DEPENDENCY_MISSING",
                        f"Task '{task.name}' depends on unknown task '{dep_id}'; dependency ignored.",
                        task_id,
                    )
                    continue
                predecessors[task_id].append(dep_id)
                successors[dep_id].append(task_id)

        graph = cls(tasks_by_id, predecessors, successors, collector.as_tuple())
        if validate:
            graph.topological_order()
        return graph

    # ---- accessors ----

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._tasks_by_id

    def __len__(self) -> int:
        return len(self._tasks_by_id)

    @property
    def task_ids(self) -> list[str]:
        return list(self._tasks_by_id)

    def task(self, task_id: str) -> Task:
        return self._tasks_by_id[task_id]

    def predecessors(self, task_id: str) -> list[str]:
        return list(self._predecessors.get(task_id, ()))

    def successors(self, task_id: str) -> list[str]:
        return list(self._successors.get(task_id, ()))

    def roots(self) -> list[str]:
        return [task_id for task_id, preds in self._predecessors.items() if not preds]

    def sinks(self) -> list[str]:
        return [task_id for task_id, succs in self._successors.items() if not succs]

    # ---- ordering ----

    def _sort_key(self, task_id: str) -> tuple[str, str]:
        return (self._tasks_by_id[task_id].name or "", task_id)

    def topological_order(self) -> list[str]:
        """Kahn's algorithm; ties are released by (name, id). Raises on cycles."""
        indegree: Dict[str, int] = {task_id: len(preds) for task_id, preds in self._predecessors.items()}
        heap: list[tuple[tuple[str, str], str]] = []
        for task_id, degree in indegree.items():
            if degree == 0:
                heapq.heappush(heap, (self._sort_key(task_id), task_id))

        order: list[str] = []
        while heap:
            _key, task_id = heapq.heappop(heap)
            order.append(task_id)
            for succ_id in self._successors[task_id]:
                indegree[succ_id] -= 1
                if indegree[succ_id] == 0:
                    heapq.heappush(heap, (self._sort_key(succ_id), succ_id))

        if len(order) != len(self._tasks_by_id):
            cycle = self.find_cycle() or []
            offender = cycle[0] if cycle else next(t for t, d in indegree.items() if d > 0)
            names = " -> ".join(self._tasks_by_id[t].name or t for t in cycle) if cycle else offender
            raise CyclicDependencyError(
                f"Cannot schedule tasks: circular dependency detected ({names}).",
                task_id=offender,
                cycle_path=cycle or None,
            )
        return order

    def find_cycle(self) -> Optional[list[str]]:
        """
        One cycle as [t0, t1, ..., t0] following successor edges, or None.
        Iterative three-colour DFS.
        """
        white, grey, black = 0, 1, 2
        colour: Dict[str, int] = {task_id: white for task_id in self._tasks_by_id}
        parent: Dict[str, Optional[str]] = {}

        for start in self._tasks_by_id:
            if colour[start] != white:
                continue
            parent[start] = None
            stack: list[tuple[str, int]] = [(start, 0)]
            colour[start] = grey
            while stack:
                node, index = stack[-1]
                succs = self._successors[node]
                if index < len(succs):
                    stack[-1] = (node, index + 1)
                    nxt = succs[index]
                    if colour[nxt] == white:
                        colour[nxt] = grey
                        parent[nxt] = node
                        stack.append((nxt, 0))
                    elif colour[nxt] == grey:
                        path = [node]
                        while path[-1] != nxt:
                            path.append(parent[path[-1]])
                        path.reverse()
                        path.append(nxt)
                        return path
                else:
                    colour[node] = black
                    stack.pop()
        return None

    # ---- reachability ----

    def find_path(self, start: str, target: str) -> Optional[list[str]]:
        """BFS over successor edges; touches only the subgraph reachable from `start`."""
        if start not in self._tasks_by_id or target not in self._tasks_by_id:
            return None
        if start == target:
            return [start]
        queue = deque([start])
        came_from: Dict[str, Optional[str]] = {start: None}
        while queue:
            current = queue.popleft()
            for nxt in self._successors.get(current, ()):
                if nxt in came_from:
                    continue
                came_from[nxt] = current
                if nxt == target:
                    path = [nxt]
                    while came_from[path[-1]] is not None:
                        path.append(came_from[path[-1]])
                    path.reverse()
                    return path
                queue.append(nxt)
        return None

    def would_create_cycle(self, from_id: str, to_id: str) -> bool:
        """
        Would the edge from_id -> to_id (to_id gains from_id as a predecessor) close a cycle?
        True iff to_id already reaches from_id, or the edge is a self-reference.
        """
        if from_id == to_id:
            return True
        return self.find_path(to_id, from_id) is not None

    def _closure(self, task_id: str, adjacency: Dict[str, List[str]]) -> list[str]:
        seen: set[str] = set()
        out: list[str] = []
        stack = list(reversed(adjacency.get(task_id, ())))
        while stack:
            current = stack.pop()
            if current in seen or current == task_id:
                continue
            seen.add(current)
            out.append(current)
            stack.extend(reversed(adjacency.get(current, ())))
        return out

    def all_predecessors(self, task_id: str) -> list[str]:
        return self._closure(task_id, self._predecessors)

    def all_successors(self, task_id: str) -> list[str]:
        return self._closure(task_id, self._successors)

    def connected_components(self) -> list[list[str]]:
        """Weakly connected task groups; independent units for batch recomputation."""
        seen: set[str] = set()
        components: list[list[str]] = []
        for start in self._tasks_by_id:
            if start in seen:
                continue
            seen.add(start)
            component: list[str] = []
            stack = [start]
            while stack:
                current = stack.pop()
                component.append(current)
                for nxt in (*self._predecessors[current], *self._successors[current]):
                    if nxt not in seen:
                        seen.add(nxt)
                        stack.append(nxt)
            components.append(sorted(component, key=self._sort_key))
        return components


__all__ = ["DependencyGraph"]
