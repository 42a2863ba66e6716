from __future__ import annotations

from typing import Dict, List

from core.services.scheduling.graph import DependencyGraph


def run_forward_pass(
    graph: DependencyGraph,
    topo_order: List[str],
    durations: Dict[str, int],
) -> tuple[Dict[str, int], Dict[str, int], int]:
    es: Dict[str, int] = {}
    ef: Dict[str, int] = {}

    for task_id in topo_order:
        est = max((ef[pred_id] for pred_id in graph.predecessors(task_id)), default=0)
        es[task_id] = est
        ef[task_id] = est + durations[task_id]

    project_finish = max((ef[task_id] for task_id in graph.sinks()), default=0)
    return es, ef, project_finish


def run_backward_pass(
    graph: DependencyGraph,
    topo_order: List[str],
    durations: Dict[str, int],
    project_finish: int,
) -> tuple[Dict[str, int], Dict[str, int]]:
    ls: Dict[str, int] = {}
    lf: Dict[str, int] = {}

    for task_id in reversed(topo_order):
        outgoing = graph.successors(task_id)
        if outgoing:
            lft = min(ls[succ_id] for succ_id in outgoing)
        else:
            lft = project_finish
        lf[task_id] = lft
        ls[task_id] = lft - durations[task_id]

    return ls, lf


__all__ = ["run_forward_pass", "run_backward_pass"]
