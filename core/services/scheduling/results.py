from __future__ import annotations

from typing import Dict, List

from core.diagnostics import EngineWarning
from core.services.scheduling.graph import DependencyGraph
from core.services.scheduling.models import CPMTaskInfo, CriticalPathResult


def build_schedule_result(
    graph: DependencyGraph,
    topo_order: List[str],
    durations: Dict[str, int],
    es: Dict[str, int],
    ef: Dict[str, int],
    ls: Dict[str, int],
    lf: Dict[str, int],
    project_finish: int,
    warnings: tuple[EngineWarning, ...] = (),
) -> CriticalPathResult:
    infos: Dict[str, CPMTaskInfo] = {}
    slack: Dict[str, int] = {}

    for task_id in topo_order:
        total_float = max(0, ls[task_id] - es[task_id])
        slack[task_id] = total_float
        infos[task_id] = CPMTaskInfo(
            task=graph.task(task_id),
            duration_days=durations[task_id],
            earliest_start=es[task_id],
            earliest_finish=ef[task_id],
            latest_start=ls[task_id],
            latest_finish=lf[task_id],
            total_float_days=total_float,
            is_critical=total_float == 0,
        )

    return CriticalPathResult(
        critical_path=tuple(task_id for task_id in topo_order if slack[task_id] == 0),
        slack=slack,
        tasks=infos,
        project_duration=project_finish,
        warnings=warnings,
    )


__all__ = ["build_schedule_result"]
