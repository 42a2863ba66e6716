from .resource_planning import ResourcePlanningService
from .scheduling import CPMTaskInfo, CriticalPathResult, DependencyGraph, SchedulingEngine

__all__ = [
    "SchedulingEngine",
    "DependencyGraph",
    "CPMTaskInfo",
    "CriticalPathResult",
    "ResourcePlanningService",
]
