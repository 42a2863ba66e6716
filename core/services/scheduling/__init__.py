from .engine import SchedulingEngine
from .graph import DependencyGraph
from .layering import assign_levels, group_by_level
from .models import CPMTaskInfo, CriticalPathResult

__all__ = [
    "SchedulingEngine",
    "DependencyGraph",
    "CPMTaskInfo",
    "CriticalPathResult",
    "assign_levels",
    "group_by_level",
]
