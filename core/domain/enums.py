from __future__ import annotations

from enum import Enum


class TaskType(str, Enum):
    TASK = "task"
    MILESTONE = "milestone"
    GROUP = "group"


class ProjectStatus(str, Enum):
    PLANNING = "planning"
    ACTIVE = "active"
    COMPLETED = "completed"
    ON_HOLD = "on-hold"


class ResourceUnit(str, Enum):
    DAY = "day"
    MONTH = "month"
    YEAR = "year"


class Granularity(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"


class ConflictSeverity(str, Enum):
    NORMAL = "normal"
    CRITICAL = "critical"


__all__ = ["TaskType", "ProjectStatus", "ResourceUnit", "Granularity", "ConflictSeverity"]
