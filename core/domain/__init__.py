from core.domain.dates import coerce_date
from core.domain.enums import ConflictSeverity, Granularity, ProjectStatus, ResourceUnit, TaskType
from core.domain.identifiers import generate_id
from core.domain.project import Project, ResourceRequirement
from core.domain.resource import ResourcePoolItem, TeamMember
from core.domain.task import Task

__all__ = [
    "generate_id",
    "coerce_date",
    "TaskType",
    "ProjectStatus",
    "ResourceUnit",
    "Granularity",
    "ConflictSeverity",
    "Task",
    "Project",
    "ResourceRequirement",
    "ResourcePoolItem",
    "TeamMember",
]
