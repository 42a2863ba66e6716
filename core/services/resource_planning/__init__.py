from .buckets import buckets_for_range, generate_time_buckets
from .conflicts import (
    check_project_resource_conflicts,
    critical_assignments_by_resource,
    detect_resource_conflicts,
)
from .load import calculate_resource_load, get_resource_availability
from .models import (
    BucketAllocation,
    ConflictingProject,
    PortfolioAnalysis,
    ProjectAllocation,
    ResourceAvailability,
    ResourceConflict,
    ResourceLoad,
    ResourceLoadReport,
    TimeBucket,
)
from .service import ResourcePlanningService

__all__ = [
    "ResourcePlanningService",
    "TimeBucket",
    "BucketAllocation",
    "ProjectAllocation",
    "ResourceLoad",
    "ResourceLoadReport",
    "ResourceConflict",
    "ConflictingProject",
    "ResourceAvailability",
    "PortfolioAnalysis",
    "generate_time_buckets",
    "buckets_for_range",
    "calculate_resource_load",
    "get_resource_availability",
    "detect_resource_conflicts",
    "critical_assignments_by_resource",
    "check_project_resource_conflicts",
]
