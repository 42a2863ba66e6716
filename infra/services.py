from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from core.config import EngineConfig, load_engine_config
from core.services.resource_planning import ResourcePlanningService
from core.services.scheduling import SchedulingEngine
from infra.logging_config import setup_logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineServices:
    config: EngineConfig
    scheduling_engine: SchedulingEngine
    resource_planning_service: ResourcePlanningService

    def as_dict(self) -> dict[str, Any]:
        return {
            "config": self.config,
            "scheduling_engine": self.scheduling_engine,
            "resource_planning_service": self.resource_planning_service,
        }


def build_engine_services(config: EngineConfig | None = None) -> EngineServices:
    config = config or load_engine_config()
    scheduling_engine = SchedulingEngine()
    resource_planning_service = ResourcePlanningService(
        config=config,
        scheduling_engine=scheduling_engine,
    )
    return EngineServices(
        config=config,
        scheduling_engine=scheduling_engine,
        resource_planning_service=resource_planning_service,
    )


def build_service_dict(config: EngineConfig | None = None) -> dict[str, Any]:
    return build_engine_services(config).as_dict()


def bootstrap(config: EngineConfig | None = None, *, log_dir: Path | str | None = None) -> EngineServices:
    """Process start-up for a host embedding the engine: logging first, then the services."""
    config = config or load_engine_config()
    setup_logging(log_dir, level=config.log_level)
    services = build_engine_services(config)
    logger.info(
        "Engine services ready (buckets=%s x %s, load workers=%s)",
        config.bucket_count,
        config.bucket_granularity.value,
        config.load_workers,
    )
    return services


__all__ = ["EngineServices", "bootstrap", "build_engine_services", "build_service_dict"]
