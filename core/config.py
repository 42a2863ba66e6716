from __future__ import annotations

import os
from dataclasses import dataclass

from core.domain.enums import Granularity
from core.exceptions import ValidationError


@dataclass(frozen=True)
class EngineConfig:
    bucket_count: int = 12
    bucket_granularity: Granularity = Granularity.MONTH
    days_per_month: int = 30
    load_workers: int = 1
    log_level: str = "INFO"


def _env_int(name: str, default: int, *, minimum: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValidationError(f"{name} must be an integer, got {raw!r}.", code="CONFIG_INVALID") from None
    if value < minimum:
        raise ValidationError(f"{name} must be >= {minimum}, got {value}.", code="CONFIG_INVALID")
    return value


def _env_granularity(name: str, default: Granularity) -> Granularity:
    raw = (os.getenv(name) or "").strip().lower()
    if not raw:
        return default
    try:
        return Granularity(raw)
    except ValueError:
        allowed = ", ".join(g.value for g in Granularity)
        raise ValidationError(
            f"{name} must be one of {allowed}, got {raw!r}.",
            code="CONFIG_INVALID",
        ) from None


_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_log_level(name: str, default: str) -> str:
    raw = (os.getenv(name) or "").strip().upper()
    if not raw:
        return default
    if raw not in _LOG_LEVELS:
        raise ValidationError(
            f"{name} must be one of {', '.join(_LOG_LEVELS)}, got {raw!r}.",
            code="CONFIG_INVALID",
        )
    return raw


def load_engine_config() -> EngineConfig:
    """Read PM_* environment variables; unset variables keep their defaults."""
    defaults = EngineConfig()
    return EngineConfig(
        bucket_count=_env_int("PM_BUCKET_COUNT", defaults.bucket_count, minimum=1),
        bucket_granularity=_env_granularity("PM_BUCKET_GRANULARITY", defaults.bucket_granularity),
        days_per_month=_env_int("PM_DAYS_PER_MONTH", defaults.days_per_month, minimum=1),
        load_workers=_env_int("PM_LOAD_WORKERS", defaults.load_workers, minimum=1),
        log_level=_env_log_level("PM_LOG_LEVEL", defaults.log_level),
    )


__all__ = ["EngineConfig", "load_engine_config"]
