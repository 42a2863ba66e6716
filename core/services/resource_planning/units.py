from __future__ import annotations

from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

from core.domain import ResourceUnit

DEFAULT_DAYS_PER_MONTH = 30


def months_equivalent(duration: float, unit: ResourceUnit, days_per_month: int = DEFAULT_DAYS_PER_MONTH) -> float:
    """Requirement duration on the month basis used by resource requirements."""
    duration = max(0.0, float(duration or 0.0))
    if unit == ResourceUnit.DAY:
        return duration / days_per_month
    if unit == ResourceUnit.MONTH:
        return duration
    if unit == ResourceUnit.YEAR:
        return duration * 12
    raise ValueError(f"Unsupported resource unit: {unit!r}")


def requirement_end(
    start: date,
    duration: float,
    unit: ResourceUnit,
    days_per_month: int = DEFAULT_DAYS_PER_MONTH,
) -> date:
    """
    Exclusive end of a requirement window: start + normalized duration.
    Whole months use calendar month arithmetic; the fractional rest is converted back to days.
    """
    months = months_equivalent(duration, unit, days_per_month)
    whole = int(months)
    rest_days = round((months - whole) * days_per_month)
    return start + relativedelta(months=whole) + timedelta(days=rest_days)


__all__ = ["DEFAULT_DAYS_PER_MONTH", "months_equivalent", "requirement_end"]
