from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Iterable, Optional

from dateutil.relativedelta import relativedelta

from core.domain import Granularity, Project
from core.exceptions import ValidationError
from core.services.resource_planning.models import TimeBucket
from core.services.resource_planning.units import DEFAULT_DAYS_PER_MONTH, requirement_end

logger = logging.getLogger(__name__)


def as_granularity(value: Granularity | str) -> Granularity:
    if isinstance(value, Granularity):
        return value
    try:
        return Granularity(str(value).strip().lower())
    except ValueError:
        raise ValidationError(
            f"Unknown bucket granularity: {value!r}.",
            code="BUCKET_GRANULARITY_INVALID",
        ) from None


def period_start(day: date, granularity: Granularity) -> date:
    if granularity == Granularity.DAY:
        return day
    if granularity == Granularity.WEEK:
        return day - timedelta(days=day.weekday())
    if granularity == Granularity.MONTH:
        return day.replace(day=1)
    if granularity == Granularity.QUARTER:
        return date(day.year, 3 * ((day.month - 1) // 3) + 1, 1)
    raise ValueError(f"Unsupported granularity: {granularity!r}")


def _step(granularity: Granularity) -> timedelta | relativedelta:
    if granularity == Granularity.DAY:
        return timedelta(days=1)
    if granularity == Granularity.WEEK:
        return timedelta(weeks=1)
    if granularity == Granularity.MONTH:
        return relativedelta(months=1)
    if granularity == Granularity.QUARTER:
        return relativedelta(months=3)
    raise ValueError(f"Unsupported granularity: {granularity!r}")


def period_label(start: date, granularity: Granularity) -> str:
    if granularity == Granularity.DAY:
        return start.isoformat()
    if granularity == Granularity.WEEK:
        iso_year, iso_week, _ = start.isocalendar()
        return f"{iso_year}-W{iso_week:02d}"
    if granularity == Granularity.MONTH:
        return f"{start.year}-{start.month:02d}"
    if granularity == Granularity.QUARTER:
        return f"{start.year}-Q{(start.month - 1) // 3 + 1}"
    raise ValueError(f"Unsupported granularity: {granularity!r}")


def buckets_for_range(start: date, end: date, granularity: Granularity | str) -> tuple[TimeBucket, ...]:
    """Consecutive, non-overlapping periods from the one containing `start` to the one containing `end`."""
    granularity = as_granularity(granularity)
    step = _step(granularity)
    current = period_start(start, granularity)
    buckets: list[TimeBucket] = []
    while current <= end:
        following = current + step
        buckets.append(
            TimeBucket(
                label=period_label(current, granularity),
                period_start=current,
                period_end=following - timedelta(days=1),
                granularity=granularity,
            )
        )
        current = following
    return tuple(buckets)


def _last_demand_day(project: Project, days_per_month: int) -> date:
    """Latest day the project occupies: its end date or the end of its longest requirement window."""
    last = project.end_date
    for requirement in project.resource_requirements:
        end = requirement_end(project.start_date, requirement.duration, requirement.unit, days_per_month)
        if end > project.start_date:
            last = max(last, end - timedelta(days=1))
    return last


def generate_time_buckets(
    projects: Iterable[Project],
    count: int,
    granularity: Granularity | str,
    *,
    today: Optional[date] = None,
    days_per_month: int = DEFAULT_DAYS_PER_MONTH,
) -> tuple[TimeBucket, ...]:
    """
    `count` periods starting at the current one, widened (never narrowed) so the
    full date range of every project with usable dates falls inside the horizon,
    including requirement windows that run past the project's end date.
    """
    granularity = as_granularity(granularity)
    count = max(1, int(count))
    anchor = period_start(today or date.today(), granularity)

    start = anchor
    end = anchor
    for _ in range(count - 1):
        end = end + _step(granularity)

    dated = [p for p in projects if p.has_valid_dates]
    if dated:
        start = min(start, min(p.start_date for p in dated))
        end = max(end, max(_last_demand_day(p, days_per_month) for p in dated))

    buckets = buckets_for_range(start, end, granularity)
    logger.debug(
        "Generated %s %s buckets from %s to %s",
        len(buckets),
        granularity.value,
        buckets[0].period_start,
        buckets[-1].period_end,
    )
    return buckets


__all__ = [
    "as_granularity",
    "period_start",
    "period_label",
    "buckets_for_range",
    "generate_time_buckets",
]
