from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator


@dataclass(frozen=True)
class EngineWarning:
    code: str
    message: str
    entity_id: str | None = None


@dataclass(frozen=True)
class MissingReferenceWarning(EngineWarning):
    """A dependency or resource id that does not resolve; the edge/requirement is skipped."""


@dataclass(frozen=True)
class InvalidDateRangeWarning(EngineWarning):
    """Null, inverted or unparseable dates; the entity is left out of date-based math."""


@dataclass(frozen=True)
class InvalidValueWarning(EngineWarning):
    """An out-of-range value that was clamped or an unknown enum value that was skipped."""


class WarningCollector:
    """
    Accumulates soft errors for one computation and mirrors them to a logger.
    An identical warning (same type, code, entity and message) is reported once.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(__name__)
        self._items: list[EngineWarning] = []
        self._seen: set[tuple[type, str, str | None, str]] = set()

    def _accept(self, warning: EngineWarning) -> bool:
        key = (type(warning), warning.code, warning.entity_id, warning.message)
        if key in self._seen:
            return False
        self._seen.add(key)
        self._items.append(warning)
        return True

    def add(self, warning: EngineWarning) -> None:
        if self._accept(warning):
            self._logger.warning("%s: %s", warning.code, warning.message)

    def extend(self, warnings: Iterable[EngineWarning]) -> None:
        """Merge warnings another collector already logged; they are not logged again."""
        for warning in warnings:
            self._accept(warning)

    def missing_reference(self, code: str, message: str, entity_id: str | None = None) -> None:
        self.add(MissingReferenceWarning(code=code, message=message, entity_id=entity_id))

    def invalid_dates(self, code: str, message: str, entity_id: str | None = None) -> None:
        self.add(InvalidDateRangeWarning(code=code, message=message, entity_id=entity_id))

    def invalid_value(self, code: str, message: str, entity_id: str | None = None) -> None:
        self.add(InvalidValueWarning(code=code, message=message, entity_id=entity_id))

    def as_tuple(self) -> tuple[EngineWarning, ...]:
        return tuple(self._items)

    def __iter__(self) -> Iterator[EngineWarning]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)


__all__ = [
    "EngineWarning",
    "MissingReferenceWarning",
    "InvalidDateRangeWarning",
    "InvalidValueWarning",
    "WarningCollector",
]
