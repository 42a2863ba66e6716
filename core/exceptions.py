# core/exceptions.py
from __future__ import annotations

from typing import Sequence


class DomainError(Exception):
    """Base class for domain-level errors."""
    def __init__(self, message: str, *, code: str | None = None):
        super().__init__(message)
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Raised when call arguments or configuration are invalid."""


class BusinessRuleError(DomainError):
    """Raised when business rules are violated (e.g., circular dependencies)."""


class CyclicDependencyError(BusinessRuleError):
    """
    Raised when a dependency cycle makes a topological ordering impossible.
    Carries one task id on the cycle and, when known, the full cycle path.
    """

    def __init__(
        self,
        message: str,
        *,
        task_id: str,
        cycle_path: Sequence[str] | None = None,
        code: str = "SCHEDULE_CYCLE",
    ):
        super().__init__(message, code=code)
        self.task_id = task_id
        self.cycle_path: tuple[str, ...] = tuple(cycle_path or (task_id,))


__all__ = [
    "DomainError",
    "ValidationError",
    "BusinessRuleError",
    "CyclicDependencyError",
]
