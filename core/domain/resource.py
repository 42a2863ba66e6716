from __future__ import annotations

from dataclasses import dataclass

from core.domain.identifiers import generate_id


@dataclass(frozen=True)
class TeamMember:
    id: str
    name: str
    role: str = ""
    availability: float = 100.0
    skills: tuple[str, ...] = ()


@dataclass(frozen=True)
class ResourcePoolItem:
    id: str
    name: str
    total_quantity: float = 0.0
    members: tuple[TeamMember, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "members", tuple(self.members or ()))

    @property
    def capacity(self) -> float:
        return max(0.0, float(self.total_quantity or 0.0))

    @staticmethod
    def create(name: str, total_quantity: float = 0.0, **extra) -> "ResourcePoolItem":
        return ResourcePoolItem(
            id=generate_id(),
            name=name,
            total_quantity=total_quantity,
            **extra,
        )


__all__ = ["ResourcePoolItem", "TeamMember"]
