"""
Identity for domain objects.

Assignments, invitations and progress events keep their identity while their
state changes, so they compare by id rather than by attributes.
"""

from abc import ABC
from dataclasses import dataclass
from typing import Generic, Self, TypeVar


@dataclass(frozen=True, order=True)
class EntityId:
    """
    Strongly-typed integer identifier.

    ``TopicId(3)`` and ``JourneyId(3)`` are different types and never compare
    equal. ``0`` stands for a row the database has not numbered yet.
    """

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError(f"{type(self).__name__} must be non-negative, got {self.value}")

    def __str__(self) -> str:
        return str(self.value)

    @classmethod
    def generate(cls) -> Self:
        return cls(0)

    @property
    def is_transient(self) -> bool:
        """True until the repository has saved the entity."""
        return self.value == 0


IdType = TypeVar("IdType", bound=EntityId)


class Entity(ABC, Generic[IdType]):
    """Mixin for dataclass entities: equality and hashing follow ``id`` only."""

    id: IdType

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and self.id == other.id  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.id))
