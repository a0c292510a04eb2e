"""Domain primitives that enforce validity at creation time."""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Self
from uuid import UUID


@dataclass(frozen=True)
class ProjectorId:
    """Unique identifier for a Projector."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class ReservationId:
    """Unique identifier for a Reservation."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class UserId:
    """Unique identifier for a User."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


class Role(Enum):
    """What a user is allowed to do."""

    PROFESSOR = "professor"
    ADMIN = "admin"


class ProjectorStatus(Enum):
    """Whether a projector takes part in allocation."""

    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


class Period(Enum):
    """Half of the school day a slot belongs to. Display only."""

    MORNING = "morning"
    AFTERNOON = "afternoon"


@dataclass(frozen=True)
class SlotSet:
    """Non-empty set of slot ids, kept sorted ascending."""

    values: tuple[int, ...]

    def __post_init__(self) -> None:
        if not self.values:
            raise ValueError("A reservation needs at least one slot")
        if any(isinstance(v, bool) or not isinstance(v, int) for v in self.values):
            raise ValueError("Slot ids must be integers")
        if any(v <= 0 for v in self.values):
            raise ValueError("Slot ids must be positive")
        if list(self.values) != sorted(set(self.values)):
            raise ValueError("Slot ids must be unique and sorted")

    @classmethod
    def of(cls, slot_ids: Iterable[int]) -> Self:
        """Build a SlotSet from any iterable, dropping duplicates."""
        return cls(values=tuple(sorted(set(slot_ids))))

    @property
    def first(self) -> int:
        return self.values[0]

    @property
    def last(self) -> int:
        return self.values[-1]

    def overlap(self, other: Iterable[int]) -> tuple[int, ...]:
        """Return the slot ids present in both sets, ascending."""
        return tuple(sorted(set(self.values).intersection(other)))

    def __contains__(self, slot_id: object) -> bool:
        return slot_id in self.values

    def __iter__(self):
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)
