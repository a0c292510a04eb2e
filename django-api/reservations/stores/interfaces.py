"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import date

from reservations.domain import (
    Projector,
    ProjectorId,
    ProjectorStatus,
    Reservation,
    ReservationId,
    Role,
    SlotSet,
    UserId,
    UserProfile,
)


class SlotAlreadyBookedError(Exception):
    """Raised by a store when a write would double-book a projector or user slot."""


class DuplicateEmailError(Exception):
    """Raised by a user directory when the email is already in use."""


class ProjectorStore(ABC):
    """Interface for projector persistence operations."""

    @abstractmethod
    def list_projectors(self) -> list[Projector]:
        """Return all projectors ordered by name."""
        ...

    @abstractmethod
    def list_active_projectors(self) -> list[Projector]:
        """Return projectors with status available, in registration order.

        Ordered by created_at with missing timestamps first, then by insertion.
        """
        ...

    @abstractmethod
    def get_projector(self, projector_id: ProjectorId) -> Projector | None:
        """Return a projector by ID, or None if not found."""
        ...

    @abstractmethod
    def get_projector_names(self, projector_ids: set[ProjectorId]) -> dict[ProjectorId, str]:
        """Return names for the projectors that still exist."""
        ...

    @abstractmethod
    def create_projector(self, name: str, status: ProjectorStatus) -> Projector:
        ...

    @abstractmethod
    def update_projector(
        self, projector_id: ProjectorId, name: str, status: ProjectorStatus | None = None
    ) -> Projector | None:
        """Rename a projector (and optionally change its status), or None if not found."""
        ...

    @abstractmethod
    def delete_projector(self, projector_id: ProjectorId) -> bool:
        """Delete a projector. Returns False if it did not exist."""
        ...

    @abstractmethod
    def has_projectors(self) -> bool:
        ...


class ReservationStore(ABC):
    """Interface for reservation persistence operations."""

    @abstractmethod
    def list_for_date(self, on_date: date) -> list[Reservation]:
        """Return every reservation on a date."""
        ...

    @abstractmethod
    def list_for_user(self, user_id: UserId, from_date: date) -> list[Reservation]:
        """Return a user's reservations on or after from_date."""
        ...

    @abstractmethod
    def list_between(self, start: date, end: date) -> list[Reservation]:
        """Return reservations with start <= date <= end."""
        ...

    @abstractmethod
    def get_reservation(self, reservation_id: ReservationId) -> Reservation | None:
        """Return a reservation by ID, or None if not found."""
        ...

    @abstractmethod
    def add_reservation(
        self,
        on_date: date,
        slots: SlotSet,
        user_id: UserId,
        projector_id: ProjectorId,
    ) -> Reservation:
        """Persist a new reservation.

        Raises:
            SlotAlreadyBookedError: If the projector or the user already holds
                one of the slots on that date.
        """
        ...

    @abstractmethod
    def delete_reservation(self, reservation_id: ReservationId) -> bool:
        """Delete a reservation. Returns False if it did not exist."""
        ...

    @abstractmethod
    def allocation_scope(self, on_date: date) -> AbstractContextManager[None]:
        """Context in which reading a day's occupancy and writing to it is isolated."""
        ...


class UserDirectory(ABC):
    """Interface for user lookups and account persistence."""

    @abstractmethod
    def list_users(self) -> list[UserProfile]:
        """Return all users ordered by name."""
        ...

    @abstractmethod
    def get_users(self, user_ids: set[UserId]) -> dict[UserId, UserProfile]:
        """Return profiles for the users that still exist."""
        ...

    @abstractmethod
    def get_user(self, user_id: UserId) -> UserProfile | None:
        ...

    @abstractmethod
    def create_user(
        self, name: str, email: str, password: str, area: str, role: Role
    ) -> UserProfile:
        """Register a user whose login is their email.

        Raises:
            DuplicateEmailError: If the email is already registered.
        """
        ...

    @abstractmethod
    def update_profile(
        self, user_id: UserId, name: str, area: str | None = None
    ) -> UserProfile | None:
        """Update a user's name and, when given, area. None if not found."""
        ...
