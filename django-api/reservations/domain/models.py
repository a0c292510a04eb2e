"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in reservations/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import date, datetime, tzinfo

from reservations.domain.schedule import Slot, get_slot
from reservations.domain.value_objects import (
    ProjectorId,
    ProjectorStatus,
    ReservationId,
    Role,
    SlotSet,
    UserId,
)


@dataclass(frozen=True)
class Projector:
    """Domain representation of a Projector."""

    id: ProjectorId
    name: str
    status: ProjectorStatus
    created_at: datetime | None

    @property
    def is_active(self) -> bool:
        return self.status is ProjectorStatus.AVAILABLE


@dataclass(frozen=True)
class Reservation:
    """Domain representation of a Reservation."""

    id: ReservationId
    date: date
    slots: SlotSet
    user_id: UserId
    projector_id: ProjectorId | None
    created_at: datetime

    def ends_at(self, tz: tzinfo | None = None) -> datetime:
        """Wall-clock end of the last reserved slot."""
        return datetime.combine(self.date, get_slot(self.slots.last).end_time, tzinfo=tz)

    def is_expired(self, now: datetime) -> bool:
        return now >= self.ends_at(now.tzinfo)


@dataclass(frozen=True)
class UserProfile:
    """Domain representation of a registered user."""

    id: UserId
    name: str
    email: str
    area: str
    role: Role


@dataclass(frozen=True)
class Actor:
    """The authenticated caller of a service operation."""

    user_id: UserId
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


@dataclass(frozen=True)
class ReservationDetail:
    """Who holds a reservation touching a slot, and on which projector."""

    reservation_id: ReservationId
    user_name: str
    user_area: str
    projector_name: str


@dataclass(frozen=True)
class SlotAvailability:
    """Occupancy of one catalog slot on one date."""

    slot: Slot
    reserved_count: int
    available_count: int
    total_projectors: int
    is_reserved_by_user: bool
    reservations: tuple[ReservationDetail, ...] | None = None


@dataclass(frozen=True)
class UserReservation:
    """A reservation as shown to its owner."""

    reservation: Reservation
    projector_name: str
    expired: bool


@dataclass(frozen=True)
class ReportRecord:
    """One row of the administrative reservation report."""

    reservation_id: ReservationId
    date: date
    slots: SlotSet
    user_name: str
    user_area: str
    user_email: str | None
    projector_name: str
    created_at: datetime
