from reservations.domain.models import (
    Actor,
    Projector,
    ReportRecord,
    Reservation,
    ReservationDetail,
    SlotAvailability,
    UserProfile,
    UserReservation,
)
from reservations.domain.schedule import SCHEDULE_SLOTS, Slot
from reservations.domain.value_objects import (
    Period,
    ProjectorId,
    ProjectorStatus,
    ReservationId,
    Role,
    SlotSet,
    UserId,
)

__all__ = [
    "Actor",
    "Projector",
    "ReportRecord",
    "Reservation",
    "ReservationDetail",
    "SlotAvailability",
    "UserProfile",
    "UserReservation",
    "SCHEDULE_SLOTS",
    "Slot",
    "Period",
    "ProjectorId",
    "ProjectorStatus",
    "ReservationId",
    "Role",
    "SlotSet",
    "UserId",
]
