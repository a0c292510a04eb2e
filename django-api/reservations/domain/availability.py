"""Per-slot occupancy for a single date.

Everything here is a pure function of its inputs. Callers fetch projectors and
reservations fresh for each computation; nothing is cached between calls.
"""

from collections.abc import Mapping, Sequence
from datetime import date

from reservations.domain.models import (
    Projector,
    Reservation,
    ReservationDetail,
    SlotAvailability,
    UserProfile,
)
from reservations.domain.schedule import SCHEDULE_SLOTS
from reservations.domain.value_objects import ProjectorId, UserId

UNKNOWN_USER_NAME = "Unknown"
UNKNOWN_AREA = "N/A"
UNKNOWN_PROJECTOR_NAME = "Unknown"


def compute_availability(
    on_date: date,
    requesting_user_id: UserId,
    active_projectors: Sequence[Projector],
    reservations_on_date: Sequence[Reservation],
    *,
    include_details: bool = False,
    users: Mapping[UserId, UserProfile] | None = None,
    projector_names: Mapping[ProjectorId, str] | None = None,
) -> list[SlotAvailability]:
    """Return one SlotAvailability per catalog slot, in catalog order.

    Only reservations held on one of ``active_projectors`` count toward
    ``reserved_count``, the same occupancy the allocator sees. Reservations
    whose projector was deleted or retired still show up in the details and
    in ``is_reserved_by_user``. Reservations dated on another day are ignored.
    ``users`` and ``projector_names`` are only consulted when
    ``include_details`` is set.
    """
    total = len(active_projectors)
    active_ids = {p.id for p in active_projectors}
    same_day = [r for r in reservations_on_date if r.date == on_date]
    users = users or {}
    projector_names = projector_names or {}

    result = []
    for slot in SCHEDULE_SLOTS:
        touching = [r for r in same_day if slot.id in r.slots]
        reserved = sum(1 for r in touching if r.projector_id in active_ids)
        details = None
        if include_details:
            details = tuple(_detail(r, users, projector_names) for r in touching)
        result.append(
            SlotAvailability(
                slot=slot,
                reserved_count=reserved,
                available_count=max(0, total - reserved),
                total_projectors=total,
                is_reserved_by_user=any(r.user_id == requesting_user_id for r in touching),
                reservations=details,
            )
        )
    return result


def _detail(
    reservation: Reservation,
    users: Mapping[UserId, UserProfile],
    projector_names: Mapping[ProjectorId, str],
) -> ReservationDetail:
    user = users.get(reservation.user_id)
    projector_name = UNKNOWN_PROJECTOR_NAME
    if reservation.projector_id is not None:
        projector_name = projector_names.get(reservation.projector_id, UNKNOWN_PROJECTOR_NAME)
    return ReservationDetail(
        reservation_id=reservation.id,
        user_name=user.name if user else UNKNOWN_USER_NAME,
        user_area=(user.area or UNKNOWN_AREA) if user else UNKNOWN_AREA,
        projector_name=projector_name,
    )
