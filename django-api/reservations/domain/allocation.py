"""First-fit assignment of a projector to a reservation request.

The decision is pure: given the day's reservations and the active projectors
it either names the projector to use or raises a domain error. Persisting the
result is the caller's job.
"""

from collections.abc import Iterable, Sequence
from datetime import date, datetime

from reservations.domain.errors import NoProjectorAvailableError, SelfConflictError
from reservations.domain.models import Projector, Reservation
from reservations.domain.value_objects import ProjectorId, SlotSet, UserId


def find_self_conflict(
    requested: SlotSet, user_id: UserId, reservations_on_date: Iterable[Reservation]
) -> tuple[int, ...]:
    """Return the requested slot ids the user already holds, ascending."""
    held: set[int] = set()
    for reservation in reservations_on_date:
        if reservation.user_id == user_id:
            held.update(requested.overlap(reservation.slots))
    return tuple(sorted(held))


def order_candidates(projectors: Iterable[Projector]) -> list[Projector]:
    """Active projectors, longest-registered first.

    A missing created_at sorts as oldest; equal timestamps keep input order.
    """
    active = [p for p in projectors if p.is_active]
    return sorted(active, key=_registration_key)


def _registration_key(projector: Projector) -> tuple[bool, datetime]:
    if projector.created_at is None:
        return (False, datetime.min)
    return (True, projector.created_at)


def build_occupancy(reservations: Iterable[Reservation]) -> dict[ProjectorId, set[int]]:
    """Map each projector to the slot ids already booked on it."""
    occupancy: dict[ProjectorId, set[int]] = {}
    for reservation in reservations:
        if reservation.projector_id is None:
            continue
        occupancy.setdefault(reservation.projector_id, set()).update(reservation.slots)
    return occupancy


def choose_projector(
    requested: SlotSet,
    candidates: Sequence[Projector],
    occupancy: dict[ProjectorId, set[int]],
) -> Projector | None:
    """First candidate free for every requested slot, or None."""
    for projector in candidates:
        booked = occupancy.get(projector.id)
        if not booked or not requested.overlap(booked):
            return projector
    return None


def allocate(
    on_date: date,
    requested: SlotSet,
    user_id: UserId,
    active_projectors: Sequence[Projector],
    reservations_on_date: Sequence[Reservation],
) -> Projector:
    """Pick the projector a new reservation should be bound to.

    Raises:
        SelfConflictError: If the user already holds a requested slot that day.
        NoProjectorAvailableError: If no projector is free for all requested slots.
    """
    same_day = [r for r in reservations_on_date if r.date == on_date]

    conflicting = find_self_conflict(requested, user_id, same_day)
    if conflicting:
        raise SelfConflictError(conflicting)

    projector = choose_projector(
        requested, order_candidates(active_projectors), build_occupancy(same_day)
    )
    if projector is None:
        raise NoProjectorAvailableError()
    return projector
