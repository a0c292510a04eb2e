"""Reservation service - availability, allocation and cancellation.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
from collections.abc import Callable
from datetime import datetime

from reservations.domain import (
    Actor,
    Reservation,
    ReservationId,
    SlotAvailability,
    UserReservation,
)
from reservations.domain.allocation import allocate
from reservations.domain.availability import UNKNOWN_PROJECTOR_NAME, compute_availability
from reservations.domain.errors import (
    ForbiddenError,
    NoProjectorAvailableError,
    ReservationNotFoundError,
)
from reservations.services.parsing import parse_date, parse_id, parse_slots
from reservations.stores.interfaces import (
    ProjectorStore,
    ReservationStore,
    SlotAlreadyBookedError,
    UserDirectory,
)

logger = logging.getLogger(__name__)

DEFAULT_ALLOCATION_ATTEMPTS = 3


def _local_now() -> datetime:
    return datetime.now().astimezone()


class ReservationService:
    """Service for projector reservation operations."""

    def __init__(
        self,
        reservations: ReservationStore,
        projectors: ProjectorStore,
        users: UserDirectory,
        *,
        clock: Callable[[], datetime] = _local_now,
        allocation_attempts: int = DEFAULT_ALLOCATION_ATTEMPTS,
    ) -> None:
        self._reservations = reservations
        self._projectors = projectors
        self._users = users
        self._clock = clock
        self._allocation_attempts = max(1, allocation_attempts)

    def get_availability(
        self, on_date: object, actor: Actor, include_details: bool = False
    ) -> list[SlotAvailability]:
        """Return occupancy for every catalog slot on a date.

        Raises:
            InvalidRequestError: If the date is missing or malformed.
        """
        day = parse_date(on_date)
        active = self._projectors.list_active_projectors()
        reservations = self._reservations.list_for_date(day)

        users = None
        projector_names = None
        if include_details:
            users = self._users.get_users({r.user_id for r in reservations})
            projector_names = self._projectors.get_projector_names(
                {r.projector_id for r in reservations if r.projector_id is not None}
            )

        return compute_availability(
            day,
            actor.user_id,
            active,
            reservations,
            include_details=include_details,
            users=users,
            projector_names=projector_names,
        )

    def create_reservation(self, on_date: object, slots: object, actor: Actor) -> Reservation:
        """Bind one projector to every requested slot and persist the reservation.

        Raises:
            InvalidRequestError: If the date or slot list is missing or malformed.
            SelfConflictError: If the actor already holds a requested slot that day.
            NoProjectorAvailableError: If no single projector is free for all slots.
        """
        day = parse_date(on_date)
        requested = parse_slots(slots)

        for attempt in range(1, self._allocation_attempts + 1):
            with self._reservations.allocation_scope(day):
                reservations = self._reservations.list_for_date(day)
                active = self._projectors.list_active_projectors()
                try:
                    projector = allocate(day, requested, actor.user_id, active, reservations)
                except NoProjectorAvailableError:
                    logger.info(
                        "No projector free on %s for slots %s (user %s)",
                        day,
                        list(requested.values),
                        actor.user_id,
                    )
                    raise
                try:
                    reservation = self._reservations.add_reservation(
                        day, requested, actor.user_id, projector.id
                    )
                except SlotAlreadyBookedError:
                    logger.warning(
                        "Allocation race on %s for slots %s (attempt %d of %d)",
                        day,
                        list(requested.values),
                        attempt,
                        self._allocation_attempts,
                    )
                    continue
            logger.info(
                "Reservation %s created: %s slots %s on projector %s for user %s",
                reservation.id,
                day,
                list(requested.values),
                projector.id,
                actor.user_id,
            )
            return reservation

        raise NoProjectorAvailableError()

    def cancel_reservation(self, reservation_id: object, actor: Actor) -> None:
        """Delete a reservation on behalf of its owner or an administrator.

        Raises:
            InvalidRequestError: If the reservation_id is not a valid UUID.
            ReservationNotFoundError: If the reservation does not exist.
            ForbiddenError: If the actor neither owns it nor is an administrator.
        """
        rid = parse_id(ReservationId, reservation_id, "reservation")
        reservation = self._reservations.get_reservation(rid)
        if reservation is None:
            raise ReservationNotFoundError(str(rid))
        if reservation.user_id != actor.user_id and not actor.is_admin:
            raise ForbiddenError("You are not allowed to cancel this reservation")
        if not self._reservations.delete_reservation(rid):
            raise ReservationNotFoundError(str(rid))
        logger.info("Reservation %s cancelled by %s (%s)", rid, actor.user_id, actor.role.value)

    def list_user_reservations(
        self, actor: Actor, from_date: object = None
    ) -> list[UserReservation]:
        """Return the actor's reservations from a date on (today by default).

        Ordered by date, then first slot.
        """
        now = self._clock()
        start = parse_date(from_date, "from") if from_date else now.date()
        reservations = sorted(
            self._reservations.list_for_user(actor.user_id, start),
            key=lambda r: (r.date, r.slots.first),
        )
        names = self._projectors.get_projector_names(
            {r.projector_id for r in reservations if r.projector_id is not None}
        )
        return [
            UserReservation(
                reservation=r,
                projector_name=names.get(r.projector_id, UNKNOWN_PROJECTOR_NAME),
                expired=r.is_expired(now),
            )
            for r in reservations
        ]
