"""Administrative reservation reports."""

from reservations.domain import Actor, ReportRecord
from reservations.domain.availability import (
    UNKNOWN_AREA,
    UNKNOWN_PROJECTOR_NAME,
    UNKNOWN_USER_NAME,
)
from reservations.domain.errors import ForbiddenError, InvalidRequestError
from reservations.services.parsing import parse_date
from reservations.stores.interfaces import ProjectorStore, ReservationStore, UserDirectory


class ReportService:
    """Read-only aggregation of reservations over a date range."""

    def __init__(
        self,
        reservations: ReservationStore,
        projectors: ProjectorStore,
        users: UserDirectory,
    ) -> None:
        self._reservations = reservations
        self._projectors = projectors
        self._users = users

    def generate_report(
        self,
        start_date: object,
        end_date: object,
        actor: Actor,
        area: str | None = None,
        professor_name: str | None = None,
    ) -> list[ReportRecord]:
        """Return reservations between two dates (inclusive), ordered by date then first slot.

        ``area`` must match exactly; ``professor_name`` is a case-insensitive
        substring of the user's name.

        Raises:
            ForbiddenError: If the actor is not an administrator.
            InvalidRequestError: If a date is missing, malformed or the range is reversed.
        """
        if not actor.is_admin:
            raise ForbiddenError("Only administrators can generate reports")
        start = parse_date(start_date, "startDate")
        end = parse_date(end_date, "endDate")
        if start > end:
            raise InvalidRequestError("startDate must not be after endDate")

        reservations = self._reservations.list_between(start, end)
        users = self._users.get_users({r.user_id for r in reservations})
        names = self._projectors.get_projector_names(
            {r.projector_id for r in reservations if r.projector_id is not None}
        )
        needle = professor_name.lower() if professor_name else None

        records = []
        for r in reservations:
            user = users.get(r.user_id)
            if area and (user is None or user.area != area):
                continue
            if needle and needle not in (user.name if user else "").lower():
                continue
            records.append(
                ReportRecord(
                    reservation_id=r.id,
                    date=r.date,
                    slots=r.slots,
                    user_name=user.name if user else UNKNOWN_USER_NAME,
                    user_area=(user.area or UNKNOWN_AREA) if user else UNKNOWN_AREA,
                    user_email=user.email if user else None,
                    projector_name=names.get(r.projector_id, UNKNOWN_PROJECTOR_NAME),
                    created_at=r.created_at,
                )
            )
        records.sort(key=lambda rec: (rec.date, rec.slots.first))
        return records
