"""Django ORM implementation of the reservation stores.

Rows are turned into validated domain records here, once, so nothing above
this layer has to guess at the shape of stored data.
"""

import logging
from contextlib import AbstractContextManager
from datetime import date

from django.db import IntegrityError, transaction
from django.db.models import F

from reservations import models
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
from reservations.domain.schedule import is_known_slot
from reservations.stores.interfaces import (
    DuplicateEmailError,
    ProjectorStore,
    ReservationStore,
    SlotAlreadyBookedError,
    UserDirectory,
)

logger = logging.getLogger(__name__)


def _to_projector(row: models.Projector) -> Projector:
    return Projector(
        id=ProjectorId(row.id),
        name=row.name,
        status=ProjectorStatus(row.status),
        created_at=row.created_at,
    )


def _normalize_slots(row: models.Reservation) -> SlotSet | None:
    """Read both the slots list and the legacy single-slot column."""
    raw = row.slots
    if not raw and row.slot is not None:
        raw = [row.slot]
    if not isinstance(raw, list):
        raw = []
    known = [s for s in raw if isinstance(s, int) and not isinstance(s, bool) and is_known_slot(s)]
    if len(known) != len(raw):
        logger.warning("Reservation %s has unknown slot ids %r", row.id, raw)
    if not known:
        return None
    return SlotSet.of(known)


def _to_reservation(row: models.Reservation) -> Reservation | None:
    slots = _normalize_slots(row)
    if slots is None:
        logger.warning("Skipping reservation %s with no usable slots", row.id)
        return None
    return Reservation(
        id=ReservationId(row.id),
        date=row.date,
        slots=slots,
        user_id=UserId(row.user_id),
        projector_id=ProjectorId(row.projector_id) if row.projector_id else None,
        created_at=row.created_at,
    )


def _to_reservations(rows) -> list[Reservation]:
    result = []
    for row in rows:
        reservation = _to_reservation(row)
        if reservation is not None:
            result.append(reservation)
    return result


def _to_profile(row: models.User) -> UserProfile:
    return UserProfile(
        id=UserId(row.id),
        name=row.name,
        email=row.email,
        area=row.area,
        role=Role(row.role),
    )


class DjangoProjectorStore(ProjectorStore):
    """Projector store using Django ORM."""

    def list_projectors(self) -> list[Projector]:
        return [_to_projector(row) for row in models.Projector.objects.order_by("name")]

    def list_active_projectors(self) -> list[Projector]:
        rows = models.Projector.objects.filter(
            status=models.Projector.Status.AVAILABLE
        ).order_by(F("created_at").asc(nulls_first=True), "seq")
        return [_to_projector(row) for row in rows]

    def get_projector(self, projector_id: ProjectorId) -> Projector | None:
        row = models.Projector.objects.filter(pk=projector_id.value).first()
        return _to_projector(row) if row else None

    def get_projector_names(self, projector_ids: set[ProjectorId]) -> dict[ProjectorId, str]:
        rows = models.Projector.objects.filter(
            pk__in=[p.value for p in projector_ids]
        ).values_list("id", "name")
        return {ProjectorId(pk): name for pk, name in rows}

    def create_projector(self, name: str, status: ProjectorStatus) -> Projector:
        row = models.Projector.objects.create(name=name, status=status.value)
        return _to_projector(row)

    def update_projector(
        self, projector_id: ProjectorId, name: str, status: ProjectorStatus | None = None
    ) -> Projector | None:
        row = models.Projector.objects.filter(pk=projector_id.value).first()
        if row is None:
            return None
        row.name = name
        fields = ["name"]
        if status is not None:
            row.status = status.value
            fields.append("status")
        row.save(update_fields=fields)
        return _to_projector(row)

    def delete_projector(self, projector_id: ProjectorId) -> bool:
        deleted, _ = models.Projector.objects.filter(pk=projector_id.value).delete()
        return deleted > 0

    def has_projectors(self) -> bool:
        return models.Projector.objects.exists()


class DjangoReservationStore(ReservationStore):
    """Reservation store using Django ORM.

    Booked slots are mirrored into ReservationSlot rows whose unique
    constraints make the database the final judge of double bookings.
    """

    def list_for_date(self, on_date: date) -> list[Reservation]:
        return _to_reservations(models.Reservation.objects.filter(date=on_date))

    def list_for_user(self, user_id: UserId, from_date: date) -> list[Reservation]:
        rows = models.Reservation.objects.filter(user_id=user_id.value, date__gte=from_date)
        return _to_reservations(rows)

    def list_between(self, start: date, end: date) -> list[Reservation]:
        rows = models.Reservation.objects.filter(date__gte=start, date__lte=end)
        return _to_reservations(rows)

    def get_reservation(self, reservation_id: ReservationId) -> Reservation | None:
        row = models.Reservation.objects.filter(pk=reservation_id.value).first()
        return _to_reservation(row) if row else None

    def add_reservation(
        self,
        on_date: date,
        slots: SlotSet,
        user_id: UserId,
        projector_id: ProjectorId,
    ) -> Reservation:
        try:
            with transaction.atomic():
                row = models.Reservation.objects.create(
                    date=on_date,
                    slots=list(slots.values),
                    user_id=user_id.value,
                    projector_id=projector_id.value,
                )
                models.ReservationSlot.objects.bulk_create(
                    models.ReservationSlot(
                        reservation=row,
                        projector_id=projector_id.value,
                        user_id=user_id.value,
                        date=on_date,
                        slot_id=slot_id,
                    )
                    for slot_id in slots
                )
        except IntegrityError as exc:
            raise SlotAlreadyBookedError(
                f"Slots {list(slots.values)} on {on_date} are already booked"
            ) from exc
        return _to_reservation(row)

    def delete_reservation(self, reservation_id: ReservationId) -> bool:
        deleted, _ = models.Reservation.objects.filter(pk=reservation_id.value).delete()
        return deleted > 0

    def allocation_scope(self, on_date: date) -> AbstractContextManager[None]:
        return transaction.atomic()


class DjangoUserDirectory(UserDirectory):
    """User directory backed by the custom auth user model."""

    def list_users(self) -> list[UserProfile]:
        return [_to_profile(row) for row in models.User.objects.order_by("name")]

    def get_users(self, user_ids: set[UserId]) -> dict[UserId, UserProfile]:
        rows = models.User.objects.filter(pk__in=[u.value for u in user_ids])
        return {UserId(row.id): _to_profile(row) for row in rows}

    def get_user(self, user_id: UserId) -> UserProfile | None:
        row = models.User.objects.filter(pk=user_id.value).first()
        return _to_profile(row) if row else None

    def create_user(
        self, name: str, email: str, password: str, area: str, role: Role
    ) -> UserProfile:
        try:
            with transaction.atomic():
                row = models.User.objects.create_user(
                    username=email,
                    email=email,
                    password=password,
                    name=name,
                    area=area,
                    role=role.value,
                    is_staff=role is Role.ADMIN,
                )
        except IntegrityError as exc:
            raise DuplicateEmailError(email) from exc
        return _to_profile(row)

    def update_profile(
        self, user_id: UserId, name: str, area: str | None = None
    ) -> UserProfile | None:
        row = models.User.objects.filter(pk=user_id.value).first()
        if row is None:
            return None
        row.name = name
        fields = ["name"]
        if area is not None:
            row.area = area
            fields.append("area")
        row.save(update_fields=fields)
        return _to_profile(row)
