"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/.
"""

import uuid

from django.contrib.auth.models import AbstractUser
from django.db import models
from django.db.models import Max
from django.utils import timezone


class User(AbstractUser):
    """Persistence model for professors and administrators."""

    class Role(models.TextChoices):
        PROFESSOR = "professor", "Professor"
        ADMIN = "admin", "Admin"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)
    name = models.CharField(max_length=255)
    area = models.CharField(max_length=100, blank=True)
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.PROFESSOR)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return f"{self.name} ({self.email})"


class Projector(models.Model):
    """Persistence model for projectors."""

    class Status(models.TextChoices):
        AVAILABLE = "available", "Available"
        UNAVAILABLE = "unavailable", "Unavailable"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.AVAILABLE)
    # Null for projectors registered before timestamps were recorded.
    created_at = models.DateTimeField(default=timezone.now, null=True, blank=True)
    # Insertion order. Breaks created_at ties, including between legacy rows.
    seq = models.PositiveBigIntegerField(unique=True, editable=False)

    class Meta:
        ordering = ["name"]
        indexes = [
            models.Index(fields=["status", "created_at"], name="projector_status_created_idx"),
        ]

    def __str__(self) -> str:
        return self.name

    def save(self, *args, **kwargs):
        if self.seq is None:
            last = Projector.objects.aggregate(last=Max("seq"))["last"]
            self.seq = (last or 0) + 1
        super().save(*args, **kwargs)


class Reservation(models.Model):
    """Persistence model for reservations."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    date = models.DateField()
    slots = models.JSONField(default=list)
    slot = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        help_text="Single-slot form used by older records; read as slots=[slot].",
    )
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="reservations")
    projector = models.ForeignKey(
        Projector, on_delete=models.SET_NULL, null=True, related_name="reservations"
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["date", "created_at"]
        indexes = [
            models.Index(fields=["date"], name="reservation_date_idx"),
            models.Index(fields=["user", "date"], name="reservation_user_date_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.date} {self.slots} - {self.user_id}"


class ReservationSlot(models.Model):
    """One booked slot of a reservation.

    Exists so the database itself rejects double bookings.
    """

    reservation = models.ForeignKey(
        Reservation, on_delete=models.CASCADE, related_name="booked_slots"
    )
    projector = models.ForeignKey(
        Projector, on_delete=models.SET_NULL, null=True, related_name="booked_slots"
    )
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="booked_slots")
    date = models.DateField()
    slot_id = models.PositiveSmallIntegerField()

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["projector", "date", "slot_id"],
                name="unique_projector_slot_per_day",
            ),
            models.UniqueConstraint(
                fields=["user", "date", "slot_id"],
                name="unique_user_slot_per_day",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.date} slot {self.slot_id}"
