"""Serializers for transforming domain models to API responses.

Output keys are camelCase to match the stored record shapes.
"""

from rest_framework import serializers

from reservations.domain import ProjectorStatus


class ProjectorSerializer(serializers.Serializer):
    """Serializer for Projector domain model."""

    id = serializers.UUIDField(source="id.value")
    name = serializers.CharField()
    status = serializers.CharField(source="status.value")
    createdAt = serializers.DateTimeField(source="created_at")


class ReservationSerializer(serializers.Serializer):
    """Serializer for Reservation domain model."""

    id = serializers.UUIDField(source="id.value")
    date = serializers.DateField()
    slots = serializers.ListField(child=serializers.IntegerField(), source="slots.values")
    userId = serializers.UUIDField(source="user_id.value")
    projectorId = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source="created_at")

    def get_projectorId(self, obj) -> str | None:
        return str(obj.projector_id) if obj.projector_id is not None else None


class UserReservationSerializer(serializers.Serializer):
    """A reservation as listed for its owner."""

    id = serializers.UUIDField(source="reservation.id.value")
    date = serializers.DateField(source="reservation.date")
    slots = serializers.ListField(
        child=serializers.IntegerField(), source="reservation.slots.values"
    )
    projectorName = serializers.CharField(source="projector_name")
    createdAt = serializers.DateTimeField(source="reservation.created_at")
    status = serializers.SerializerMethodField()

    def get_status(self, obj) -> str:
        return "expired" if obj.expired else "active"


class ReservationDetailSerializer(serializers.Serializer):
    reservationId = serializers.UUIDField(source="reservation_id.value")
    userName = serializers.CharField(source="user_name")
    userArea = serializers.CharField(source="user_area")
    projectorName = serializers.CharField(source="projector_name")


class SlotAvailabilitySerializer(serializers.Serializer):
    """Serializer for SlotAvailability domain model."""

    slot = serializers.IntegerField(source="slot.id")
    label = serializers.CharField(source="slot.label")
    startTime = serializers.TimeField(source="slot.start_time", format="%H:%M")
    endTime = serializers.TimeField(source="slot.end_time", format="%H:%M")
    period = serializers.CharField(source="slot.period.value")
    reservedCount = serializers.IntegerField(source="reserved_count")
    availableCount = serializers.IntegerField(source="available_count")
    totalProjectors = serializers.IntegerField(source="total_projectors")
    isReservedByUser = serializers.BooleanField(source="is_reserved_by_user")
    reservations = ReservationDetailSerializer(many=True)

    def to_representation(self, instance):
        data = super().to_representation(instance)
        if instance.reservations is None:
            data.pop("reservations")
        return data


class ReportRecordSerializer(serializers.Serializer):
    """Serializer for ReportRecord domain model."""

    id = serializers.UUIDField(source="reservation_id.value")
    date = serializers.DateField()
    slots = serializers.ListField(child=serializers.IntegerField(), source="slots.values")
    user = serializers.SerializerMethodField()
    projector = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source="created_at")

    def get_user(self, obj) -> dict:
        return {"name": obj.user_name, "area": obj.user_area, "email": obj.user_email}

    def get_projector(self, obj) -> dict:
        return {"name": obj.projector_name}


class UserProfileSerializer(serializers.Serializer):
    """Serializer for UserProfile domain model."""

    id = serializers.UUIDField(source="id.value")
    name = serializers.CharField()
    email = serializers.EmailField()
    area = serializers.CharField()
    role = serializers.CharField(source="role.value")


class RegisterSerializer(serializers.Serializer):
    """Input format for sign-up."""

    name = serializers.CharField(max_length=255)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)
    area = serializers.CharField(max_length=100)


class ProfileSerializer(serializers.Serializer):
    """Input format for profile edits."""

    name = serializers.CharField(max_length=255)
    area = serializers.CharField(max_length=100, required=False, allow_blank=True)


class ReservationRequestSerializer(serializers.Serializer):
    """Input format for booking slots on a day."""

    date = serializers.DateField(input_formats=["iso-8601"])
    slots = serializers.ListField(child=serializers.IntegerField(min_value=1), allow_empty=False)


class ProjectorRequestSerializer(serializers.Serializer):
    """Input format for registering or editing a projector."""

    name = serializers.CharField(max_length=100)
    status = serializers.ChoiceField(choices=[s.value for s in ProjectorStatus], required=False)
