from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from reservations.models import Projector, Reservation, ReservationSlot, User


class ReservationSlotInline(admin.TabularInline):
    model = ReservationSlot
    extra = 0
    can_delete = False
    readonly_fields = ["projector", "user", "date", "slot_id"]


@admin.register(User)
class ProfessorAdmin(UserAdmin):
    fieldsets = UserAdmin.fieldsets + (
        ("Reservations", {"fields": ("name", "area", "role")}),
    )
    add_fieldsets = UserAdmin.add_fieldsets + (
        ("Reservations", {"fields": ("email", "name", "area", "role")}),
    )
    list_display = ["email", "name", "area", "role", "is_staff"]
    list_filter = ["role", "area"]
    search_fields = ["email", "name"]
    ordering = ["name"]


@admin.register(Projector)
class ProjectorAdmin(admin.ModelAdmin):
    list_display = ["name", "status", "created_at"]
    list_filter = ["status"]
    search_fields = ["name"]


@admin.register(Reservation)
class ReservationAdmin(admin.ModelAdmin):
    """Reservations are created through the allocator only."""

    list_display = ["date", "slots", "user", "projector", "created_at"]
    list_filter = ["date", "projector"]
    search_fields = ["user__name", "user__email"]
    readonly_fields = ["date", "slots", "slot", "user", "projector", "created_at"]
    inlines = [ReservationSlotInline]

    def has_add_permission(self, request):
        return False
