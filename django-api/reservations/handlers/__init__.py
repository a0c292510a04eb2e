from reservations.handlers.views import (
    AvailabilityView,
    MyReservationsView,
    ProfileView,
    ProjectorDetailView,
    ProjectorListView,
    RegisterView,
    ReportView,
    ReservationDetailView,
    ReservationListView,
    UserListView,
)

__all__ = [
    "AvailabilityView",
    "MyReservationsView",
    "ProfileView",
    "ProjectorDetailView",
    "ProjectorListView",
    "RegisterView",
    "ReportView",
    "ReservationDetailView",
    "ReservationListView",
    "UserListView",
]
