from django.urls import path

from reservations.handlers import (
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

urlpatterns = [
    path("availability", AvailabilityView.as_view(), name="availability"),
    path("reservations", ReservationListView.as_view(), name="reservation-list"),
    path(
        "reservations/<str:reservation_id>",
        ReservationDetailView.as_view(),
        name="reservation-detail",
    ),
    path("my-reservations", MyReservationsView.as_view(), name="my-reservations"),
    path("projectors", ProjectorListView.as_view(), name="projector-list"),
    path(
        "projectors/<str:projector_id>",
        ProjectorDetailView.as_view(),
        name="projector-detail",
    ),
    path("admin/reports", ReportView.as_view(), name="report"),
    path("register", RegisterView.as_view(), name="register"),
    path("profile", ProfileView.as_view(), name="profile"),
    path("users", UserListView.as_view(), name="user-list"),
]
