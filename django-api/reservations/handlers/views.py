"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses (see handlers/errors.py)
- Never contain business logic
- Never expose internal error details
"""

from django.conf import settings
from django.utils import timezone
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from reservations.domain import Actor, Role, UserId
from reservations.handlers.serializers import (
    ProfileSerializer,
    ProjectorRequestSerializer,
    ProjectorSerializer,
    RegisterSerializer,
    ReportRecordSerializer,
    ReservationRequestSerializer,
    ReservationSerializer,
    SlotAvailabilitySerializer,
    UserProfileSerializer,
    UserReservationSerializer,
)
from reservations.services.account_service import AccountService
from reservations.services.projector_service import ProjectorService
from reservations.services.report_service import ReportService
from reservations.services.reservation_service import ReservationService
from reservations.stores.django_store import (
    DjangoProjectorStore,
    DjangoReservationStore,
    DjangoUserDirectory,
)


def actor_for(request: Request) -> Actor:
    """The (user id, role) pair services see for the session user."""
    user = request.user
    role = Role.ADMIN if user.is_superuser else Role(user.role)
    return Actor(user_id=UserId(user.pk), role=role)


def reservation_service() -> ReservationService:
    return ReservationService(
        DjangoReservationStore(),
        DjangoProjectorStore(),
        DjangoUserDirectory(),
        clock=timezone.localtime,
        allocation_attempts=settings.RESERVATION_ALLOCATION_ATTEMPTS,
    )


def projector_service() -> ProjectorService:
    return ProjectorService(DjangoProjectorStore())


def report_service() -> ReportService:
    return ReportService(DjangoReservationStore(), DjangoProjectorStore(), DjangoUserDirectory())


def account_service() -> AccountService:
    return AccountService(DjangoUserDirectory(), settings.RESERVATION_ADMIN_EMAILS)


class AvailabilityView(APIView):
    """Handler for GET /api/availability?date=YYYY-MM-DD&includeDetails=true"""

    def get(self, request: Request) -> Response:
        availability = reservation_service().get_availability(
            request.query_params.get("date"),
            actor_for(request),
            include_details=request.query_params.get("includeDetails") == "true",
        )
        return Response(SlotAvailabilitySerializer(availability, many=True).data)


class ReservationListView(APIView):
    """Handler for POST /api/reservations"""

    def post(self, request: Request) -> Response:
        form = ReservationRequestSerializer(data=request.data)
        form.is_valid(raise_exception=True)
        reservation = reservation_service().create_reservation(
            form.validated_data["date"], form.validated_data["slots"], actor_for(request)
        )
        return Response(ReservationSerializer(reservation).data, status=status.HTTP_201_CREATED)


class ReservationDetailView(APIView):
    """Handler for DELETE /api/reservations/{reservation_id}"""

    def delete(self, request: Request, reservation_id: str) -> Response:
        reservation_service().cancel_reservation(reservation_id, actor_for(request))
        return Response(status=status.HTTP_204_NO_CONTENT)


class MyReservationsView(APIView):
    """Handler for GET /api/my-reservations?from=YYYY-MM-DD"""

    def get(self, request: Request) -> Response:
        reservations = reservation_service().list_user_reservations(
            actor_for(request), request.query_params.get("from")
        )
        return Response(UserReservationSerializer(reservations, many=True).data)


class ProjectorListView(APIView):
    """Handler for GET/POST /api/projectors"""

    def get(self, request: Request) -> Response:
        projectors = projector_service().list_projectors()
        return Response(ProjectorSerializer(projectors, many=True).data)

    def post(self, request: Request) -> Response:
        form = ProjectorRequestSerializer(data=request.data)
        form.is_valid(raise_exception=True)
        projector = projector_service().create_projector(
            form.validated_data["name"], actor_for(request)
        )
        return Response(ProjectorSerializer(projector).data, status=status.HTTP_201_CREATED)


class ProjectorDetailView(APIView):
    """Handler for PATCH/DELETE /api/projectors/{projector_id}"""

    def patch(self, request: Request, projector_id: str) -> Response:
        form = ProjectorRequestSerializer(data=request.data)
        form.is_valid(raise_exception=True)
        projector = projector_service().update_projector(
            projector_id,
            form.validated_data["name"],
            actor_for(request),
            status=form.validated_data.get("status"),
        )
        return Response(ProjectorSerializer(projector).data)

    def delete(self, request: Request, projector_id: str) -> Response:
        projector_service().delete_projector(projector_id, actor_for(request))
        return Response(status=status.HTTP_204_NO_CONTENT)


class ReportView(APIView):
    """Handler for GET /api/admin/reports?startDate&endDate&area&professorName"""

    def get(self, request: Request) -> Response:
        params = request.query_params
        records = report_service().generate_report(
            params.get("startDate"),
            params.get("endDate"),
            actor_for(request),
            area=params.get("area") or None,
            professor_name=params.get("professorName") or None,
        )
        return Response(ReportRecordSerializer(records, many=True).data)


class RegisterView(APIView):
    """Handler for POST /api/register"""

    permission_classes = [AllowAny]

    def post(self, request: Request) -> Response:
        form = RegisterSerializer(data=request.data)
        form.is_valid(raise_exception=True)
        profile = account_service().register(**form.validated_data)
        return Response(UserProfileSerializer(profile).data, status=status.HTTP_201_CREATED)


class ProfileView(APIView):
    """Handler for PUT /api/profile"""

    def put(self, request: Request) -> Response:
        form = ProfileSerializer(data=request.data)
        form.is_valid(raise_exception=True)
        profile = account_service().update_profile(
            actor_for(request),
            form.validated_data["name"],
            form.validated_data.get("area"),
        )
        return Response(UserProfileSerializer(profile).data)


class UserListView(APIView):
    """Handler for GET /api/users"""

    def get(self, request: Request) -> Response:
        return Response(UserProfileSerializer(account_service().list_users(), many=True).data)
