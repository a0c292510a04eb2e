"""Integration tests for the reservation endpoints.

Run with: pytest tests/test_reservations_api.py -v
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from rest_framework.test import APIClient

from reservations import models

DAY = "2030-03-04"
EPOCH = datetime(2030, 1, 1, tzinfo=timezone.utc)


def make_user(name, area="Math", role=models.User.Role.PROFESSOR):
    email = f"{name.lower()}@school.test"
    return models.User.objects.create_user(
        username=email, email=email, password="secret-pass", name=name, area=area, role=role
    )


def client_for(user) -> APIClient:
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def ana(db):
    return make_user("Ana")


@pytest.fixture
def bruno(db):
    return make_user("Bruno", area="History")


@pytest.fixture
def admin_user(db):
    return make_user("Diretora", area="Office", role=models.User.Role.ADMIN)


@pytest.fixture
def projectors(db):
    alpha = models.Projector.objects.create(name="Alpha", created_at=EPOCH)
    beta = models.Projector.objects.create(name="Beta", created_at=EPOCH + timedelta(days=1))
    return alpha, beta


def reserve(client, slots, on_date=DAY):
    return client.post("/api/reservations", {"date": on_date, "slots": slots}, format="json")


@pytest.mark.django_db
class TestAuthentication:
    """Every reservation endpoint requires a session."""

    @pytest.mark.parametrize(
        "method,url",
        [
            ("get", f"/api/availability?date={DAY}"),
            ("post", "/api/reservations"),
            ("get", "/api/my-reservations"),
            ("get", "/api/projectors"),
        ],
    )
    def test_anonymous_request_rejected(self, api_client: APIClient, method, url):
        """Given no credentials, returns 403."""
        response = getattr(api_client, method)(url)
        assert response.status_code == 403


@pytest.mark.django_db
class TestAvailability:
    """Tests for GET /api/availability"""

    def test_lists_every_slot(self, ana, projectors):
        """Given two projectors and no bookings, every slot has both free."""
        response = client_for(ana).get("/api/availability", {"date": DAY})

        assert response.status_code == 200
        assert [entry["slot"] for entry in response.data] == list(range(1, 10))
        first = response.data[0]
        assert (first["startTime"], first["endTime"], first["period"]) == ("07:35", "08:25", "morning")
        assert (first["availableCount"], first["totalProjectors"]) == (2, 2)
        assert "reservations" not in first

    def test_counts_and_ownership(self, ana, bruno, projectors):
        reserve(client_for(bruno), [3])

        response = client_for(ana).get("/api/availability", {"date": DAY})
        slot3 = response.data[2]

        assert (slot3["reservedCount"], slot3["availableCount"]) == (1, 1)
        assert slot3["isReservedByUser"] is False

    def test_include_details(self, ana, bruno, projectors):
        """Given includeDetails=true, each slot lists who holds which projector."""
        reserve(client_for(bruno), [5])

        response = client_for(ana).get(
            "/api/availability", {"date": DAY, "includeDetails": "true"}
        )

        (detail,) = response.data[4]["reservations"]
        assert (detail["userName"], detail["userArea"], detail["projectorName"]) == (
            "Bruno",
            "History",
            "Alpha",
        )
        assert response.data[0]["reservations"] == []

    def test_deleted_projector_frees_capacity(self, ana, bruno, projectors):
        """After a projector is deleted, the advertised free count is what can be booked."""
        alpha, _ = projectors
        carla = make_user("Carla")
        reserve(client_for(ana), [3])
        alpha.delete()
        models.Projector.objects.create(name="Gamma", created_at=EPOCH + timedelta(days=2))

        slot3 = client_for(bruno).get("/api/availability", {"date": DAY}).data[2]
        assert (slot3["reservedCount"], slot3["availableCount"], slot3["totalProjectors"]) == (
            0,
            2,
            2,
        )

        assert reserve(client_for(bruno), [3]).status_code == 201
        assert reserve(client_for(carla), [3]).status_code == 201
        slot3 = client_for(bruno).get("/api/availability", {"date": DAY}).data[2]
        assert (slot3["reservedCount"], slot3["availableCount"]) == (2, 0)
        assert reserve(client_for(make_user("Davi")), [3]).status_code == 409

    @pytest.mark.parametrize("query", [{}, {"date": "04/03/2030"}])
    def test_bad_date(self, ana, query):
        """Given a missing or malformed date, returns 400."""
        response = client_for(ana).get("/api/availability", query)
        assert response.status_code == 400
        assert response.data["code"] == "VALIDATION_ERROR"


@pytest.mark.django_db
class TestCreateReservation:
    """Tests for POST /api/reservations"""

    def test_assigns_oldest_free_projector(self, ana, projectors):
        alpha, _ = projectors
        response = reserve(client_for(ana), [4, 3])

        assert response.status_code == 201
        assert response.data["slots"] == [3, 4]
        assert response.data["projectorId"] == str(alpha.pk)
        assert response.data["userId"] == str(ana.pk)
        assert models.ReservationSlot.objects.filter(projector=alpha).count() == 2

    def test_second_professor_gets_next_projector(self, ana, bruno, projectors):
        _, beta = projectors
        reserve(client_for(ana), [3, 4])

        response = reserve(client_for(bruno), [4])

        assert response.status_code == 201
        assert response.data["projectorId"] == str(beta.pk)

    def test_self_conflict(self, ana, projectors):
        """Given the user already holds slot 3, returns 409 SELF_CONFLICT."""
        client = client_for(ana)
        reserve(client, [3])

        response = reserve(client, [3, 5])

        assert response.status_code == 409
        assert response.data["code"] == "SELF_CONFLICT"
        assert "3" in response.data["message"]

    def test_no_projector_available(self, ana, bruno, projectors):
        """Given both projectors busy in slot 6, returns 409 NO_PROJECTOR_AVAILABLE."""
        carla = make_user("Carla")
        reserve(client_for(ana), [6])
        reserve(client_for(bruno), [6])

        response = reserve(client_for(carla), [6, 7])

        assert response.status_code == 409
        assert response.data["code"] == "NO_PROJECTOR_AVAILABLE"
        assert models.Reservation.objects.count() == 2

    @pytest.mark.parametrize(
        "payload",
        [
            {"slots": [1]},
            {"date": DAY},
            {"date": DAY, "slots": []},
            {"date": DAY, "slots": [10]},
            {"date": DAY, "slots": "1,2"},
            {"date": "tomorrow", "slots": [1]},
            [1, 2],
            "2030-03-04",
        ],
    )
    def test_invalid_payload(self, ana, projectors, payload):
        """Given a malformed body, returns 400 and stores nothing."""
        response = client_for(ana).post("/api/reservations", payload, format="json")

        assert response.status_code == 400
        assert response.data["code"] == "VALIDATION_ERROR"
        assert not models.Reservation.objects.exists()


@pytest.mark.django_db
class TestCancelReservation:
    """Tests for DELETE /api/reservations/{id}"""

    def test_owner_cancels_and_slot_frees_up(self, ana, projectors):
        client = client_for(ana)
        reservation_id = reserve(client, [2]).data["id"]
        before = client.get("/api/availability", {"date": DAY}).data[1]["availableCount"]

        response = client.delete(f"/api/reservations/{reservation_id}")

        assert response.status_code == 204
        after = client.get("/api/availability", {"date": DAY}).data[1]["availableCount"]
        assert after == before + 1
        assert not models.ReservationSlot.objects.exists()

    def test_other_professor_forbidden(self, ana, bruno, projectors):
        reservation_id = reserve(client_for(ana), [2]).data["id"]

        response = client_for(bruno).delete(f"/api/reservations/{reservation_id}")

        assert response.status_code == 403
        assert response.data["code"] == "FORBIDDEN"
        assert models.Reservation.objects.filter(pk=reservation_id).exists()

    def test_admin_may_cancel_any(self, ana, admin_user, projectors):
        reservation_id = reserve(client_for(ana), [2]).data["id"]

        response = client_for(admin_user).delete(f"/api/reservations/{reservation_id}")

        assert response.status_code == 204

    def test_not_found(self, ana):
        """Given an unknown id, returns 404."""
        response = client_for(ana).delete(f"/api/reservations/{uuid.uuid4()}")
        assert response.status_code == 404
        assert response.data["code"] == "RESERVATION_NOT_FOUND"

    def test_invalid_id_format(self, ana):
        """Given invalid UUID, returns 400."""
        response = client_for(ana).delete("/api/reservations/not-a-uuid")
        assert response.status_code == 400


@pytest.mark.django_db
class TestMyReservations:
    """Tests for GET /api/my-reservations"""

    def test_lists_only_own_reservations_in_order(self, ana, bruno, projectors):
        client = client_for(ana)
        reserve(client, [7], on_date="2030-03-05")
        reserve(client, [5])
        reserve(client, [1])
        reserve(client_for(bruno), [2])

        response = client.get("/api/my-reservations")

        assert response.status_code == 200
        assert [(r["date"], r["slots"]) for r in response.data] == [
            (DAY, [1]),
            (DAY, [5]),
            ("2030-03-05", [7]),
        ]
        assert all(r["status"] == "active" for r in response.data)
        assert response.data[0]["projectorName"] == "Alpha"

    def test_from_filter(self, ana, projectors):
        client = client_for(ana)
        reserve(client, [1])
        reserve(client, [1], on_date="2030-03-06")

        response = client.get("/api/my-reservations", {"from": "2030-03-05"})

        assert [r["date"] for r in response.data] == ["2030-03-06"]

    def test_deleted_projector_shows_unknown(self, ana, projectors):
        alpha, _ = projectors
        client = client_for(ana)
        reserve(client, [1])
        alpha.delete()

        response = client.get("/api/my-reservations")

        assert response.data[0]["projectorName"] == "Unknown"
