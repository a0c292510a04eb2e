"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone

import pytest
from rest_framework.test import APIClient

from reservations.services.reservation_service import ReservationService
from tests.fakes import (
    BASE_TIME,
    InMemoryProjectorStore,
    InMemoryReservationStore,
    InMemoryUserDirectory,
)


@pytest.fixture
def projector_store() -> InMemoryProjectorStore:
    return InMemoryProjectorStore()


@pytest.fixture
def reservation_store() -> InMemoryReservationStore:
    return InMemoryReservationStore()


@pytest.fixture
def user_directory() -> InMemoryUserDirectory:
    return InMemoryUserDirectory()


@pytest.fixture
def two_projectors(projector_store):
    """Older "Alpha" and newer "Beta"."""
    alpha = projector_store.add("Alpha", BASE_TIME)
    beta = projector_store.add("Beta", BASE_TIME + timedelta(days=1))
    return alpha, beta


@pytest.fixture
def clock():
    return lambda: datetime(2030, 3, 4, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def reservation_service(reservation_store, projector_store, user_directory, clock):
    return ReservationService(reservation_store, projector_store, user_directory, clock=clock)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()
