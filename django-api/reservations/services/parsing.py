"""Turn raw request values into domain values, or raise InvalidRequestError."""

from collections.abc import Callable
from datetime import date, datetime
from typing import TypeVar
from uuid import UUID

from reservations.domain import ProjectorStatus, SlotSet
from reservations.domain.errors import InvalidRequestError
from reservations.domain.schedule import is_known_slot

IdT = TypeVar("IdT")


def parse_date(value: object, field: str = "date") -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value or not isinstance(value, str):
        raise InvalidRequestError(f"{field} is required")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise InvalidRequestError(f"{field} must be a date in YYYY-MM-DD format") from None


def parse_slots(value: object) -> SlotSet:
    if not isinstance(value, (list, tuple, set, frozenset)) or not value:
        raise InvalidRequestError("slots must be a non-empty list of slot ids")
    for slot_id in value:
        if isinstance(slot_id, bool) or not isinstance(slot_id, int):
            raise InvalidRequestError("slots must be a non-empty list of slot ids")
        if not is_known_slot(slot_id):
            raise InvalidRequestError(f"Unknown slot id: {slot_id}")
    return SlotSet.of(value)


def parse_id(factory: Callable[[UUID], IdT], value: object, label: str) -> IdT:
    if isinstance(value, UUID):
        return factory(value)
    if not value or not isinstance(value, str):
        raise InvalidRequestError(f"{label} ID is required")
    try:
        return factory(UUID(value))
    except ValueError:
        raise InvalidRequestError(f"Invalid {label} ID format") from None


def parse_name(value: object, field: str = "name") -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidRequestError(f"{field} is required")
    return value.strip()


def parse_status(value: object) -> ProjectorStatus | None:
    if value is None:
        return None
    try:
        return ProjectorStatus(value)
    except ValueError:
        choices = ", ".join(s.value for s in ProjectorStatus)
        raise InvalidRequestError(f"status must be one of: {choices}") from None
