"""Domain error codes for the reservations module."""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    SELF_CONFLICT = "SELF_CONFLICT"
    NO_PROJECTOR_AVAILABLE = "NO_PROJECTOR_AVAILABLE"
    FORBIDDEN = "FORBIDDEN"
    RESERVATION_NOT_FOUND = "RESERVATION_NOT_FOUND"
    PROJECTOR_NOT_FOUND = "PROJECTOR_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    EMAIL_ALREADY_REGISTERED = "EMAIL_ALREADY_REGISTERED"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class InvalidRequestError(DomainError):
    """Raised when input is missing or malformed."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.VALIDATION_ERROR, message=message)


class SelfConflictError(DomainError):
    """Raised when the user already holds one of the requested slots that day."""

    def __init__(self, slot_ids: Iterable[int]) -> None:
        slot_ids = tuple(slot_ids)
        super().__init__(
            code=ErrorCode.SELF_CONFLICT,
            message=(
                "You already hold a reservation on this day for slots: "
                + ", ".join(str(s) for s in slot_ids)
            ),
        )
        self.slot_ids = slot_ids


class NoProjectorAvailableError(DomainError):
    """Raised when no single projector is free for every requested slot."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.NO_PROJECTOR_AVAILABLE,
            message=(
                "No single projector is free for all the selected slots. "
                "Try reserving them separately."
            ),
        )


class ForbiddenError(DomainError):
    """Raised when the actor may not perform the operation."""

    def __init__(self, message: str = "You are not allowed to perform this action") -> None:
        super().__init__(code=ErrorCode.FORBIDDEN, message=message)


class ReservationNotFoundError(DomainError):
    """Raised when a reservation is not found."""

    def __init__(self, reservation_id: str) -> None:
        super().__init__(
            code=ErrorCode.RESERVATION_NOT_FOUND,
            message="Reservation not found",
        )
        self.reservation_id = reservation_id


class ProjectorNotFoundError(DomainError):
    """Raised when a projector is not found."""

    def __init__(self, projector_id: str) -> None:
        super().__init__(
            code=ErrorCode.PROJECTOR_NOT_FOUND,
            message="Projector not found",
        )
        self.projector_id = projector_id


class UserNotFoundError(DomainError):
    """Raised when the acting user no longer exists."""

    def __init__(self) -> None:
        super().__init__(code=ErrorCode.USER_NOT_FOUND, message="User not found")


class EmailAlreadyRegisteredError(DomainError):
    """Raised when signing up with an email that is already taken."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.EMAIL_ALREADY_REGISTERED,
            message="This email is already registered",
        )
