"""Account service - sign-up, profile edits and the user directory."""

import logging
from collections.abc import Iterable

from reservations.domain import Actor, Role, UserProfile
from reservations.domain.errors import (
    EmailAlreadyRegisteredError,
    InvalidRequestError,
    UserNotFoundError,
)
from reservations.services.parsing import parse_name
from reservations.stores.interfaces import DuplicateEmailError, UserDirectory

logger = logging.getLogger(__name__)


class AccountService:
    """Service for user accounts. Authentication itself is Django's."""

    def __init__(self, users: UserDirectory, admin_emails: Iterable[str] = ()) -> None:
        self._users = users
        self._admin_emails = {e.strip().lower() for e in admin_emails if e.strip()}

    def register(self, name: object, email: object, password: object, area: object) -> UserProfile:
        """Create a professor account, or an admin one for configured emails.

        The email is stored lower-cased; it doubles as the login username.

        Raises:
            InvalidRequestError: If any field is missing.
            EmailAlreadyRegisteredError: If the email is taken.
        """
        name = parse_name(name)
        email = parse_name(email, "email").lower()
        area = parse_name(area, "area")
        if not isinstance(password, str) or not password:
            raise InvalidRequestError("password is required")

        role = Role.ADMIN if email in self._admin_emails else Role.PROFESSOR
        try:
            profile = self._users.create_user(name, email, password, area, role)
        except DuplicateEmailError:
            raise EmailAlreadyRegisteredError() from None
        logger.info("Registered user %s as %s", profile.id, role.value)
        return profile

    def update_profile(self, actor: Actor, name: object, area: object = None) -> UserProfile:
        """Change the actor's display name and, when given, area."""
        name = parse_name(name)
        if area is not None and not isinstance(area, str):
            raise InvalidRequestError("area must be text")
        profile = self._users.update_profile(actor.user_id, name, area)
        if profile is None:
            raise UserNotFoundError()
        return profile

    def list_users(self) -> list[UserProfile]:
        return self._users.list_users()
