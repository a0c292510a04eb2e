"""Projector inventory service. Mutations are restricted to administrators."""

import logging

from reservations.domain import Actor, Projector, ProjectorId, ProjectorStatus
from reservations.domain.errors import ForbiddenError, ProjectorNotFoundError
from reservations.services.parsing import parse_id, parse_name, parse_status
from reservations.stores.interfaces import ProjectorStore

logger = logging.getLogger(__name__)

DEFAULT_INVENTORY_SIZE = 5


def _require_admin(actor: Actor) -> None:
    if not actor.is_admin:
        raise ForbiddenError("Only administrators can manage projectors")


class ProjectorService:
    """Service for projector CRUD."""

    def __init__(self, store: ProjectorStore) -> None:
        self._store = store

    def list_projectors(self) -> list[Projector]:
        """Return all projectors ordered by name."""
        return self._store.list_projectors()

    def create_projector(self, name: object, actor: Actor) -> Projector:
        _require_admin(actor)
        projector = self._store.create_projector(parse_name(name), ProjectorStatus.AVAILABLE)
        logger.info("Projector %s (%s) created by %s", projector.id, projector.name, actor.user_id)
        return projector

    def update_projector(
        self, projector_id: object, name: object, actor: Actor, status: object = None
    ) -> Projector:
        """Rename a projector and optionally change its status.

        Raises:
            ForbiddenError: If the actor is not an administrator.
            InvalidRequestError: If the id, name or status is malformed.
            ProjectorNotFoundError: If the projector does not exist.
        """
        _require_admin(actor)
        pid = parse_id(ProjectorId, projector_id, "projector")
        projector = self._store.update_projector(pid, parse_name(name), parse_status(status))
        if projector is None:
            raise ProjectorNotFoundError(str(pid))
        logger.info("Projector %s updated by %s", pid, actor.user_id)
        return projector

    def delete_projector(self, projector_id: object, actor: Actor) -> None:
        """Delete a projector. Its past reservations keep their slots but lose the link."""
        _require_admin(actor)
        pid = parse_id(ProjectorId, projector_id, "projector")
        if not self._store.delete_projector(pid):
            raise ProjectorNotFoundError(str(pid))
        logger.info("Projector %s deleted by %s", pid, actor.user_id)

    def seed_inventory(self, count: int = DEFAULT_INVENTORY_SIZE) -> list[Projector]:
        """Register the initial projectors. Does nothing if any projector exists."""
        if self._store.has_projectors():
            return []
        created = [
            self._store.create_projector(f"Projector {n:02d}", ProjectorStatus.AVAILABLE)
            for n in range(1, count + 1)
        ]
        logger.info("Seeded %d projectors", len(created))
        return created
