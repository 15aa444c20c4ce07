"""Solicitation workflow engine."""

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol

from solicitation_tracker.domain.errors import (
    IllegalTransitionError,
    MissingRequiredFieldError,
    SolicitationNotFoundError,
)
from solicitation_tracker.domain.solicitations import (
    Actor,
    AddressData,
    GeoLocation,
    Solicitation,
    Status,
    StatusEntry,
)
from solicitation_tracker.services.workflow import can_transition

logger = logging.getLogger(__name__)


class SolicitationRepository(Protocol):
    """Persistence interface for solicitation records."""

    def list_all(self) -> list[Solicitation]:
        """Return every stored solicitation, in no particular order."""

    def get_by_id(self, solicitation_id: str) -> Solicitation | None:
        """Return a solicitation by id, if present."""

    def insert(self, solicitation: Solicitation) -> Solicitation:
        """Store a new solicitation, raising DuplicateIdError on id collision."""

    def replace(self, solicitation: Solicitation) -> Solicitation:
        """Overwrite a stored solicitation, raising SolicitationNotFoundError."""


_id_lock = threading.Lock()
_last_id_ns = 0


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def new_solicitation_id() -> str:
    """Return a timestamp-derived id, strictly increasing within the process."""
    global _last_id_ns  # noqa: PLW0603
    with _id_lock:
        _last_id_ns = max(time.time_ns(), _last_id_ns + 1)
        return f"sol_{_last_id_ns}"


@dataclass
class SolicitationService:
    """Creates solicitations and applies role-gated status transitions."""

    repository: SolicitationRepository
    clock: Callable[[], datetime] = field(default=_utc_now)
    id_factory: Callable[[], str] = field(default=new_solicitation_id)

    def create_solicitation(  # noqa: PLR0913
        self,
        submitter: Actor,
        photo_ref: str | None,
        location: GeoLocation | None,
        address: AddressData | None = None,
        note: str = "",
    ) -> Solicitation:
        """Create a solicitation in the Submitted state and store it."""
        if not photo_ref:
            raise MissingRequiredFieldError("photo_ref")
        if location is None:
            raise MissingRequiredFieldError("location")

        created_at = self.clock()
        solicitation = Solicitation(
            id=self.id_factory(),
            submitter_id=submitter.id,
            submitter_name=submitter.display_name,
            photo_ref=photo_ref,
            location=location,
            address=address,
            note=note,
            created_at=created_at,
            current_status=Status.SUBMITTED,
            history=(
                StatusEntry(
                    status=Status.SUBMITTED,
                    actor_name=submitter.display_name,
                    timestamp=created_at,
                ),
            ),
        )
        stored = self.repository.insert(solicitation)
        logger.info(
            "Solicitation created",
            extra={"solicitation_id": stored.id, "submitter_id": submitter.id},
        )
        return stored

    def get_solicitation(self, solicitation_id: str) -> Solicitation:
        """Return a solicitation or raise SolicitationNotFoundError."""
        solicitation = self.repository.get_by_id(solicitation_id)
        if solicitation is None:
            raise SolicitationNotFoundError(solicitation_id)
        return solicitation

    def apply_transition(
        self, actor: Actor, solicitation_id: str, target_status: Status
    ) -> Solicitation:
        """Move a solicitation to a new status on behalf of an actor.

        The new history entry and current status are written together with a
        single ``replace``. Concurrent writers to the same record are not
        detected; the last write wins.
        """
        solicitation = self.get_solicitation(solicitation_id)
        if not can_transition(actor.role, solicitation.current_status, target_status):
            logger.warning(
                "Rejected solicitation transition",
                extra={
                    "solicitation_id": solicitation_id,
                    "role": actor.role.value,
                    "current_status": solicitation.current_status.value,
                    "target_status": target_status.value,
                },
            )
            raise IllegalTransitionError(
                solicitation.current_status, target_status, actor.role
            )

        updated = solicitation.with_status(
            target_status, actor.display_name, self.clock()
        )
        stored = self.repository.replace(updated)
        logger.info(
            "Solicitation transitioned",
            extra={
                "solicitation_id": solicitation_id,
                "from_status": solicitation.current_status.value,
                "to_status": target_status.value,
                "actor_id": actor.id,
            },
        )
        return stored
