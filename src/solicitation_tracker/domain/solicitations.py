"""Domain models for field-service solicitations."""

from dataclasses import dataclass, replace
from datetime import datetime
from enum import StrEnum


class Status(StrEnum):
    """Workflow status of a solicitation."""

    SUBMITTED = "Submitted"
    REFUSED = "Refused"
    SENT_TO_EXECUTOR = "SentToExecutor"
    STARTED = "Started"
    ON_HOLD = "OnHold"
    FINISHED = "Finished"


TERMINAL_STATUSES = frozenset({Status.REFUSED, Status.FINISHED})


class Role(StrEnum):
    """Actor role selecting which transitions are available."""

    SUBMITTER = "Submitter"
    REVIEWER = "Reviewer"
    EXECUTOR = "Executor"


@dataclass(frozen=True)
class Actor:
    """The already-authenticated caller of a workflow operation."""

    id: str
    display_name: str
    role: Role


@dataclass(frozen=True)
class GeoLocation:
    """GPS coordinates captured with the photo."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class AddressData:
    """Reverse-geocoded address of a location."""

    road: str
    suburb: str
    city: str
    postcode: str
    country: str
    display_name: str


@dataclass(frozen=True)
class StatusEntry:
    """One row of a solicitation's audit history."""

    status: Status
    actor_name: str
    timestamp: datetime


@dataclass(frozen=True)
class Solicitation:
    """A field-service request and its status history.

    The history is append-only and its last entry always matches
    ``current_status``; both are checked on construction so an inconsistent
    record cannot be built or loaded.
    """

    id: str
    submitter_id: str
    submitter_name: str
    photo_ref: str
    location: GeoLocation
    address: AddressData | None
    note: str
    created_at: datetime
    current_status: Status
    history: tuple[StatusEntry, ...]

    def __post_init__(self) -> None:
        if not self.history:
            raise ValueError(f"Solicitation {self.id} has an empty history")
        if self.history[0].status != Status.SUBMITTED:
            raise ValueError(
                f"Solicitation {self.id} history must start with "
                f"{Status.SUBMITTED.value}"
            )
        if self.history[-1].status != self.current_status:
            raise ValueError(
                f"Solicitation {self.id} current status {self.current_status.value} "
                f"does not match last history entry {self.history[-1].status.value}"
            )

    def with_status(
        self, status: Status, actor_name: str, timestamp: datetime
    ) -> "Solicitation":
        """Return a copy with a new history entry and matching current status."""
        entry = StatusEntry(status=status, actor_name=actor_name, timestamp=timestamp)
        return replace(self, current_status=status, history=(*self.history, entry))

    def was_sent_to_executor(self) -> bool:
        """Return true when the record was ever approved for execution."""
        return any(entry.status == Status.SENT_TO_EXECUTOR for entry in self.history)
