"""Domain models for role worklists."""

from dataclasses import dataclass

from solicitation_tracker.domain.solicitations import Solicitation

UNKNOWN_ACTOR = "unknown"


@dataclass(frozen=True)
class QueueEntry:
    """A solicitation as shown in a worklist."""

    solicitation: Solicitation
    forwarded_by: str


@dataclass(frozen=True)
class ExecutorQueue:
    """Executor worklist split into open and completed work."""

    active: list[QueueEntry]
    finished: list[QueueEntry]
