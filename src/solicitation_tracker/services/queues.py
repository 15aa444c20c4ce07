"""Role worklists derived from the full solicitation collection."""

from collections.abc import Iterable
from dataclasses import dataclass

from solicitation_tracker.domain.queues import UNKNOWN_ACTOR, ExecutorQueue, QueueEntry
from solicitation_tracker.domain.solicitations import Solicitation, Status
from solicitation_tracker.services.solicitations import SolicitationRepository


def forwarded_by(solicitation: Solicitation) -> str:
    """Return who most recently sent the solicitation to the executor."""
    for entry in reversed(solicitation.history):
        if entry.status == Status.SENT_TO_EXECUTOR:
            return entry.actor_name
    return UNKNOWN_ACTOR


def reviewer_queue(solicitations: Iterable[Solicitation]) -> list[QueueEntry]:
    """Return solicitations awaiting review, newest first."""
    return _entries(s for s in solicitations if s.current_status == Status.SUBMITTED)


def reviewer_history_view(solicitations: Iterable[Solicitation]) -> list[QueueEntry]:
    """Return solicitations that have already been reviewed, newest first."""
    return _entries(s for s in solicitations if s.current_status != Status.SUBMITTED)


def executor_queue(solicitations: Iterable[Solicitation]) -> ExecutorQueue:
    """Return approved solicitations split into active and finished work."""
    approved = [s for s in solicitations if s.was_sent_to_executor()]
    return ExecutorQueue(
        active=_entries(s for s in approved if s.current_status != Status.FINISHED),
        finished=_entries(s for s in approved if s.current_status == Status.FINISHED),
    )


def submitter_view(
    solicitations: Iterable[Solicitation], submitter_id: str
) -> list[QueueEntry]:
    """Return a submitter's own solicitations, newest first."""
    return _entries(s for s in solicitations if s.submitter_id == submitter_id)


def _entries(solicitations: Iterable[Solicitation]) -> list[QueueEntry]:
    ordered = sorted(solicitations, key=lambda s: (s.created_at, s.id), reverse=True)
    return [QueueEntry(solicitation=s, forwarded_by=forwarded_by(s)) for s in ordered]


@dataclass
class QueueService:
    """Re-derives every worklist from a fresh read of the store."""

    repository: SolicitationRepository

    def reviewer_queue(self) -> list[QueueEntry]:
        """Return the pending-review worklist."""
        return reviewer_queue(self.repository.list_all())

    def reviewer_history(self) -> list[QueueEntry]:
        """Return the reviewed worklist."""
        return reviewer_history_view(self.repository.list_all())

    def executor_queue(self) -> ExecutorQueue:
        """Return the executor worklist."""
        return executor_queue(self.repository.list_all())

    def submitter_view(self, submitter_id: str) -> list[QueueEntry]:
        """Return a submitter's own solicitations."""
        return submitter_view(self.repository.list_all(), submitter_id)

    def audit_trail(self) -> list[Solicitation]:
        """Return every solicitation with its full history, newest first."""
        return [entry.solicitation for entry in _entries(self.repository.list_all())]
