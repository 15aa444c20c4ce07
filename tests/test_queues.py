"""Tests for role worklists."""

from dataclasses import replace
from datetime import UTC, datetime

from solicitation_tracker.domain.queues import UNKNOWN_ACTOR
from solicitation_tracker.domain.solicitations import (
    Actor,
    Role,
    Solicitation,
    Status,
    StatusEntry,
)
from solicitation_tracker.services.queues import (
    QueueService,
    executor_queue,
    forwarded_by,
    reviewer_history_view,
    reviewer_queue,
    submitter_view,
)
from solicitation_tracker.services.solicitations import SolicitationService
from tests.conftest import (
    EXECUTOR,
    LOCATION,
    REVIEWER,
    SUBMITTER,
    InMemorySolicitationRepository,
)


def _create(service: SolicitationService, submitter: Actor = SUBMITTER):
    return service.create_solicitation(submitter, "photo", LOCATION)


def _ids(entries) -> list[str]:
    return [entry.solicitation.id for entry in entries]


def test_approved_record_moves_from_reviewer_to_executor_queue(
    service: SolicitationService, repository: InMemorySolicitationRepository
) -> None:
    record = _create(service)
    queues = QueueService(repository)
    assert _ids(queues.reviewer_queue()) == [record.id]
    assert queues.executor_queue().active == []

    service.apply_transition(REVIEWER, record.id, Status.SENT_TO_EXECUTOR)

    assert queues.reviewer_queue() == []
    assert _ids(queues.reviewer_history()) == [record.id]
    executor = queues.executor_queue()
    assert _ids(executor.active) == [record.id]
    assert executor.finished == []
    assert executor.active[0].forwarded_by == "Rui Review"


def test_finished_record_moves_to_finished_bucket(
    service: SolicitationService, repository: InMemorySolicitationRepository
) -> None:
    record = _create(service)
    service.apply_transition(REVIEWER, record.id, Status.SENT_TO_EXECUTOR)
    queues = QueueService(repository)

    for target in [Status.STARTED, Status.ON_HOLD]:
        service.apply_transition(EXECUTOR, record.id, target)
        assert _ids(queues.executor_queue().active) == [record.id]

    service.apply_transition(EXECUTOR, record.id, Status.FINISHED)

    executor = queues.executor_queue()
    assert executor.active == []
    assert _ids(executor.finished) == [record.id]


def test_refused_record_never_reaches_executor(
    service: SolicitationService, repository: InMemorySolicitationRepository
) -> None:
    record = _create(service)
    service.apply_transition(REVIEWER, record.id, Status.REFUSED)
    queues = QueueService(repository)

    executor = queues.executor_queue()
    assert executor.active == executor.finished == []
    assert _ids(queues.reviewer_history()) == [record.id]
    assert queues.reviewer_history()[0].forwarded_by == UNKNOWN_ACTOR


def test_views_are_newest_first(service: SolicitationService) -> None:
    first = _create(service)
    second = _create(service)
    third = _create(service)
    for record in (first, third):
        service.apply_transition(REVIEWER, record.id, Status.SENT_TO_EXECUTOR)
    all_records = service.repository.list_all()

    assert _ids(reviewer_queue(all_records)) == [second.id]
    assert _ids(reviewer_history_view(all_records)) == [third.id, first.id]
    assert _ids(executor_queue(all_records).active) == [third.id, first.id]


def test_equal_created_at_is_ordered_by_id(service: SolicitationService) -> None:
    record = _create(service)
    twin = replace(record, id="sol_9999")

    assert _ids(reviewer_queue([record, twin])) == ["sol_9999", record.id]


def test_forwarded_by_uses_latest_matching_entry() -> None:
    moment = datetime(2024, 1, 1, tzinfo=UTC)
    record = Solicitation(
        id="sol_1",
        submitter_id="user_1",
        submitter_name="Ana Field",
        photo_ref="photo",
        location=LOCATION,
        address=None,
        note="",
        created_at=moment,
        current_status=Status.SENT_TO_EXECUTOR,
        history=(
            StatusEntry(Status.SUBMITTED, "Ana Field", moment),
            StatusEntry(Status.SENT_TO_EXECUTOR, "First Reviewer", moment),
            StatusEntry(Status.SENT_TO_EXECUTOR, "Second Reviewer", moment),
        ),
    )

    assert forwarded_by(record) == "Second Reviewer"


def test_forwarded_by_unknown_without_approval(service: SolicitationService) -> None:
    assert forwarded_by(_create(service)) == UNKNOWN_ACTOR


def test_submitter_view_only_shows_own_records(service: SolicitationService) -> None:
    other = Actor(id="user_8", display_name="Bia Field", role=Role.SUBMITTER)
    mine = _create(service)
    _create(service, submitter=other)
    also_mine = _create(service)

    entries = submitter_view(service.repository.list_all(), SUBMITTER.id)

    assert _ids(entries) == [also_mine.id, mine.id]


def test_queue_service_rereads_store_every_call(
    service: SolicitationService, repository: InMemorySolicitationRepository
) -> None:
    queues = QueueService(repository)
    reads = repository.reads

    queues.reviewer_queue()
    queues.reviewer_history()
    queues.executor_queue()
    queues.submitter_view(SUBMITTER.id)
    queues.audit_trail()

    assert repository.reads == reads + 5


def test_audit_trail_includes_every_status(
    service: SolicitationService, repository: InMemorySolicitationRepository
) -> None:
    refused = _create(service)
    pending = _create(service)
    service.apply_transition(REVIEWER, refused.id, Status.REFUSED)

    trail = QueueService(repository).audit_trail()

    assert [record.id for record in trail] == [pending.id, refused.id]
    assert [entry.status for entry in trail[1].history] == [
        Status.SUBMITTED,
        Status.REFUSED,
    ]
