"""Role-gated transition table for the solicitation workflow."""

from solicitation_tracker.domain.solicitations import Role, Status

_TRANSITIONS: dict[Role, dict[Status, frozenset[Status]]] = {
    Role.SUBMITTER: {},
    Role.REVIEWER: {
        Status.SUBMITTED: frozenset({Status.SENT_TO_EXECUTOR, Status.REFUSED}),
    },
    Role.EXECUTOR: {
        Status.SENT_TO_EXECUTOR: frozenset(
            {Status.STARTED, Status.ON_HOLD, Status.FINISHED}
        ),
        Status.STARTED: frozenset({Status.ON_HOLD, Status.FINISHED}),
        Status.ON_HOLD: frozenset({Status.STARTED, Status.FINISHED}),
    },
}


def allowed_targets(role: Role, from_status: Status) -> frozenset[Status]:
    """Return the statuses a role may move a solicitation to."""
    return _TRANSITIONS[role].get(from_status, frozenset())


def can_transition(role: Role, from_status: Status, to_status: Status) -> bool:
    """Return true when the role may move from one status to another."""
    return to_status in allowed_targets(role, from_status)
