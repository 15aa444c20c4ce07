"""Workflow error taxonomy."""

from solicitation_tracker.domain.solicitations import Role, Status


class SolicitationError(Exception):
    """Base class for solicitation workflow errors."""


class MissingRequiredFieldError(SolicitationError):
    """Raised when a solicitation is created without a mandatory field."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Missing required field: {field}")
        self.field = field


class SolicitationNotFoundError(SolicitationError):
    """Raised when an operation references an unknown solicitation id."""

    def __init__(self, solicitation_id: str) -> None:
        super().__init__(f"Solicitation not found: {solicitation_id}")
        self.solicitation_id = solicitation_id


class DuplicateIdError(SolicitationError):
    """Raised when inserting a solicitation whose id is already stored."""

    def __init__(self, solicitation_id: str) -> None:
        super().__init__(f"Solicitation id already exists: {solicitation_id}")
        self.solicitation_id = solicitation_id


class IllegalTransitionError(SolicitationError):
    """Raised when a role may not move a solicitation to the target status."""

    def __init__(
        self, current_status: Status, target_status: Status, role: Role
    ) -> None:
        super().__init__(
            f"{role.value} cannot move a solicitation from "
            f"{current_status.value} to {target_status.value}"
        )
        self.current_status = current_status
        self.target_status = target_status
        self.role = role
