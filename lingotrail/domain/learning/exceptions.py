"""Learning domain exceptions."""

from lingotrail.domain.common.exceptions import (
    BusinessRuleViolationError,
    DomainError,
    EntityNotFoundError,
)


class JourneyAssignmentNotFoundError(EntityNotFoundError):
    """Raised when a learner has no assignment for a journey."""

    def __init__(self, user_id: int, journey_id: int) -> None:
        super().__init__("JourneyAssignment", f"user={user_id}, journey={journey_id}")
        self.user_id = user_id
        self.journey_id = journey_id


class AlreadyAssignedError(BusinessRuleViolationError):
    """Raised when a learner is assigned a journey they already have."""

    def __init__(self, user_id: int, journey_id: int) -> None:
        super().__init__(
            "unique_assignment",
            f"User {user_id} is already assigned to journey {journey_id}",
        )
        self.user_id = user_id
        self.journey_id = journey_id


class JourneyNotFinishedError(BusinessRuleViolationError):
    """Raised when completing a journey that still has unfinished topics."""

    def __init__(self, journey_id: int, progress_percent: float) -> None:
        super().__init__(
            "journey_finished_before_completion",
            f"Journey {journey_id} is only {progress_percent}% complete",
        )
        self.journey_id = journey_id
        self.progress_percent = progress_percent


class InvitationNotFoundError(EntityNotFoundError):
    """Raised when an invitation cannot be found."""

    def __init__(self, invitation_ref: int | str) -> None:
        super().__init__("Invitation", invitation_ref)


class InvitationInvalidError(DomainError):
    """Raised when accepting an expired, exhausted or deactivated invitation."""
