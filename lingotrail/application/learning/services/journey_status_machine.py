"""Application service for the journey assignment lifecycle."""

from collections.abc import Callable
from datetime import UTC, datetime

import structlog

from lingotrail.application.learning.protocols.journey_assignment_repository import (
    JourneyAssignmentRepositoryProtocol,
)
from lingotrail.domain.common.value_objects.ids import JourneyId, UserId
from lingotrail.domain.learning.entities.journey_assignment import JourneyAssignment
from lingotrail.domain.learning.exceptions import (
    AlreadyAssignedError,
    JourneyAssignmentNotFoundError,
)

logger = structlog.get_logger(__name__)


def utc_now() -> datetime:
    return datetime.now(UTC)


class JourneyStatusMachine:
    """
    Moves assignments through assigned -> in_progress -> completed.

    Completion is never derived here; callers check progress first.
    """

    def __init__(
        self,
        assignment_repository: JourneyAssignmentRepositoryProtocol,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.assignment_repository = assignment_repository
        self.clock = clock

    def assign(
        self, user_id: UserId, journey_id: JourneyId, assigned_by: UserId
    ) -> JourneyAssignment:
        """
        Create an assignment in the ``assigned`` state.

        Raises:
            AlreadyAssignedError: If the learner already has this journey
        """
        if self.assignment_repository.find_by_user_and_journey(user_id, journey_id):
            raise AlreadyAssignedError(user_id.value, journey_id.value)

        assignment = JourneyAssignment.create(
            user_id=user_id, journey_id=journey_id, assigned_by=assigned_by, now=self.clock()
        )
        assignment = self.assignment_repository.save(assignment)
        logger.info(
            "journey_assigned",
            user_id=user_id.value,
            journey_id=journey_id.value,
            assigned_by=assigned_by.value,
        )
        return assignment

    def mark_started(self, user_id: UserId, journey_id: JourneyId) -> JourneyAssignment:
        """
        Move ``assigned`` to ``in_progress``; any other status is left untouched.

        Raises:
            JourneyAssignmentNotFoundError: If the learner has no assignment
        """
        assignment = self._get(user_id, journey_id)
        if assignment.mark_started(self.clock()):
            assignment = self.assignment_repository.save(assignment)
            logger.info("journey_started", user_id=user_id.value, journey_id=journey_id.value)
        return assignment

    def mark_completed(self, user_id: UserId, journey_id: JourneyId) -> JourneyAssignment:
        """
        Move the assignment to ``completed`` from any status.

        Raises:
            JourneyAssignmentNotFoundError: If the learner has no assignment
        """
        assignment = self._get(user_id, journey_id)
        assignment.mark_completed(self.clock())
        assignment = self.assignment_repository.save(assignment)
        logger.info("journey_completed", user_id=user_id.value, journey_id=journey_id.value)
        return assignment

    def unassign(self, user_id: UserId, journey_id: JourneyId) -> bool:
        """Delete the assignment whatever its status. Returns False if there was none."""
        deleted = self.assignment_repository.delete(user_id, journey_id)
        if deleted:
            logger.info("journey_unassigned", user_id=user_id.value, journey_id=journey_id.value)
        return deleted

    def _get(self, user_id: UserId, journey_id: JourneyId) -> JourneyAssignment:
        assignment = self.assignment_repository.find_by_user_and_journey(user_id, journey_id)
        if assignment is None:
            raise JourneyAssignmentNotFoundError(user_id.value, journey_id.value)
        return assignment
