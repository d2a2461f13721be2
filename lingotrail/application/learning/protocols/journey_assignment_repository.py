from typing import Protocol

from lingotrail.application.common.pagination import Pagination
from lingotrail.domain.common.value_objects.ids import JourneyId, UserId
from lingotrail.domain.learning.entities.journey_assignment import (
    AssignmentStatus,
    JourneyAssignment,
)


class JourneyAssignmentRepositoryProtocol(Protocol):
    def find_by_user_and_journey(
        self, user_id: UserId, journey_id: JourneyId
    ) -> JourneyAssignment | None: ...

    def find_by_user(
        self, user_id: UserId, status: AssignmentStatus | None, pagination: Pagination
    ) -> tuple[list[JourneyAssignment], int]: ...

    def find_by_journey(
        self, journey_id: JourneyId, status: AssignmentStatus | None, pagination: Pagination
    ) -> tuple[list[JourneyAssignment], int]: ...

    def save(self, assignment: JourneyAssignment) -> JourneyAssignment:
        """
        Save an assignment (create or update).

        Raises:
            AlreadyAssignedError: If creating violates the (user, journey) uniqueness
        """
        ...

    def delete(self, user_id: UserId, journey_id: JourneyId) -> bool: ...
