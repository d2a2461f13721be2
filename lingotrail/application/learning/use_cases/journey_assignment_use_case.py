"""Use case for assigning journeys and moving learners through them."""

import structlog

from lingotrail.application.common.pagination import PaginatedResult, Pagination
from lingotrail.application.identity.protocols.user_repository import UserRepositoryProtocol
from lingotrail.application.learning.protocols.content_repository import (
    ContentRepositoryProtocol,
)
from lingotrail.application.learning.protocols.journey_assignment_repository import (
    JourneyAssignmentRepositoryProtocol,
)
from lingotrail.application.learning.services.journey_status_machine import (
    JourneyStatusMachine,
)
from lingotrail.application.learning.services.progress_aggregator import ProgressAggregator
from lingotrail.application.learning.use_cases.dtos.journey_dtos import AssignmentWithProgress
from lingotrail.domain.common.value_objects.ids import JourneyId, UserId
from lingotrail.domain.learning.entities.journey_assignment import (
    AssignmentStatus,
    JourneyAssignment,
)
from lingotrail.domain.learning.exceptions import AlreadyAssignedError, JourneyNotFinishedError
from lingotrail.domain.learning.value_objects import JourneySummary
from lingotrail.exceptions import JourneyNotFoundError

logger = structlog.get_logger(__name__)


class JourneyAssignmentUseCase:
    """Assignment management for teachers and lifecycle actions for learners."""

    def __init__(
        self,
        content_repository: ContentRepositoryProtocol,
        assignment_repository: JourneyAssignmentRepositoryProtocol,
        user_repository: UserRepositoryProtocol,
        status_machine: JourneyStatusMachine,
        progress_aggregator: ProgressAggregator,
    ) -> None:
        self.content_repository = content_repository
        self.assignment_repository = assignment_repository
        self.user_repository = user_repository
        self.status_machine = status_machine
        self.progress_aggregator = progress_aggregator

    def assign_journey(
        self, journey_id: int, user_ids: list[int], assigned_by: int
    ) -> list[JourneyAssignment]:
        """
        Assign a journey to several learners.

        Learners who already have the journey and IDs that match no user are
        skipped.

        Returns:
            The assignments created by this call

        Raises:
            JourneyNotFoundError: If the journey does not exist
        """
        journey_id_vo = self._require_journey(journey_id).journey_id
        assigned_by_vo = UserId(assigned_by)

        unique_ids = list(dict.fromkeys(user_ids))
        users = self.user_repository.find_by_ids([UserId(user_id) for user_id in unique_ids])
        known = {user.id for user in users}

        created: list[JourneyAssignment] = []
        for user_id in unique_ids:
            user_id_vo = UserId(user_id)
            if user_id_vo not in known:
                logger.warning(
                    "assign_skipped_unknown_user", user_id=user_id, journey_id=journey_id
                )
                continue
            try:
                assignment = self.status_machine.assign(user_id_vo, journey_id_vo, assigned_by_vo)
            except AlreadyAssignedError:
                continue
            created.append(assignment)

        logger.info(
            "journey_assignment_batch",
            journey_id=journey_id,
            requested=len(unique_ids),
            assigned=len(created),
        )
        return created

    def unassign_journey(self, journey_id: int, user_ids: list[int]) -> int:
        """Remove the journey from the given learners. Returns how many were removed."""
        journey_id_vo = JourneyId(journey_id)
        removed = 0
        for user_id in dict.fromkeys(user_ids):
            if self.status_machine.unassign(UserId(user_id), journey_id_vo):
                removed += 1
        return removed

    def start_journey(self, journey_id: int, user_id: int) -> JourneyAssignment:
        """
        Mark the learner's journey as in progress.

        Calling it again on a started or completed journey changes nothing.

        Raises:
            JourneyAssignmentNotFoundError: If the journey is not assigned to the learner
        """
        return self.status_machine.mark_started(UserId(user_id), JourneyId(journey_id))

    def complete_journey(self, journey_id: int, user_id: int) -> JourneyAssignment:
        """
        Mark the learner's journey as completed once every topic is done.

        Raises:
            JourneyAssignmentNotFoundError: If the journey is not assigned to the learner
            JourneyNotFinishedError: If some topics are still unfinished
        """
        user_id_vo = UserId(user_id)
        journey_id_vo = JourneyId(journey_id)
        snapshot = self.progress_aggregator.get_journey_progress(user_id_vo, journey_id_vo)
        if not snapshot.is_finished:
            raise JourneyNotFinishedError(journey_id, snapshot.progress_percent)
        return self.status_machine.mark_completed(user_id_vo, journey_id_vo)

    def get_user_journeys(
        self,
        user_id: int,
        status: AssignmentStatus | None = None,
        pagination: Pagination | None = None,
    ) -> PaginatedResult[AssignmentWithProgress]:
        """Assignments of a learner, newest first, each with its progress."""
        pagination = pagination or Pagination()
        assignments, total = self.assignment_repository.find_by_user(
            UserId(user_id), status, pagination
        )
        return PaginatedResult(
            items=self._with_progress(assignments), total=total, pagination=pagination
        )

    def get_journey_assignments(
        self,
        journey_id: int,
        status: AssignmentStatus | None = None,
        pagination: Pagination | None = None,
    ) -> PaginatedResult[AssignmentWithProgress]:
        """
        Learners assigned to a journey, newest first, each with its progress.

        Raises:
            JourneyNotFoundError: If the journey does not exist
        """
        journey_id_vo = self._require_journey(journey_id).journey_id
        pagination = pagination or Pagination()
        assignments, total = self.assignment_repository.find_by_journey(
            journey_id_vo, status, pagination
        )
        return PaginatedResult(
            items=self._with_progress(assignments), total=total, pagination=pagination
        )

    def _with_progress(self, assignments: list[JourneyAssignment]) -> list[AssignmentWithProgress]:
        users = {
            user.id: user
            for user in self.user_repository.find_by_ids(list({a.user_id for a in assignments}))
        }
        journeys: dict[JourneyId, JourneySummary | None] = {}
        items = []
        for assignment in assignments:
            if assignment.journey_id not in journeys:
                journeys[assignment.journey_id] = self.content_repository.find_journey(
                    assignment.journey_id
                )
            items.append(
                AssignmentWithProgress(
                    assignment=assignment,
                    snapshot=self.progress_aggregator.get_journey_progress(
                        assignment.user_id, assignment.journey_id
                    ),
                    journey=journeys[assignment.journey_id],
                    user=users.get(assignment.user_id),
                )
            )
        return items

    def _require_journey(self, journey_id: int) -> JourneySummary:
        journey = self.content_repository.find_journey(JourneyId(journey_id))
        if journey is None:
            raise JourneyNotFoundError(journey_id)
        return journey
