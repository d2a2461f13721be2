"""
Journey assignment entity.

Tracks the coarse lifecycle of one learner on one journey:

    assigned ──mark_started──▶ in_progress ──mark_completed──▶ completed

``mark_completed`` is accepted from any state. Whether every topic is done is
decided by the caller from the progress aggregate; the assignment never
inspects progress itself.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from lingotrail.domain.common.entity import Entity
from lingotrail.domain.common.value_objects import JourneyAssignmentId, JourneyId, UserId


class AssignmentStatus(StrEnum):
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@dataclass
class JourneyAssignment(Entity[JourneyAssignmentId]):
    """
    A journey assigned to a learner.

    Business Rules:
    - One assignment per (user, journey); enforced at the repository level
    - Starting only moves an ``assigned`` journey; later calls are no-ops
    - Completing is unconditional and stamps completed_at
    """

    id: JourneyAssignmentId
    user_id: UserId
    journey_id: JourneyId
    assigned_by: UserId
    status: AssignmentStatus
    assigned_at: datetime
    started_at: datetime | None = None
    completed_at: datetime | None = None

    def mark_started(self, now: datetime) -> bool:
        """
        Move the assignment to in_progress.

        Args:
            now: Timestamp recorded as started_at

        Returns:
            True if the status changed, False if it was not ``assigned``
        """
        if self.status != AssignmentStatus.ASSIGNED:
            return False
        self.status = AssignmentStatus.IN_PROGRESS
        self.started_at = now
        return True

    def mark_completed(self, now: datetime) -> None:
        """Move the assignment to completed from whatever state it is in."""
        self.status = AssignmentStatus.COMPLETED
        self.completed_at = now

    @property
    def is_completed(self) -> bool:
        return self.status == AssignmentStatus.COMPLETED

    @classmethod
    def create(
        cls, user_id: UserId, journey_id: JourneyId, assigned_by: UserId, now: datetime
    ) -> "JourneyAssignment":
        """Create a new assignment in the ``assigned`` state (ID will be 0 until persisted)."""
        return cls(
            id=JourneyAssignmentId.generate(),
            user_id=user_id,
            journey_id=journey_id,
            assigned_by=assigned_by,
            status=AssignmentStatus.ASSIGNED,
            assigned_at=now,
        )

    @classmethod
    def create_with_id(
        cls,
        id: JourneyAssignmentId,
        user_id: UserId,
        journey_id: JourneyId,
        assigned_by: UserId,
        status: AssignmentStatus,
        assigned_at: datetime,
        started_at: datetime | None = None,
        completed_at: datetime | None = None,
    ) -> "JourneyAssignment":
        """Reconstitute an assignment from persistence."""
        return cls(
            id=id,
            user_id=user_id,
            journey_id=journey_id,
            assigned_by=assigned_by,
            status=status,
            assigned_at=assigned_at,
            started_at=started_at,
            completed_at=completed_at,
        )
