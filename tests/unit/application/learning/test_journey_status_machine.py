import pytest

from lingotrail.domain.common.value_objects.ids import JourneyId, UserId
from lingotrail.domain.learning.entities.journey_assignment import AssignmentStatus
from lingotrail.domain.learning.exceptions import (
    AlreadyAssignedError,
    JourneyAssignmentNotFoundError,
)

LEARNER = UserId(1)
TEACHER = UserId(50)
JOURNEY = JourneyId(7)


class TestAssign:
    def test_creates_assigned_row(self, status_machine, clock) -> None:
        assignment = status_machine.assign(LEARNER, JOURNEY, TEACHER)

        assert not assignment.id.is_transient
        assert assignment.status == AssignmentStatus.ASSIGNED
        assert assignment.assigned_by == TEACHER
        assert assignment.assigned_at == clock.now

    def test_rejects_duplicate(self, status_machine) -> None:
        status_machine.assign(LEARNER, JOURNEY, TEACHER)

        with pytest.raises(AlreadyAssignedError):
            status_machine.assign(LEARNER, JOURNEY, TEACHER)


class TestMarkStarted:
    def test_moves_to_in_progress(self, status_machine, clock) -> None:
        status_machine.assign(LEARNER, JOURNEY, TEACHER)
        clock.advance(hours=1)

        assignment = status_machine.mark_started(LEARNER, JOURNEY)

        assert assignment.status == AssignmentStatus.IN_PROGRESS
        assert assignment.started_at == clock.now

    def test_second_call_changes_nothing(self, status_machine, assignments, clock) -> None:
        status_machine.assign(LEARNER, JOURNEY, TEACHER)
        first = status_machine.mark_started(LEARNER, JOURNEY)
        saves = assignments.saves
        clock.advance(days=2)

        second = status_machine.mark_started(LEARNER, JOURNEY)

        assert second.status == AssignmentStatus.IN_PROGRESS
        assert second.started_at == first.started_at
        assert assignments.saves == saves

    def test_completed_journey_stays_completed(self, status_machine) -> None:
        status_machine.assign(LEARNER, JOURNEY, TEACHER)
        status_machine.mark_completed(LEARNER, JOURNEY)

        assignment = status_machine.mark_started(LEARNER, JOURNEY)

        assert assignment.status == AssignmentStatus.COMPLETED

    def test_missing_assignment(self, status_machine) -> None:
        with pytest.raises(JourneyAssignmentNotFoundError):
            status_machine.mark_started(LEARNER, JOURNEY)


class TestMarkCompleted:
    def test_from_in_progress(self, status_machine, clock) -> None:
        status_machine.assign(LEARNER, JOURNEY, TEACHER)
        status_machine.mark_started(LEARNER, JOURNEY)
        clock.advance(days=3)

        assignment = status_machine.mark_completed(LEARNER, JOURNEY)

        assert assignment.status == AssignmentStatus.COMPLETED
        assert assignment.completed_at == clock.now

    def test_missing_assignment(self, status_machine) -> None:
        with pytest.raises(JourneyAssignmentNotFoundError):
            status_machine.mark_completed(LEARNER, JOURNEY)


class TestUnassign:
    def test_removes_any_status(self, status_machine, assignments) -> None:
        status_machine.assign(LEARNER, JOURNEY, TEACHER)
        status_machine.mark_completed(LEARNER, JOURNEY)

        assert status_machine.unassign(LEARNER, JOURNEY) is True
        assert assignments.find_by_user_and_journey(LEARNER, JOURNEY) is None

    def test_missing_assignment_returns_false(self, status_machine) -> None:
        assert status_machine.unassign(LEARNER, JOURNEY) is False
