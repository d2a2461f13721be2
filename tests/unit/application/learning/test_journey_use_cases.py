from datetime import UTC, datetime

import pytest

from lingotrail.application.common.pagination import Pagination
from lingotrail.application.learning.use_cases.journey_assignment_use_case import (
    JourneyAssignmentUseCase,
)
from lingotrail.application.learning.use_cases.journey_progress_use_case import (
    JourneyProgressUseCase,
)
from lingotrail.domain.common.value_objects.ids import TopicId, UserId
from lingotrail.domain.identity.entities.user import Role
from lingotrail.domain.learning.entities.journey_assignment import AssignmentStatus
from lingotrail.domain.learning.entities.progress_event import ProgressEvent
from lingotrail.domain.learning.exceptions import (
    JourneyAssignmentNotFoundError,
    JourneyNotFinishedError,
)
from lingotrail.exceptions import JourneyNotFoundError

TEACHER_ID = 50


@pytest.fixture
def assignment_use_case(
    content, assignments, users, status_machine, aggregator
) -> JourneyAssignmentUseCase:
    users.add(TEACHER_ID, Role.TEACHER)
    return JourneyAssignmentUseCase(
        content_repository=content,
        assignment_repository=assignments,
        user_repository=users,
        status_machine=status_machine,
        progress_aggregator=aggregator,
    )


@pytest.fixture
def journey(content):
    content.add_topic(1)
    content.add_topic(2)
    return content.add_journey(1, [(1, 1), (2, 2)])


def complete_flashcards(store, user_id: int, topic_id: int) -> None:
    store.find_or_update_progress_event(
        ProgressEvent.flashcard_completion(
            user_id=UserId(user_id),
            topic_id=TopicId(topic_id),
            journey_id=None,
            time_spent_seconds=10,
            completed_at=datetime(2026, 3, 1, tzinfo=UTC),
        )
    )


class TestJourneyProgress:
    def test_returns_sorted_completed_ids(self, content, progress_store, aggregator, journey):
        use_case = JourneyProgressUseCase(
            content_repository=content, progress_aggregator=aggregator
        )
        complete_flashcards(progress_store, 1, 2)
        complete_flashcards(progress_store, 1, 1)

        progress = use_case.get_progress(1, journey.value)

        assert progress.completed_topic_ids == [TopicId(1), TopicId(2)]
        assert progress.snapshot.progress_percent == 100.0
        assert progress.journey.name == "Journey 1"

    def test_unknown_journey(self, content, aggregator):
        use_case = JourneyProgressUseCase(
            content_repository=content, progress_aggregator=aggregator
        )

        with pytest.raises(JourneyNotFoundError):
            use_case.get_progress(1, 404)


class TestAssignJourney:
    def test_assigns_known_users_and_skips_duplicates(
        self, assignment_use_case, users, journey
    ):
        users.add(1)
        users.add(2)

        first = assignment_use_case.assign_journey(journey.value, [1, 2, 2], TEACHER_ID)
        second = assignment_use_case.assign_journey(journey.value, [1, 2], TEACHER_ID)

        assert [a.user_id for a in first] == [UserId(1), UserId(2)]
        assert all(a.assigned_by == UserId(TEACHER_ID) for a in first)
        assert second == []

    def test_skips_unknown_users(self, assignment_use_case, users, journey):
        users.add(1)

        created = assignment_use_case.assign_journey(journey.value, [1, 999], TEACHER_ID)

        assert [a.user_id for a in created] == [UserId(1)]

    def test_unknown_journey(self, assignment_use_case, users):
        users.add(1)

        with pytest.raises(JourneyNotFoundError):
            assignment_use_case.assign_journey(404, [1], TEACHER_ID)

    def test_unassign_counts_removed(self, assignment_use_case, users, journey):
        users.add(1)
        assignment_use_case.assign_journey(journey.value, [1], TEACHER_ID)

        assert assignment_use_case.unassign_journey(journey.value, [1, 2]) == 1


class TestCompleteJourney:
    def test_requires_every_topic(self, assignment_use_case, users, progress_store, journey):
        users.add(1)
        assignment_use_case.assign_journey(journey.value, [1], TEACHER_ID)
        complete_flashcards(progress_store, 1, 1)

        with pytest.raises(JourneyNotFinishedError) as exc_info:
            assignment_use_case.complete_journey(journey.value, 1)

        assert exc_info.value.progress_percent == 50.0

    def test_completes_finished_journey(
        self, assignment_use_case, users, progress_store, journey
    ):
        users.add(1)
        assignment_use_case.assign_journey(journey.value, [1], TEACHER_ID)
        assignment_use_case.start_journey(journey.value, 1)
        complete_flashcards(progress_store, 1, 1)
        complete_flashcards(progress_store, 1, 2)

        assignment = assignment_use_case.complete_journey(journey.value, 1)

        assert assignment.status == AssignmentStatus.COMPLETED

    def test_finishing_topics_does_not_complete_assignment(
        self, assignment_use_case, assignments, users, progress_store, journey
    ):
        users.add(1)
        assignment_use_case.assign_journey(journey.value, [1], TEACHER_ID)
        complete_flashcards(progress_store, 1, 1)
        complete_flashcards(progress_store, 1, 2)

        stored = assignments.find_by_user_and_journey(UserId(1), journey)

        assert stored.status == AssignmentStatus.ASSIGNED

    def test_unassigned_learner(self, assignment_use_case, progress_store, journey):
        complete_flashcards(progress_store, 1, 1)
        complete_flashcards(progress_store, 1, 2)

        with pytest.raises(JourneyAssignmentNotFoundError):
            assignment_use_case.complete_journey(journey.value, 1)


class TestListings:
    def test_user_journeys_carry_progress(
        self, assignment_use_case, users, progress_store, journey
    ):
        users.add(1)
        assignment_use_case.assign_journey(journey.value, [1], TEACHER_ID)
        complete_flashcards(progress_store, 1, 1)

        page = assignment_use_case.get_user_journeys(1)

        assert page.total == 1
        item = page.items[0]
        assert item.snapshot.completed_topics == 1
        assert item.snapshot.next_topic.topic_id == TopicId(2)
        assert item.journey.name == "Journey 1"
        assert item.user.username == "user1"

    def test_status_filter_and_pagination(self, assignment_use_case, users, clock, journey):
        for user_id in (1, 2, 3):
            users.add(user_id)
            assignment_use_case.assign_journey(journey.value, [user_id], TEACHER_ID)
            clock.advance(minutes=1)
        assignment_use_case.start_journey(journey.value, 2)

        started = assignment_use_case.get_journey_assignments(
            journey.value, AssignmentStatus.IN_PROGRESS
        )
        first_page = assignment_use_case.get_journey_assignments(
            journey.value, pagination=Pagination(page=1, page_size=2)
        )

        assert [item.assignment.user_id for item in started.items] == [UserId(2)]
        assert first_page.total == 3
        assert first_page.total_pages == 2
        assert [item.assignment.user_id for item in first_page.items] == [UserId(3), UserId(2)]

    def test_assignments_of_unknown_journey(self, assignment_use_case):
        with pytest.raises(JourneyNotFoundError):
            assignment_use_case.get_journey_assignments(404)
