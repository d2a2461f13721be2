"""In-memory repositories for application-layer tests."""

from dataclasses import replace
from datetime import UTC, datetime, timedelta

import pytest

from lingotrail.application.common.pagination import Pagination
from lingotrail.application.learning.services.journey_status_machine import (
    JourneyStatusMachine,
)
from lingotrail.application.learning.services.progress_aggregator import ProgressAggregator
from lingotrail.domain.common.value_objects.ids import (
    InvitationId,
    JourneyAssignmentId,
    JourneyId,
    ProgressEventId,
    QuizQuestionId,
    TopicId,
    UserId,
)
from lingotrail.domain.identity.entities.user import Role, User
from lingotrail.domain.learning.entities.journey_assignment import (
    AssignmentStatus,
    JourneyAssignment,
)
from lingotrail.domain.learning.entities.journey_invitation import JourneyInvitation
from lingotrail.domain.learning.entities.progress_event import ActivityType, ProgressEvent
from lingotrail.domain.learning.exceptions import AlreadyAssignedError
from lingotrail.domain.learning.value_objects import (
    JourneySummary,
    QuestionType,
    QuizQuestion,
    TopicSummary,
)


class FakeClock:
    def __init__(self) -> None:
        self.now = datetime(2026, 3, 1, 9, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


class InMemoryContentRepository:
    def __init__(self) -> None:
        self.journeys: dict[int, JourneySummary] = {}
        self.topics: dict[int, str] = {}
        self.questions: dict[int, list[QuizQuestion]] = {}
        self.links: list[tuple[int, int, int]] = []
        self._question_ids = 0
        self.quiz_count_reads = 0
        self.failure: Exception | None = None

    def add_topic(self, topic_id: int, quiz_count: int = 0) -> TopicId:
        self.topics[topic_id] = f"Topic {topic_id}"
        self.questions[topic_id] = []
        for _ in range(quiz_count):
            self._question_ids += 1
            self.questions[topic_id].append(
                QuizQuestion(
                    id=QuizQuestionId(self._question_ids),
                    topic_id=TopicId(topic_id),
                    question_type=QuestionType.TRANSLATION,
                    question_text=f"Question {self._question_ids}",
                    correct_answer="a",
                    options={"a": "right", "b": "wrong", "c": "wrong", "d": "wrong"},
                )
            )
        return TopicId(topic_id)

    def add_journey(self, journey_id: int, topics: list[tuple[int, int]]) -> JourneyId:
        """topics: (topic_id, sequence_order) pairs in link creation order."""
        self.journeys[journey_id] = JourneySummary(
            journey_id=JourneyId(journey_id),
            name=f"Journey {journey_id}",
            created_by=UserId(100),
            topic_count=len(topics),
        )
        for topic_id, order in topics:
            self.links.append((journey_id, topic_id, order))
        return JourneyId(journey_id)

    def get_journey_topics(self, journey_id: JourneyId) -> list[TopicSummary]:
        if self.failure is not None:
            raise self.failure
        links = [link for link in self.links if link[0] == journey_id.value]
        return [
            TopicSummary(
                topic_id=TopicId(topic_id),
                name=self.topics[topic_id],
                sequence_order=order,
                quiz_count=len(self.questions[topic_id]),
            )
            for _, topic_id, order in sorted(links, key=lambda link: link[2])
        ]

    def get_quiz_count(self, topic_id: TopicId) -> int:
        self.quiz_count_reads += 1
        return len(self.questions.get(topic_id.value, []))

    def get_quiz_questions(self, topic_id: TopicId) -> list[QuizQuestion]:
        return list(self.questions.get(topic_id.value, []))

    def find_journey(self, journey_id: JourneyId) -> JourneySummary | None:
        return self.journeys.get(journey_id.value)

    def topic_exists(self, topic_id: TopicId) -> bool:
        return topic_id.value in self.topics


class InMemoryProgressStore:
    def __init__(self) -> None:
        self.events: list[ProgressEvent] = []
        self.reads = 0
        self.failure: Exception | None = None

    def find_progress_events(
        self, user_id: UserId, topic_id: TopicId, activity_type: ActivityType | None = None
    ) -> list[ProgressEvent]:
        self.reads += 1
        if self.failure is not None:
            raise self.failure
        return [
            event
            for event in self.events
            if event.user_id == user_id
            and event.topic_id == topic_id
            and (activity_type is None or event.activity_type == activity_type)
        ]

    def create_progress_event(self, event: ProgressEvent) -> ProgressEvent:
        saved = replace(event, id=ProgressEventId(len(self.events) + 1))
        self.events.append(saved)
        return saved

    def find_or_update_progress_event(self, event: ProgressEvent) -> ProgressEvent:
        for existing in self.find_progress_events(
            event.user_id, event.topic_id, event.activity_type
        ):
            existing.record_repeat_session(event.time_spent_seconds, event.completed_at)
            return existing
        return self.create_progress_event(event)


class InMemoryAssignmentRepository:
    def __init__(self) -> None:
        self.rows: dict[int, JourneyAssignment] = {}
        self.saves = 0

    def find_by_user_and_journey(
        self, user_id: UserId, journey_id: JourneyId
    ) -> JourneyAssignment | None:
        for row in self.rows.values():
            if row.user_id == user_id and row.journey_id == journey_id:
                return replace(row)
        return None

    def find_by_user(
        self, user_id: UserId, status: AssignmentStatus | None, pagination: Pagination
    ) -> tuple[list[JourneyAssignment], int]:
        rows = [r for r in self.rows.values() if r.user_id == user_id]
        return self._page(rows, status, pagination)

    def find_by_journey(
        self, journey_id: JourneyId, status: AssignmentStatus | None, pagination: Pagination
    ) -> tuple[list[JourneyAssignment], int]:
        rows = [r for r in self.rows.values() if r.journey_id == journey_id]
        return self._page(rows, status, pagination)

    def save(self, assignment: JourneyAssignment) -> JourneyAssignment:
        self.saves += 1
        if assignment.id.is_transient:
            if self.find_by_user_and_journey(assignment.user_id, assignment.journey_id):
                raise AlreadyAssignedError(assignment.user_id.value, assignment.journey_id.value)
            assignment = replace(assignment, id=JourneyAssignmentId(len(self.rows) + 1))
        self.rows[assignment.id.value] = replace(assignment)
        return assignment

    def delete(self, user_id: UserId, journey_id: JourneyId) -> bool:
        existing = self.find_by_user_and_journey(user_id, journey_id)
        if existing is None:
            return False
        del self.rows[existing.id.value]
        return True

    def _page(
        self,
        rows: list[JourneyAssignment],
        status: AssignmentStatus | None,
        pagination: Pagination,
    ) -> tuple[list[JourneyAssignment], int]:
        if status is not None:
            rows = [r for r in rows if r.status == status]
        rows.sort(key=lambda r: (r.assigned_at, r.id.value), reverse=True)
        return rows[pagination.offset : pagination.offset + pagination.limit], len(rows)


class InMemoryInvitationRepository:
    def __init__(self) -> None:
        self.rows: dict[int, JourneyInvitation] = {}

    def find_by_id(self, invitation_id: InvitationId) -> JourneyInvitation | None:
        row = self.rows.get(invitation_id.value)
        return replace(row) if row else None

    def find_by_token(self, token: str) -> JourneyInvitation | None:
        for row in self.rows.values():
            if row.token == token:
                return replace(row)
        return None

    def find_by_journey(self, journey_id: JourneyId) -> list[JourneyInvitation]:
        rows = [r for r in self.rows.values() if r.journey_id == journey_id]
        return sorted(rows, key=lambda r: r.id.value, reverse=True)

    def save(self, invitation: JourneyInvitation) -> JourneyInvitation:
        if invitation.id.is_transient:
            invitation = replace(invitation, id=InvitationId(len(self.rows) + 1))
        self.rows[invitation.id.value] = replace(invitation)
        return invitation

    def claim_use(self, invitation_id: InvitationId) -> bool:
        row = self.rows.get(invitation_id.value)
        if row is None or not row.is_active or row.is_exhausted():
            return False
        row.current_uses += 1
        return True

    def release_use(self, invitation_id: InvitationId) -> None:
        row = self.rows.get(invitation_id.value)
        if row is not None and row.current_uses > 0:
            row.current_uses -= 1


class InMemoryUserRepository:
    def __init__(self) -> None:
        self.users: dict[int, User] = {}

    def add(self, user_id: int, *roles: Role) -> UserId:
        self.users[user_id] = User.create_with_id(
            id=UserId(user_id),
            username=f"user{user_id}",
            name=f"User {user_id}",
            email=None,
            roles=frozenset(roles or (Role.LEARNER,)),
        )
        return UserId(user_id)

    def find_by_id(self, user_id: UserId) -> User | None:
        return self.users.get(user_id.value)

    def find_by_ids(self, user_ids: list[UserId]) -> list[User]:
        return [self.users[u.value] for u in user_ids if u.value in self.users]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def content() -> InMemoryContentRepository:
    return InMemoryContentRepository()


@pytest.fixture
def progress_store() -> InMemoryProgressStore:
    return InMemoryProgressStore()


@pytest.fixture
def assignments() -> InMemoryAssignmentRepository:
    return InMemoryAssignmentRepository()


@pytest.fixture
def invitations() -> InMemoryInvitationRepository:
    return InMemoryInvitationRepository()


@pytest.fixture
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def aggregator(
    content: InMemoryContentRepository, progress_store: InMemoryProgressStore
) -> ProgressAggregator:
    return ProgressAggregator(content_repository=content, progress_store=progress_store)


@pytest.fixture
def status_machine(
    assignments: InMemoryAssignmentRepository, clock: FakeClock
) -> JourneyStatusMachine:
    return JourneyStatusMachine(assignment_repository=assignments, clock=clock)
