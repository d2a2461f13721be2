"""Application service deriving journey progress from progress events."""

import structlog

from lingotrail.application.learning.protocols.content_repository import (
    ContentRepositoryProtocol,
)
from lingotrail.application.learning.protocols.progress_store import ProgressStoreProtocol
from lingotrail.domain.common.value_objects.ids import JourneyId, TopicId, UserId
from lingotrail.domain.learning.entities.progress_event import ActivityType
from lingotrail.domain.learning.services.topic_completion import TopicCompletionPolicy
from lingotrail.domain.learning.value_objects import ProgressSnapshot, TopicSummary

logger = structlog.get_logger(__name__)


class ProgressAggregator:
    """
    Computes completed topics, completion percentage and the next unlocked
    topic for a learner on a journey.

    Nothing is cached: every call re-reads links and events, so the result
    always reflects the latest writes. Storage errors propagate unchanged.
    The aggregator never changes assignment status.
    """

    def __init__(
        self,
        content_repository: ContentRepositoryProtocol,
        progress_store: ProgressStoreProtocol,
    ) -> None:
        self.content_repository = content_repository
        self.progress_store = progress_store
        self.policy = TopicCompletionPolicy()

    def get_completed_topic_ids(self, user_id: UserId, journey_id: JourneyId) -> set[TopicId]:
        """
        Topics of the journey the learner has completed.

        The caller validates that the journey exists; an unknown or empty
        journey yields an empty set.
        """
        topics = self.content_repository.get_journey_topics(journey_id)
        return self._completed_ids(user_id, topics)

    def get_journey_progress(self, user_id: UserId, journey_id: JourneyId) -> ProgressSnapshot:
        """Totals, rounded percentage and next topic in one snapshot."""
        snapshot, _ = self.get_snapshot(user_id, journey_id)
        return snapshot

    def get_next_topic(self, user_id: UserId, journey_id: JourneyId) -> TopicSummary | None:
        """
        First topic by ascending sequence_order that is not completed.

        Returns None once every topic is completed. Marking the assignment
        completed is left to the caller.
        """
        topics = self.content_repository.get_journey_topics(journey_id)
        return self.policy.next_topic(topics, self._completed_ids(user_id, topics))

    def get_snapshot(
        self, user_id: UserId, journey_id: JourneyId
    ) -> tuple[ProgressSnapshot, set[TopicId]]:
        """
        Snapshot plus the completed topic IDs, computed from a single read of
        the journey's topics.
        """
        topics = self.content_repository.get_journey_topics(journey_id)
        completed_ids = self._completed_ids(user_id, topics)
        total = len(topics)
        completed = len(completed_ids)
        snapshot = ProgressSnapshot(
            total_topics=total,
            completed_topics=completed,
            progress_percent=self.policy.progress_percent(completed, total),
            next_topic=self.policy.next_topic(topics, completed_ids),
        )
        logger.debug(
            "journey_progress_computed",
            user_id=user_id.value,
            journey_id=journey_id.value,
            total_topics=total,
            completed_topics=completed,
        )
        return snapshot, completed_ids

    def is_topic_completed(
        self, user_id: UserId, topic_id: TopicId, quiz_count: int | None = None
    ) -> bool:
        """
        Apply the completion rule to one topic.

        Pass ``quiz_count`` when it is already known, e.g. from the journey's
        TopicSummary, to skip the count query.
        """
        flashcard_events = self.progress_store.find_progress_events(
            user_id, topic_id, ActivityType.FLASHCARD
        )
        if not any(event.completed for event in flashcard_events):
            return False
        if quiz_count is None:
            quiz_count = self.content_repository.get_quiz_count(topic_id)
        if quiz_count == 0:
            return True
        quiz_events = self.progress_store.find_progress_events(
            user_id, topic_id, ActivityType.QUIZ
        )
        return self.policy.is_topic_completed(quiz_count, [*flashcard_events, *quiz_events])

    def _completed_ids(self, user_id: UserId, topics: list[TopicSummary]) -> set[TopicId]:
        return {
            topic.topic_id
            for topic in topics
            if self.is_topic_completed(user_id, topic.topic_id, topic.quiz_count)
        }
