"""Protocol for the read-only content side of the learning context."""

from typing import Protocol

from lingotrail.domain.common.value_objects.ids import JourneyId, TopicId
from lingotrail.domain.learning.value_objects import JourneySummary, QuizQuestion, TopicSummary


class ContentRepositoryProtocol(Protocol):
    """Journeys, topics and quiz questions as the progress core needs them."""

    def get_journey_topics(self, journey_id: JourneyId) -> list[TopicSummary]:
        """
        Get the topics linked to a journey.

        Args:
            journey_id: The journey ID

        Returns:
            Topics ordered by sequence_order, ties kept in link insertion order.
            Empty list for a journey without topics.
        """
        ...

    def get_quiz_count(self, topic_id: TopicId) -> int:
        """Number of quiz questions attached to a topic."""
        ...

    def get_quiz_questions(self, topic_id: TopicId) -> list[QuizQuestion]:
        """Quiz questions of a topic in creation order."""
        ...

    def find_journey(self, journey_id: JourneyId) -> JourneySummary | None:
        """Journey summary or None if the journey does not exist."""
        ...

    def topic_exists(self, topic_id: TopicId) -> bool: ...
