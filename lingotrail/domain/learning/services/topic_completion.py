"""Domain service deciding which topics of a journey a learner has finished."""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from lingotrail.domain.common.value_objects import TopicId
from lingotrail.domain.learning.entities.progress_event import ActivityType, ProgressEvent
from lingotrail.domain.learning.value_objects import TopicSummary


class TopicCompletionPolicy:
    """Stateless rules shared by every progress query."""

    @staticmethod
    def is_topic_completed(quiz_count: int, events: Iterable[ProgressEvent]) -> bool:
        """
        A topic is completed when a completed flashcard event exists and,
        if the topic has quizzes, a completed quiz event exists as well.

        Event order does not matter.
        """
        flashcard_done = False
        quiz_done = False
        for event in events:
            if not event.completed:
                continue
            if event.activity_type == ActivityType.FLASHCARD:
                flashcard_done = True
            elif event.activity_type == ActivityType.QUIZ:
                quiz_done = True
        return flashcard_done and (quiz_count == 0 or quiz_done)

    @staticmethod
    def progress_percent(completed: int, total: int) -> float:
        """Completion percentage rounded half-up to one decimal; 0 when there are no topics."""
        if total == 0:
            return 0.0
        ratio = Decimal(completed) * 100 / Decimal(total)
        return float(ratio.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))

    @staticmethod
    def next_topic(
        topics: Iterable[TopicSummary], completed_ids: set[TopicId]
    ) -> TopicSummary | None:
        """
        First unfinished topic by sequence_order.

        sorted() is stable, so topics sharing a sequence_order keep the order
        they were given in.
        """
        for topic in sorted(topics, key=lambda t: t.sequence_order):
            if topic.topic_id not in completed_ids:
                return topic
        return None
