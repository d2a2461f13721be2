"""Read-only repository for journeys, topics and quiz questions."""

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from lingotrail.domain.common.value_objects.ids import JourneyId, TopicId
from lingotrail.domain.learning.value_objects import JourneySummary, QuizQuestion, TopicSummary
from lingotrail.infrastructure.common.storage import storage_errors
from lingotrail.infrastructure.learning.mappers.content_mapper import ContentMapper
from lingotrail.models import Journey as JourneyORM
from lingotrail.models import JourneyTopic as JourneyTopicORM
from lingotrail.models import QuizQuestion as QuizQuestionORM
from lingotrail.models import Topic as TopicORM
from lingotrail.models import TopicWord as TopicWordORM

logger = logging.getLogger(__name__)


class ContentRepository:
    """Journeys, topics and quizzes as seen by the progress core."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = ContentMapper()

    def get_journey_topics(self, journey_id: JourneyId) -> list[TopicSummary]:
        """
        Get the topics of a journey in curriculum order.

        Args:
            journey_id: The journey ID

        Returns:
            Topics ordered by sequence_order, then by link id so that equal
            positions keep the order they were added in
        """
        with storage_errors(self.db, "load journey topics"):
            stmt = (
                select(TopicORM, JourneyTopicORM.sequence_order)
                .join(JourneyTopicORM, JourneyTopicORM.topic_id == TopicORM.id)
                .where(JourneyTopicORM.journey_id == journey_id.value)
                .order_by(JourneyTopicORM.sequence_order, JourneyTopicORM.id)
            )
            rows = self.db.execute(stmt).all()
            topic_ids = [topic.id for topic, _ in rows]
            word_counts = self._count_by_topic(TopicWordORM.topic_id, topic_ids)
            quiz_counts = self._count_by_topic(QuizQuestionORM.topic_id, topic_ids)

        return [
            self.mapper.to_topic_summary(
                topic,
                sequence_order=sequence_order,
                word_count=word_counts.get(topic.id, 0),
                quiz_count=quiz_counts.get(topic.id, 0),
            )
            for topic, sequence_order in rows
        ]

    def get_quiz_count(self, topic_id: TopicId) -> int:
        with storage_errors(self.db, "count quiz questions"):
            stmt = select(func.count(QuizQuestionORM.id)).where(
                QuizQuestionORM.topic_id == topic_id.value
            )
            return self.db.execute(stmt).scalar() or 0

    def get_quiz_questions(self, topic_id: TopicId) -> list[QuizQuestion]:
        with storage_errors(self.db, "load quiz questions"):
            stmt = (
                select(QuizQuestionORM)
                .where(QuizQuestionORM.topic_id == topic_id.value)
                .order_by(QuizQuestionORM.id)
            )
            orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_quiz_question(orm) for orm in orm_models]

    def find_journey(self, journey_id: JourneyId) -> JourneySummary | None:
        """
        Find a journey by ID.

        Returns:
            Journey summary with its topic count, or None if not found
        """
        with storage_errors(self.db, "load journey"):
            orm_model = self.db.get(JourneyORM, journey_id.value)
            if orm_model is None:
                return None
            topic_count = (
                self.db.execute(
                    select(func.count(JourneyTopicORM.id)).where(
                        JourneyTopicORM.journey_id == journey_id.value
                    )
                ).scalar()
                or 0
            )
        return self.mapper.to_journey_summary(orm_model, topic_count)

    def topic_exists(self, topic_id: TopicId) -> bool:
        with storage_errors(self.db, "load topic"):
            stmt = select(TopicORM.id).where(TopicORM.id == topic_id.value)
            return self.db.execute(stmt).scalar_one_or_none() is not None

    def _count_by_topic(
        self, column: InstrumentedAttribute[int], topic_ids: list[int]
    ) -> dict[int, int]:
        if not topic_ids:
            return {}
        stmt = (
            select(column, func.count())
            .where(column.in_(topic_ids))
            .group_by(column)
        )
        return {topic_id: count for topic_id, count in self.db.execute(stmt).all()}
