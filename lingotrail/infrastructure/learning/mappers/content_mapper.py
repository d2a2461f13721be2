"""Mapper from content ORM rows to learning read models."""

from lingotrail.domain.common.value_objects import JourneyId, QuizQuestionId, TopicId, UserId
from lingotrail.domain.learning.value_objects import (
    ANSWER_OPTIONS,
    JourneySummary,
    QuestionType,
    QuizQuestion,
    TopicSummary,
)
from lingotrail.models import Journey as JourneyORM
from lingotrail.models import QuizQuestion as QuizQuestionORM
from lingotrail.models import Topic as TopicORM


class ContentMapper:
    """Read-only conversions; content is never written through the learning context."""

    def to_topic_summary(
        self, orm_model: TopicORM, sequence_order: int, word_count: int, quiz_count: int
    ) -> TopicSummary:
        return TopicSummary(
            topic_id=TopicId(orm_model.id),
            name=orm_model.name,
            sequence_order=sequence_order,
            description=orm_model.description,
            level=orm_model.level,
            word_count=word_count,
            quiz_count=quiz_count,
        )

    def to_journey_summary(self, orm_model: JourneyORM, topic_count: int) -> JourneySummary:
        return JourneySummary(
            journey_id=JourneyId(orm_model.id),
            name=orm_model.name,
            created_by=UserId(orm_model.created_by),
            description=orm_model.description,
            topic_count=topic_count,
        )

    def to_quiz_question(self, orm_model: QuizQuestionORM) -> QuizQuestion:
        return QuizQuestion(
            id=QuizQuestionId(orm_model.id),
            topic_id=TopicId(orm_model.topic_id),
            question_type=QuestionType(orm_model.question_type),
            question_text=orm_model.question_text,
            correct_answer=orm_model.correct_answer,
            options={key: getattr(orm_model, f"option_{key}") for key in ANSWER_OPTIONS},
        )
