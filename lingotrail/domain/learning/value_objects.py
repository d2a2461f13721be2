"""Read models of the learning context.

These are immutable snapshots of content rows (topics, journeys, quiz
questions) and of derived progress. They carry no behaviour beyond
formatting helpers.
"""

from dataclasses import dataclass, field
from enum import StrEnum

from lingotrail.domain.common.value_objects import JourneyId, QuizQuestionId, TopicId, UserId


class QuestionType(StrEnum):
    TRANSLATION = "translation"
    LISTENING = "listening"
    IMAGE = "image"


ANSWER_OPTIONS = ("a", "b", "c", "d")


@dataclass(frozen=True)
class TopicSummary:
    """Topic as shown to a learner choosing what to study next."""

    topic_id: TopicId
    name: str
    sequence_order: int
    description: str | None = None
    level: str | None = None
    word_count: int = 0
    quiz_count: int = 0


@dataclass(frozen=True)
class JourneySummary:
    journey_id: JourneyId
    name: str
    created_by: UserId
    description: str | None = None
    topic_count: int = 0


@dataclass(frozen=True)
class QuizQuestion:
    """Multiple-choice question attached to a topic."""

    id: QuizQuestionId
    topic_id: TopicId
    question_type: QuestionType
    question_text: str
    correct_answer: str
    options: dict[str, str] = field(default_factory=dict)

    def is_correct(self, answer: str) -> bool:
        return answer == self.correct_answer


@dataclass(frozen=True)
class ProgressSnapshot:
    """
    Derived progress of one learner on one journey.

    progress_percent is rounded half-up to one decimal place and is 0 for a
    journey without topics.
    """

    total_topics: int
    completed_topics: int
    progress_percent: float
    next_topic: TopicSummary | None = None

    @property
    def is_finished(self) -> bool:
        return self.total_topics > 0 and self.completed_topics >= self.total_topics
