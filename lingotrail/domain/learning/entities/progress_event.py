"""
Progress event entity.

A progress event records that a learner finished (or attempted) one activity
for one topic. Events are appended; the only in-place change is a repeated
flashcard session of the same topic, which adds to the time spent.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from lingotrail.domain.common.entity import Entity
from lingotrail.domain.common.exceptions import DomainError, ValidationError
from lingotrail.domain.common.value_objects import JourneyId, ProgressEventId, TopicId, UserId


class ActivityType(StrEnum):
    """Activities a learner can complete for a topic."""

    FLASHCARD = "flashcard"
    QUIZ = "quiz"


@dataclass
class ProgressEvent(Entity[ProgressEventId]):
    """
    One learner's result for one activity on one topic.

    Business Rules:
    - time_spent_seconds is never negative
    - score, when present, is a percentage between 0 and 100
    - only flashcard events accumulate repeated sessions
    """

    id: ProgressEventId
    user_id: UserId
    topic_id: TopicId
    activity_type: ActivityType
    completed: bool
    journey_id: JourneyId | None = None
    score: float | None = None
    max_score: float | None = None
    time_spent_seconds: int = 0
    completed_at: datetime | None = None
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.time_spent_seconds < 0:
            raise ValidationError(
                "Time spent cannot be negative",
                field="time_spent_seconds",
                value=self.time_spent_seconds,
            )
        if self.score is not None and not 0 <= self.score <= 100:
            raise ValidationError(
                "Score must be between 0 and 100", field="score", value=self.score
            )

    @property
    def is_flashcard(self) -> bool:
        return self.activity_type == ActivityType.FLASHCARD

    @property
    def is_quiz(self) -> bool:
        return self.activity_type == ActivityType.QUIZ

    def record_repeat_session(
        self, time_spent_seconds: int, completed_at: datetime | None
    ) -> None:
        """
        Fold another flashcard session for the same topic into this event.

        Args:
            time_spent_seconds: Duration of the new session
            completed_at: When the new session finished

        Raises:
            DomainError: If this is not a flashcard event
            ValidationError: If the duration is negative
        """
        if not self.is_flashcard:
            raise DomainError("Only flashcard events accumulate repeated sessions")
        if time_spent_seconds < 0:
            raise ValidationError(
                "Time spent cannot be negative",
                field="time_spent_seconds",
                value=time_spent_seconds,
            )
        self.completed = True
        self.time_spent_seconds += time_spent_seconds
        self.completed_at = completed_at

    @classmethod
    def flashcard_completion(
        cls,
        user_id: UserId,
        topic_id: TopicId,
        journey_id: JourneyId | None,
        time_spent_seconds: int,
        completed_at: datetime,
    ) -> "ProgressEvent":
        """Create a completed flashcard event (ID will be 0 until persisted)."""
        return cls(
            id=ProgressEventId.generate(),
            user_id=user_id,
            topic_id=topic_id,
            journey_id=journey_id,
            activity_type=ActivityType.FLASHCARD,
            completed=True,
            time_spent_seconds=time_spent_seconds,
            completed_at=completed_at,
        )

    @classmethod
    def quiz_result(
        cls,
        user_id: UserId,
        topic_id: TopicId,
        journey_id: JourneyId | None,
        score: float,
        passed: bool,
        time_spent_seconds: int,
        completed_at: datetime,
    ) -> "ProgressEvent":
        """Create a quiz event; only a passing attempt counts as completed."""
        return cls(
            id=ProgressEventId.generate(),
            user_id=user_id,
            topic_id=topic_id,
            journey_id=journey_id,
            activity_type=ActivityType.QUIZ,
            completed=passed,
            score=score,
            max_score=100.0,
            time_spent_seconds=time_spent_seconds,
            completed_at=completed_at,
        )

    @classmethod
    def create_with_id(
        cls,
        id: ProgressEventId,
        user_id: UserId,
        topic_id: TopicId,
        activity_type: ActivityType,
        completed: bool,
        journey_id: JourneyId | None,
        score: float | None,
        max_score: float | None,
        time_spent_seconds: int,
        completed_at: datetime | None,
        created_at: datetime | None,
    ) -> "ProgressEvent":
        """Reconstitute a progress event from persistence."""
        return cls(
            id=id,
            user_id=user_id,
            topic_id=topic_id,
            activity_type=activity_type,
            completed=completed,
            journey_id=journey_id,
            score=score,
            max_score=max_score,
            time_spent_seconds=time_spent_seconds,
            completed_at=completed_at,
            created_at=created_at,
        )
