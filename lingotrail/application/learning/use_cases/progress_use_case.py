"""Use cases recording flashcard sessions and quiz attempts."""

from collections.abc import Callable
from datetime import datetime

import structlog

from lingotrail.application.learning.protocols.content_repository import (
    ContentRepositoryProtocol,
)
from lingotrail.application.learning.protocols.progress_store import ProgressStoreProtocol
from lingotrail.application.learning.services.journey_status_machine import utc_now
from lingotrail.application.learning.use_cases.dtos.progress_dtos import (
    QuestionResult,
    QuizAnswer,
    QuizResult,
)
from lingotrail.domain.common.value_objects.ids import JourneyId, TopicId, UserId
from lingotrail.domain.learning.entities.progress_event import ProgressEvent
from lingotrail.exceptions import JourneyNotFoundError, TopicNotFoundError, ValidationError

logger = structlog.get_logger(__name__)

DEFAULT_QUIZ_PASS_THRESHOLD = 70.0


class RecordFlashcardCompletionUseCase:
    """Use case for finishing a flashcard session."""

    def __init__(
        self,
        content_repository: ContentRepositoryProtocol,
        progress_store: ProgressStoreProtocol,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.content_repository = content_repository
        self.progress_store = progress_store
        self.clock = clock

    def record(
        self,
        user_id: int,
        topic_id: int,
        journey_id: int | None = None,
        time_spent_seconds: int = 0,
    ) -> ProgressEvent:
        """
        Mark the topic's flashcards as done for the learner.

        A learner has one flashcard event per topic. Repeating the session
        keeps it completed and adds the new time to it.

        Args:
            user_id: ID of the learner
            topic_id: ID of the topic studied
            journey_id: Journey the session happened in, if any
            time_spent_seconds: Length of the session

        Returns:
            The created or updated flashcard event

        Raises:
            TopicNotFoundError: If the topic does not exist
            JourneyNotFoundError: If journey_id is given and does not exist
        """
        topic_id_vo = TopicId(topic_id)
        if not self.content_repository.topic_exists(topic_id_vo):
            raise TopicNotFoundError(topic_id)
        journey_id_vo = _existing_journey(self.content_repository, journey_id)

        event = ProgressEvent.flashcard_completion(
            user_id=UserId(user_id),
            topic_id=topic_id_vo,
            journey_id=journey_id_vo,
            time_spent_seconds=time_spent_seconds,
            completed_at=self.clock(),
        )
        event = self.progress_store.find_or_update_progress_event(event)

        logger.info(
            "flashcard_session_recorded",
            user_id=user_id,
            topic_id=topic_id,
            total_time_spent=event.time_spent_seconds,
        )
        return event


class SubmitQuizUseCase:
    """Use case for grading a quiz attempt."""

    def __init__(
        self,
        content_repository: ContentRepositoryProtocol,
        progress_store: ProgressStoreProtocol,
        pass_threshold: float = DEFAULT_QUIZ_PASS_THRESHOLD,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.content_repository = content_repository
        self.progress_store = progress_store
        self.pass_threshold = pass_threshold
        self.clock = clock

    def submit(
        self,
        user_id: int,
        topic_id: int,
        answers: list[QuizAnswer],
        journey_id: int | None = None,
        time_spent_seconds: int = 0,
    ) -> QuizResult:
        """
        Grade the answers and append a quiz event.

        Answers for questions that do not belong to the topic are ignored
        but still count towards the total, so they lower the score.

        Raises:
            TopicNotFoundError: If the topic does not exist
            ValidationError: If no answers are given or the topic has no questions
        """
        topic_id_vo = TopicId(topic_id)
        if not self.content_repository.topic_exists(topic_id_vo):
            raise TopicNotFoundError(topic_id)
        if not answers:
            raise ValidationError("At least one answer is required")
        journey_id_vo = _existing_journey(self.content_repository, journey_id)

        questions = self.content_repository.get_quiz_questions(topic_id_vo)
        if not questions:
            raise ValidationError("No questions found for this topic")
        by_id = {question.id.value: question for question in questions}

        results: list[QuestionResult] = []
        for answer in answers:
            question = by_id.get(answer.question_id)
            if question is None:
                continue
            results.append(
                QuestionResult(
                    question=question,
                    user_answer=answer.answer,
                    is_correct=question.is_correct(answer.answer),
                )
            )

        correct = sum(1 for result in results if result.is_correct)
        raw_score = correct / len(answers) * 100
        passed = raw_score >= self.pass_threshold
        score = round(raw_score, 2)

        event = ProgressEvent.quiz_result(
            user_id=UserId(user_id),
            topic_id=topic_id_vo,
            journey_id=journey_id_vo,
            score=score,
            passed=passed,
            time_spent_seconds=time_spent_seconds,
            completed_at=self.clock(),
        )
        event = self.progress_store.create_progress_event(event)

        logger.info(
            "quiz_submitted",
            user_id=user_id,
            topic_id=topic_id,
            score=score,
            passed=passed,
        )
        return QuizResult(
            total_questions=len(answers),
            correct_answers=correct,
            score=score,
            passed=passed,
            time_spent_seconds=time_spent_seconds,
            question_results=results,
            event=event,
        )


def _existing_journey(
    content_repository: ContentRepositoryProtocol, journey_id: int | None
) -> JourneyId | None:
    if journey_id is None:
        return None
    journey_id_vo = JourneyId(journey_id)
    if content_repository.find_journey(journey_id_vo) is None:
        raise JourneyNotFoundError(journey_id)
    return journey_id_vo
