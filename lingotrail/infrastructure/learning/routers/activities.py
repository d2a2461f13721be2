"""API routes for recording flashcard sessions and quiz attempts."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from lingotrail.application.learning.use_cases.dtos.progress_dtos import QuizAnswer
from lingotrail.application.learning.use_cases.progress_use_case import (
    RecordFlashcardCompletionUseCase,
    SubmitQuizUseCase,
)
from lingotrail.core import container
from lingotrail.domain.common.exceptions import DomainError
from lingotrail.domain.learning.entities.progress_event import (
    ProgressEvent as ProgressEventEntity,
)
from lingotrail.exceptions import LingotrailError
from lingotrail.infrastructure.common.di import inject_use_case
from lingotrail.infrastructure.identity.dependencies import CurrentUser
from lingotrail.infrastructure.learning.schemas import (
    FlashcardCompleteRequest,
    ProgressEvent,
    QuestionResult,
    QuizResultResponse,
    QuizSubmitRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/topics", tags=["activities"])


def _build_progress_event(event: ProgressEventEntity) -> ProgressEvent:
    return ProgressEvent(
        id=event.id.value,
        user_id=event.user_id.value,
        topic_id=event.topic_id.value,
        journey_id=event.journey_id.value if event.journey_id else None,
        activity_type=event.activity_type.value,
        completed=event.completed,
        score=event.score,
        max_score=event.max_score,
        time_spent_seconds=event.time_spent_seconds,
        completed_at=event.completed_at,
    )


@router.post(
    "/{topic_id}/flashcards/complete",
    response_model=ProgressEvent,
    status_code=status.HTTP_200_OK,
)
def complete_flashcards(
    topic_id: int,
    request: FlashcardCompleteRequest,
    current_user: CurrentUser,
    use_case: RecordFlashcardCompletionUseCase = Depends(
        inject_use_case(container.record_flashcard_completion_use_case)
    ),
) -> ProgressEvent:
    """
    Record a finished flashcard session for a topic.

    Repeating the session keeps the topic's flashcards completed and adds the
    new time to the total.
    """
    try:
        event = use_case.record(
            user_id=current_user.id.value,
            topic_id=topic_id,
            journey_id=request.journey_id,
            time_spent_seconds=request.time_spent_seconds,
        )
        return _build_progress_event(event)
    except (LingotrailError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to record flashcards for topic {topic_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post(
    "/{topic_id}/quiz/submit",
    response_model=QuizResultResponse,
    status_code=status.HTTP_200_OK,
)
def submit_quiz(
    topic_id: int,
    request: QuizSubmitRequest,
    current_user: CurrentUser,
    use_case: SubmitQuizUseCase = Depends(inject_use_case(container.submit_quiz_use_case)),
) -> QuizResultResponse:
    """
    Grade a quiz attempt and record the result.

    Returns:
        Score, pass flag and per-question results with the correct answers
    """
    try:
        result = use_case.submit(
            user_id=current_user.id.value,
            topic_id=topic_id,
            answers=[QuizAnswer(a.question_id, a.answer) for a in request.answers],
            journey_id=request.journey_id,
            time_spent_seconds=request.time_spent_seconds,
        )
        return QuizResultResponse(
            total_questions=result.total_questions,
            correct_answers=result.correct_answers,
            score=result.score,
            passed=result.passed,
            time_spent_seconds=result.time_spent_seconds,
            question_results=[
                QuestionResult(
                    question_id=r.question.id.value,
                    question_type=r.question.question_type.value,
                    question_text=r.question.question_text,
                    user_answer=r.user_answer,
                    correct_answer=r.question.correct_answer,
                    is_correct=r.is_correct,
                    option_a=r.question.options.get("a", ""),
                    option_b=r.question.options.get("b", ""),
                    option_c=r.question.options.get("c", ""),
                    option_d=r.question.options.get("d", ""),
                )
                for r in result.question_results
            ],
        )
    except (LingotrailError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to submit quiz for topic {topic_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e
