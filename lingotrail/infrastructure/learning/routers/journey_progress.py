"""API routes for a learner's own progress and journey lifecycle."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from lingotrail.application.learning.use_cases.journey_assignment_use_case import (
    JourneyAssignmentUseCase,
)
from lingotrail.application.learning.use_cases.journey_progress_use_case import (
    JourneyProgressUseCase,
)
from lingotrail.core import container
from lingotrail.domain.common.exceptions import DomainError
from lingotrail.exceptions import LingotrailError
from lingotrail.infrastructure.common.di import inject_use_case
from lingotrail.infrastructure.identity.dependencies import CurrentUser
from lingotrail.infrastructure.learning.schemas import JourneyAssignment, JourneyProgressResponse
from lingotrail.infrastructure.learning.schemas.builders import (
    build_assignment,
    build_topic_summary,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/journeys", tags=["journey-progress"])


@router.get(
    "/{journey_id}/progress",
    response_model=JourneyProgressResponse,
    status_code=status.HTTP_200_OK,
)
def get_journey_progress(
    journey_id: int,
    current_user: CurrentUser,
    use_case: JourneyProgressUseCase = Depends(
        inject_use_case(container.journey_progress_use_case)
    ),
) -> JourneyProgressResponse:
    """
    Get the current user's progress on a journey.

    Returns:
        Totals, rounded percentage, completed topic IDs and the next topic to study

    Raises:
        HTTPException: 404 if the journey does not exist
    """
    try:
        progress = use_case.get_progress(current_user.id.value, journey_id)
        return JourneyProgressResponse(
            journey_id=progress.journey.journey_id.value,
            journey_name=progress.journey.name,
            total_topics=progress.snapshot.total_topics,
            completed_topics=progress.snapshot.completed_topics,
            progress_percent=progress.snapshot.progress_percent,
            completed_topic_ids=[topic_id.value for topic_id in progress.completed_topic_ids],
            next_topic=build_topic_summary(progress.snapshot.next_topic),
        )
    except (LingotrailError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to get progress for journey {journey_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post(
    "/{journey_id}/start",
    response_model=JourneyAssignment,
    status_code=status.HTTP_200_OK,
)
def start_journey(
    journey_id: int,
    current_user: CurrentUser,
    use_case: JourneyAssignmentUseCase = Depends(
        inject_use_case(container.journey_assignment_use_case)
    ),
) -> JourneyAssignment:
    """
    Mark the current user's journey as started.

    Only an ``assigned`` journey moves to ``in_progress``; repeated calls
    return the assignment unchanged.
    """
    try:
        assignment = use_case.start_journey(journey_id, current_user.id.value)
        return build_assignment(assignment)
    except (LingotrailError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to start journey {journey_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post(
    "/{journey_id}/complete",
    response_model=JourneyAssignment,
    status_code=status.HTTP_200_OK,
)
def complete_journey(
    journey_id: int,
    current_user: CurrentUser,
    use_case: JourneyAssignmentUseCase = Depends(
        inject_use_case(container.journey_assignment_use_case)
    ),
) -> JourneyAssignment:
    """
    Mark the current user's journey as completed.

    Raises:
        HTTPException: 409 while some topics are unfinished, 404 if not assigned
    """
    try:
        assignment = use_case.complete_journey(journey_id, current_user.id.value)
        return build_assignment(assignment)
    except (LingotrailError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to complete journey {journey_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e
