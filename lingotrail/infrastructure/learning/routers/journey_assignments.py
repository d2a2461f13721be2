"""API routes for assigning journeys to learners and listing assignments."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from lingotrail.application.common.pagination import MAX_PAGE_SIZE, Pagination
from lingotrail.application.learning.use_cases.journey_assignment_use_case import (
    JourneyAssignmentUseCase,
)
from lingotrail.core import container
from lingotrail.domain.common.exceptions import AuthorizationError, DomainError
from lingotrail.domain.common.value_objects.ids import UserId
from lingotrail.domain.learning.entities.journey_assignment import AssignmentStatus
from lingotrail.exceptions import LingotrailError
from lingotrail.infrastructure.common.di import inject_use_case
from lingotrail.infrastructure.common.schemas import PaginatedResponse
from lingotrail.infrastructure.identity.dependencies import CurrentUser, JourneyManager
from lingotrail.infrastructure.learning.schemas import (
    AssignJourneyRequest,
    AssignJourneyResponse,
    UnassignJourneyRequest,
    UnassignJourneyResponse,
    UserJourney,
)
from lingotrail.infrastructure.learning.schemas.builders import (
    build_assignment,
    build_user_journey,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["journey-assignments"])

StatusFilter = Annotated[
    AssignmentStatus | None, Query(alias="status", description="Only this status")
]
Page = Annotated[int, Query(ge=1)]
PageSize = Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)]


@router.post(
    "/journeys/{journey_id}/assign",
    response_model=AssignJourneyResponse,
    status_code=status.HTTP_200_OK,
)
def assign_journey(
    journey_id: int,
    request: AssignJourneyRequest,
    current_user: JourneyManager,
    use_case: JourneyAssignmentUseCase = Depends(
        inject_use_case(container.journey_assignment_use_case)
    ),
) -> AssignJourneyResponse:
    """
    Assign a journey to one or more learners.

    Learners that already have the journey are skipped, so the call can be
    repeated safely. Requires the teacher or admin role.
    """
    try:
        assignments = use_case.assign_journey(
            journey_id, request.user_ids, assigned_by=current_user.id.value
        )
        return AssignJourneyResponse(
            assigned_count=len(assignments),
            assignments=[build_assignment(a) for a in assignments],
        )
    except (LingotrailError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to assign journey {journey_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post(
    "/journeys/{journey_id}/unassign",
    response_model=UnassignJourneyResponse,
    status_code=status.HTTP_200_OK,
)
def unassign_journey(
    journey_id: int,
    request: UnassignJourneyRequest,
    current_user: JourneyManager,
    use_case: JourneyAssignmentUseCase = Depends(
        inject_use_case(container.journey_assignment_use_case)
    ),
) -> UnassignJourneyResponse:
    """Remove a journey from learners. Progress events are kept."""
    try:
        removed = use_case.unassign_journey(journey_id, request.user_ids)
        return UnassignJourneyResponse(
            success=True,
            message=f"Unassigned journey from {removed} user(s)",
            unassigned_count=removed,
        )
    except (LingotrailError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to unassign journey {journey_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get(
    "/journeys/{journey_id}/assignments",
    response_model=PaginatedResponse[UserJourney],
    status_code=status.HTTP_200_OK,
)
def get_journey_assignments(
    journey_id: int,
    current_user: JourneyManager,
    status_filter: StatusFilter = None,
    page: Page = 1,
    page_size: PageSize = 20,
    use_case: JourneyAssignmentUseCase = Depends(
        inject_use_case(container.journey_assignment_use_case)
    ),
) -> PaginatedResponse[UserJourney]:
    """List learners assigned to a journey with their progress, newest first."""
    try:
        result = use_case.get_journey_assignments(
            journey_id, status_filter, Pagination(page=page, page_size=page_size)
        )
        return PaginatedResponse[UserJourney].from_result(result, build_user_journey)
    except (LingotrailError, DomainError):
        raise
    except Exception as e:
        logger.error(
            f"Failed to list assignments for journey {journey_id}: {e!s}", exc_info=True
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get(
    "/users/{user_id}/journeys",
    response_model=PaginatedResponse[UserJourney],
    status_code=status.HTTP_200_OK,
)
def get_user_journeys(
    user_id: int,
    current_user: CurrentUser,
    status_filter: StatusFilter = None,
    page: Page = 1,
    page_size: PageSize = 20,
    use_case: JourneyAssignmentUseCase = Depends(
        inject_use_case(container.journey_assignment_use_case)
    ),
) -> PaginatedResponse[UserJourney]:
    """
    List a learner's journeys with progress, newest first.

    Learners may only list their own journeys; teachers and admins may list anyone's.

    Raises:
        HTTPException: 403 when a learner asks for someone else's journeys
    """
    try:
        if not current_user.can_view_progress_of(UserId(user_id)):
            raise AuthorizationError("Not authorized to view this user's journeys")
        result = use_case.get_user_journeys(
            user_id, status_filter, Pagination(page=page, page_size=page_size)
        )
        return PaginatedResponse[UserJourney].from_result(result, build_user_journey)
    except (LingotrailError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to list journeys for user {user_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e
