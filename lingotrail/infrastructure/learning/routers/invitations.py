"""API routes for journey invitation links."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from lingotrail.application.learning.use_cases.journey_invitation_use_case import (
    JourneyInvitationUseCase,
)
from lingotrail.core import container
from lingotrail.domain.common.exceptions import DomainError
from lingotrail.domain.learning.entities.journey_invitation import (
    JourneyInvitation as JourneyInvitationEntity,
)
from lingotrail.exceptions import LingotrailError
from lingotrail.infrastructure.common.di import inject_use_case
from lingotrail.infrastructure.common.schemas import SuccessResponse
from lingotrail.infrastructure.identity.dependencies import CurrentUser, JourneyManager
from lingotrail.infrastructure.learning.schemas import (
    AcceptInvitationResponse,
    CreateInvitationRequest,
    Invitation,
    InvitationDetailsResponse,
)
from lingotrail.infrastructure.learning.schemas.builders import build_assignment

logger = logging.getLogger(__name__)

router = APIRouter(tags=["invitations"])


def _build_invitation_schema(invitation: JourneyInvitationEntity) -> Invitation:
    return Invitation(
        id=invitation.id.value,
        journey_id=invitation.journey_id.value,
        token=invitation.token,
        invitation_url=invitation.url_path,
        created_by=invitation.created_by.value,
        expires_at=invitation.expires_at,
        max_uses=invitation.max_uses,
        current_uses=invitation.current_uses,
        is_active=invitation.is_active,
        created_at=invitation.created_at,
    )


@router.post(
    "/journeys/{journey_id}/invite",
    response_model=Invitation,
    status_code=status.HTTP_201_CREATED,
)
def create_invitation(
    journey_id: int,
    request: CreateInvitationRequest,
    current_user: JourneyManager,
    use_case: JourneyInvitationUseCase = Depends(
        inject_use_case(container.journey_invitation_use_case)
    ),
) -> Invitation:
    """
    Generate an invitation link for a journey.

    Args:
        journey_id: Journey learners will be enrolled into
        request: Optional expiry in days and usage limit

    Raises:
        HTTPException: 404 if the journey does not exist
    """
    try:
        invitation = use_case.generate_invitation(
            journey_id=journey_id,
            created_by=current_user.id.value,
            expires_in_days=request.expires_in_days,
            max_uses=request.max_uses,
        )
        return _build_invitation_schema(invitation)
    except (LingotrailError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to create invitation for journey {journey_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get(
    "/journeys/{journey_id}/invitations",
    response_model=list[Invitation],
    status_code=status.HTTP_200_OK,
)
def get_journey_invitations(
    journey_id: int,
    current_user: JourneyManager,
    use_case: JourneyInvitationUseCase = Depends(
        inject_use_case(container.journey_invitation_use_case)
    ),
) -> list[Invitation]:
    """List every invitation of a journey, newest first."""
    try:
        return [
            _build_invitation_schema(invitation)
            for invitation in use_case.get_journey_invitations(journey_id)
        ]
    except (LingotrailError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to list invitations for journey {journey_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.delete(
    "/journeys/{journey_id}/invitations/{invitation_id}",
    response_model=SuccessResponse,
    status_code=status.HTTP_200_OK,
)
def deactivate_invitation(
    journey_id: int,
    invitation_id: int,
    current_user: JourneyManager,
    use_case: JourneyInvitationUseCase = Depends(
        inject_use_case(container.journey_invitation_use_case)
    ),
) -> SuccessResponse:
    """Revoke an invitation link. The link stays listed but can no longer be accepted."""
    try:
        use_case.deactivate_invitation(invitation_id, journey_id)
        return SuccessResponse(success=True, message="Invitation deactivated")
    except (LingotrailError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to deactivate invitation {invitation_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get(
    "/invitations/{token}",
    response_model=InvitationDetailsResponse,
    status_code=status.HTTP_200_OK,
)
def get_invitation_details(
    token: str,
    use_case: JourneyInvitationUseCase = Depends(
        inject_use_case(container.journey_invitation_use_case)
    ),
) -> InvitationDetailsResponse:
    """
    Public preview of an invitation link.

    Unknown, expired and exhausted links are reported with ``is_valid`` false
    rather than an error status.
    """
    try:
        details = use_case.get_invitation_details(token)
        if not details.is_valid or details.invitation is None or details.journey is None:
            return InvitationDetailsResponse(is_valid=False, message=details.message)
        return InvitationDetailsResponse(
            is_valid=True,
            journey_id=details.journey.journey_id.value,
            journey_name=details.journey.name,
            journey_description=details.journey.description,
            topic_count=details.journey.topic_count,
            expires_at=details.invitation.expires_at,
        )
    except (LingotrailError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to load invitation details: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post(
    "/invitations/{token}/accept",
    response_model=AcceptInvitationResponse,
    status_code=status.HTTP_200_OK,
)
def accept_invitation(
    token: str,
    current_user: CurrentUser,
    use_case: JourneyInvitationUseCase = Depends(
        inject_use_case(container.journey_invitation_use_case)
    ),
) -> AcceptInvitationResponse:
    """
    Enrol the current user through an invitation link.

    Raises:
        HTTPException: 404 for an unknown token, 400 for an expired or used-up
            link, 409 when the user already has the journey
    """
    try:
        assignment = use_case.accept_invitation(token, current_user.id.value)
        return AcceptInvitationResponse(
            success=True,
            message="Journey added to your learning path",
            assignment=build_assignment(assignment),
        )
    except (LingotrailError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to accept invitation: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e
