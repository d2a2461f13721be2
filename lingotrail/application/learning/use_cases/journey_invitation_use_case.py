"""Use case for journey invitation links."""

from collections.abc import Callable
from datetime import datetime

import structlog

from lingotrail.application.learning.protocols.content_repository import (
    ContentRepositoryProtocol,
)
from lingotrail.application.learning.protocols.invitation_repository import (
    InvitationRepositoryProtocol,
)
from lingotrail.application.learning.services.journey_status_machine import (
    JourneyStatusMachine,
    utc_now,
)
from lingotrail.application.learning.use_cases.dtos.invitation_dtos import InvitationDetails
from lingotrail.domain.common.value_objects.ids import InvitationId, JourneyId, UserId
from lingotrail.domain.learning.entities.journey_assignment import JourneyAssignment
from lingotrail.domain.learning.entities.journey_invitation import (
    DEFAULT_TOKEN_LENGTH,
    USAGE_LIMIT_MESSAGE,
    JourneyInvitation,
)
from lingotrail.domain.learning.exceptions import (
    AlreadyAssignedError,
    InvitationInvalidError,
    InvitationNotFoundError,
)
from lingotrail.exceptions import JourneyNotFoundError, StorageError

logger = structlog.get_logger(__name__)

INVITATION_NOT_FOUND_MESSAGE = "Invitation not found"


class JourneyInvitationUseCase:
    """Create, inspect, accept and revoke invitation links."""

    def __init__(
        self,
        content_repository: ContentRepositoryProtocol,
        invitation_repository: InvitationRepositoryProtocol,
        status_machine: JourneyStatusMachine,
        token_length: int = DEFAULT_TOKEN_LENGTH,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.content_repository = content_repository
        self.invitation_repository = invitation_repository
        self.status_machine = status_machine
        self.token_length = token_length
        self.clock = clock

    def generate_invitation(
        self,
        journey_id: int,
        created_by: int,
        expires_in_days: int | None = None,
        max_uses: int | None = None,
    ) -> JourneyInvitation:
        """
        Create a new invitation link for a journey.

        Args:
            journey_id: Journey to enrol into
            created_by: Teacher creating the link; accepted learners are assigned by them
            expires_in_days: Lifetime of the link, or None for no expiry
            max_uses: Usage limit, or None for unlimited

        Raises:
            JourneyNotFoundError: If the journey does not exist
        """
        journey_id_vo = JourneyId(journey_id)
        if self.content_repository.find_journey(journey_id_vo) is None:
            raise JourneyNotFoundError(journey_id)

        invitation = JourneyInvitation.create(
            journey_id=journey_id_vo,
            created_by=UserId(created_by),
            now=self.clock(),
            expires_in_days=expires_in_days,
            max_uses=max_uses,
            token_length=self.token_length,
        )
        invitation = self.invitation_repository.save(invitation)

        logger.info(
            "invitation_generated",
            invitation_id=invitation.id.value,
            journey_id=journey_id,
            created_by=created_by,
        )
        return invitation

    def get_invitation_details(self, token: str) -> InvitationDetails:
        """Public view of an invitation. Bad tokens produce is_valid=False, never an error."""
        invitation = self.invitation_repository.find_by_token(token)
        if invitation is None:
            return InvitationDetails(is_valid=False, message=INVITATION_NOT_FOUND_MESSAGE)

        reason = invitation.invalid_reason(self.clock())
        if reason is not None:
            return InvitationDetails(is_valid=False, message=reason)

        journey = self.content_repository.find_journey(invitation.journey_id)
        if journey is None:
            return InvitationDetails(is_valid=False, message=INVITATION_NOT_FOUND_MESSAGE)
        return InvitationDetails(is_valid=True, invitation=invitation, journey=journey)

    def accept_invitation(self, token: str, user_id: int) -> JourneyAssignment:
        """
        Enrol the learner through an invitation link.

        Raises:
            InvitationNotFoundError: If no invitation has this token
            InvitationInvalidError: If the invitation expired, was used up or revoked,
                including by a concurrent accept that took the last use
            AlreadyAssignedError: If the learner is already enrolled
        """
        invitation = self.invitation_repository.find_by_token(token)
        if invitation is None:
            raise InvitationNotFoundError(token)

        now = self.clock()
        reason = invitation.invalid_reason(now)
        if reason is not None:
            raise InvitationInvalidError(reason)

        # The use is claimed first so a concurrent accept cannot slip past max_uses
        if not self.invitation_repository.claim_use(invitation.id):
            raise InvitationInvalidError(self._current_invalid_reason(invitation, now))
        try:
            assignment = self.status_machine.assign(
                UserId(user_id), invitation.journey_id, invitation.created_by
            )
        except (AlreadyAssignedError, StorageError):
            self.invitation_repository.release_use(invitation.id)
            raise

        logger.info(
            "invitation_accepted",
            invitation_id=invitation.id.value,
            journey_id=invitation.journey_id.value,
            user_id=user_id,
        )
        return assignment

    def get_journey_invitations(self, journey_id: int) -> list[JourneyInvitation]:
        """
        All invitations of a journey, newest first.

        Raises:
            JourneyNotFoundError: If the journey does not exist
        """
        journey_id_vo = JourneyId(journey_id)
        if self.content_repository.find_journey(journey_id_vo) is None:
            raise JourneyNotFoundError(journey_id)
        return self.invitation_repository.find_by_journey(journey_id_vo)

    def deactivate_invitation(self, invitation_id: int, journey_id: int) -> JourneyInvitation:
        """
        Revoke an invitation link.

        Raises:
            InvitationNotFoundError: If the invitation does not exist or belongs
                to another journey
        """
        invitation = self.invitation_repository.find_by_id(InvitationId(invitation_id))
        if invitation is None or invitation.journey_id != JourneyId(journey_id):
            raise InvitationNotFoundError(invitation_id)

        invitation.deactivate()
        invitation = self.invitation_repository.save(invitation)
        logger.info("invitation_deactivated", invitation_id=invitation_id, journey_id=journey_id)
        return invitation

    def _current_invalid_reason(self, invitation: JourneyInvitation, now: datetime) -> str:
        latest = self.invitation_repository.find_by_id(invitation.id) or invitation
        return latest.invalid_reason(now) or USAGE_LIMIT_MESSAGE
