from typing import Protocol

from lingotrail.domain.common.value_objects.ids import InvitationId, JourneyId
from lingotrail.domain.learning.entities.journey_invitation import JourneyInvitation


class InvitationRepositoryProtocol(Protocol):
    def find_by_id(self, invitation_id: InvitationId) -> JourneyInvitation | None: ...

    def find_by_token(self, token: str) -> JourneyInvitation | None: ...

    def find_by_journey(self, journey_id: JourneyId) -> list[JourneyInvitation]:
        """Invitations of a journey, newest first."""
        ...

    def save(self, invitation: JourneyInvitation) -> JourneyInvitation: ...

    def claim_use(self, invitation_id: InvitationId) -> bool:
        """
        Count one use if the invitation is active and under its limit.

        The check and the increment are one atomic step. Returns False when
        the invitation could not be used.
        """
        ...

    def release_use(self, invitation_id: InvitationId) -> None:
        """Give back a use claimed for an enrolment that did not happen."""
        ...
