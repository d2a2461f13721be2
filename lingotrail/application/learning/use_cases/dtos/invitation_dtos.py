"""DTOs for invitation use cases."""

from dataclasses import dataclass

from lingotrail.domain.learning.entities.journey_invitation import JourneyInvitation
from lingotrail.domain.learning.value_objects import JourneySummary


@dataclass
class InvitationDetails:
    """
    What a visitor sees when opening an invitation link.

    ``journey`` is only filled for a valid invitation.
    """

    is_valid: bool
    message: str | None = None
    invitation: JourneyInvitation | None = None
    journey: JourneySummary | None = None
