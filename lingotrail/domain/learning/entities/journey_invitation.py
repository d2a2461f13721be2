"""Journey invitation entity for self-enrolment links."""

import secrets
import string
from dataclasses import dataclass
from datetime import datetime, timedelta

from lingotrail.domain.common.entity import Entity
from lingotrail.domain.common.exceptions import ValidationError
from lingotrail.domain.common.value_objects import InvitationId, JourneyId, UserId

TOKEN_ALPHABET = string.ascii_letters + string.digits
DEFAULT_TOKEN_LENGTH = 32
USAGE_LIMIT_MESSAGE = "This invitation link has reached its maximum usage limit"
EXPIRED_MESSAGE = "This invitation link has expired or is no longer valid"


def generate_invitation_token(length: int = DEFAULT_TOKEN_LENGTH) -> str:
    """Random alphanumeric token for an invitation link."""
    return "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(length))


@dataclass
class JourneyInvitation(Entity[InvitationId]):
    """
    Invitation link that lets a learner enrol in a journey.

    Business Rules:
    - Valid only while active, unexpired and under its usage limit
    - max_uses of None means unlimited
    - Each accepted invitation increments current_uses; the repository does
      the increment atomically so concurrent accepts respect max_uses
    """

    id: InvitationId
    journey_id: JourneyId
    token: str
    created_by: UserId
    is_active: bool = True
    current_uses: int = 0
    expires_at: datetime | None = None
    max_uses: int | None = None
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.token:
            raise ValidationError("Invitation token cannot be empty", field="token")
        if self.max_uses is not None and self.max_uses < 1:
            raise ValidationError(
                "max_uses must be at least 1", field="max_uses", value=self.max_uses
            )
        if self.current_uses < 0:
            raise ValidationError("current_uses cannot be negative", field="current_uses")

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and now > self.expires_at

    def is_exhausted(self) -> bool:
        return self.max_uses is not None and self.current_uses >= self.max_uses

    def is_valid(self, now: datetime) -> bool:
        return self.is_active and not self.is_expired(now) and not self.is_exhausted()

    def invalid_reason(self, now: datetime) -> str | None:
        """Human-readable reason the invitation cannot be used, or None if valid."""
        if self.is_valid(now):
            return None
        if self.is_exhausted():
            return USAGE_LIMIT_MESSAGE
        return EXPIRED_MESSAGE

    def deactivate(self) -> None:
        self.is_active = False

    @property
    def url_path(self) -> str:
        """Relative link; the frontend prepends its own origin."""
        return f"/invite/{self.token}"

    @classmethod
    def create(
        cls,
        journey_id: JourneyId,
        created_by: UserId,
        now: datetime,
        expires_in_days: int | None = None,
        max_uses: int | None = None,
        token_length: int = DEFAULT_TOKEN_LENGTH,
    ) -> "JourneyInvitation":
        """Create a new active invitation with a fresh token (ID will be 0 until persisted)."""
        if expires_in_days is not None and expires_in_days < 1:
            raise ValidationError(
                "expires_in_days must be at least 1", field="expires_in_days", value=expires_in_days
            )
        expires_at = now + timedelta(days=expires_in_days) if expires_in_days is not None else None
        return cls(
            id=InvitationId.generate(),
            journey_id=journey_id,
            token=generate_invitation_token(token_length),
            created_by=created_by,
            expires_at=expires_at,
            max_uses=max_uses,
        )

    @classmethod
    def create_with_id(
        cls,
        id: InvitationId,
        journey_id: JourneyId,
        token: str,
        created_by: UserId,
        is_active: bool,
        current_uses: int,
        expires_at: datetime | None,
        max_uses: int | None,
        created_at: datetime | None,
    ) -> "JourneyInvitation":
        """Reconstitute an invitation from persistence."""
        return cls(
            id=id,
            journey_id=journey_id,
            token=token,
            created_by=created_by,
            is_active=is_active,
            current_uses=current_uses,
            expires_at=expires_at,
            max_uses=max_uses,
            created_at=created_at,
        )
