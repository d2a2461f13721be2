"""Pydantic schemas for journey invitations."""

from datetime import datetime

from pydantic import BaseModel, Field

from lingotrail.infrastructure.learning.schemas.journey_schemas import JourneyAssignment


class CreateInvitationRequest(BaseModel):
    """Schema for generating an invitation link."""

    expires_in_days: int | None = Field(None, ge=1, description="Days until the link expires")
    max_uses: int | None = Field(None, ge=1, description="Usage limit; omit for unlimited")


class Invitation(BaseModel):
    """Schema for an invitation as seen by its journey's managers."""

    id: int
    journey_id: int
    token: str
    invitation_url: str = Field(..., description="Relative link; the client adds its origin")
    created_by: int
    expires_at: datetime | None = None
    max_uses: int | None = None
    current_uses: int
    is_active: bool
    created_at: datetime | None = None


class InvitationDetailsResponse(BaseModel):
    """Public view of an invitation link."""

    is_valid: bool
    message: str | None = None
    journey_id: int | None = None
    journey_name: str | None = None
    journey_description: str | None = None
    topic_count: int | None = None
    expires_at: datetime | None = None


class AcceptInvitationResponse(BaseModel):
    success: bool
    message: str
    assignment: JourneyAssignment
