"""Pydantic schemas for journey assignments."""

from datetime import datetime

from pydantic import BaseModel, Field

from lingotrail.domain.learning.entities.journey_assignment import AssignmentStatus
from lingotrail.infrastructure.common.schemas import SuccessResponse
from lingotrail.infrastructure.learning.schemas.progress_schemas import TopicSummary


class UserInfo(BaseModel):
    id: int
    username: str
    name: str
    email: str | None = None
    roles: list[str] = Field(default_factory=list)


class JourneyInfo(BaseModel):
    id: int
    name: str
    description: str | None = None
    topic_count: int = 0


class JourneyAssignment(BaseModel):
    """Schema for an assignment row."""

    id: int
    user_id: int
    journey_id: int
    assigned_by: int
    status: AssignmentStatus
    assigned_at: datetime
    started_at: datetime | None = None
    completed_at: datetime | None = None


class UserJourney(JourneyAssignment):
    """Assignment with its journey, learner and current progress."""

    journey: JourneyInfo | None = None
    user: UserInfo | None = None
    total_topics: int
    completed_topics: int
    progress_percent: float
    next_topic: TopicSummary | None = None


class AssignJourneyRequest(BaseModel):
    user_ids: list[int] = Field(..., min_length=1, description="Learners to assign")


class AssignJourneyResponse(BaseModel):
    """Schema for a batch assignment; learners already assigned are skipped."""

    assigned_count: int
    assignments: list[JourneyAssignment]


class UnassignJourneyRequest(BaseModel):
    user_ids: list[int] = Field(..., min_length=1, description="Learners to unassign")


class UnassignJourneyResponse(SuccessResponse):
    unassigned_count: int
