"""Build API schemas from domain objects."""

from lingotrail.application.learning.use_cases.dtos.journey_dtos import AssignmentWithProgress
from lingotrail.domain.learning.entities.journey_assignment import (
    JourneyAssignment as JourneyAssignmentEntity,
)
from lingotrail.domain.learning.value_objects import TopicSummary as TopicSummaryVO
from lingotrail.infrastructure.learning.schemas.journey_schemas import (
    JourneyAssignment,
    JourneyInfo,
    UserInfo,
    UserJourney,
)
from lingotrail.infrastructure.learning.schemas.progress_schemas import TopicSummary


def build_topic_summary(topic: TopicSummaryVO | None) -> TopicSummary | None:
    if topic is None:
        return None
    return TopicSummary(
        id=topic.topic_id.value,
        name=topic.name,
        description=topic.description,
        level=topic.level,
        word_count=topic.word_count,
        quiz_count=topic.quiz_count,
        sequence_order=topic.sequence_order,
    )


def build_assignment(assignment: JourneyAssignmentEntity) -> JourneyAssignment:
    return JourneyAssignment(
        id=assignment.id.value,
        user_id=assignment.user_id.value,
        journey_id=assignment.journey_id.value,
        assigned_by=assignment.assigned_by.value,
        status=assignment.status,
        assigned_at=assignment.assigned_at,
        started_at=assignment.started_at,
        completed_at=assignment.completed_at,
    )


def build_user_journey(item: AssignmentWithProgress) -> UserJourney:
    """Flatten an assignment and its progress into one response row."""
    base = build_assignment(item.assignment)
    journey = (
        JourneyInfo(
            id=item.journey.journey_id.value,
            name=item.journey.name,
            description=item.journey.description,
            topic_count=item.journey.topic_count,
        )
        if item.journey
        else None
    )
    user = (
        UserInfo(
            id=item.user.id.value,
            username=item.user.username,
            name=item.user.name,
            email=item.user.email,
            roles=sorted(role.value for role in item.user.roles),
        )
        if item.user
        else None
    )
    return UserJourney(
        **base.model_dump(),
        journey=journey,
        user=user,
        total_topics=item.snapshot.total_topics,
        completed_topics=item.snapshot.completed_topics,
        progress_percent=item.snapshot.progress_percent,
        next_topic=build_topic_summary(item.snapshot.next_topic),
    )
