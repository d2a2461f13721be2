"""Mapper for UserProgress ORM ↔ ProgressEvent conversion."""

from lingotrail.domain.common.value_objects import JourneyId, ProgressEventId, TopicId, UserId
from lingotrail.domain.learning.entities.progress_event import ActivityType, ProgressEvent
from lingotrail.infrastructure.common.storage import as_utc
from lingotrail.models import UserProgress as UserProgressORM


class ProgressEventMapper:
    """Mapper for UserProgress ORM ↔ ProgressEvent conversion."""

    def to_domain(self, orm_model: UserProgressORM) -> ProgressEvent:
        return ProgressEvent.create_with_id(
            id=ProgressEventId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            topic_id=TopicId(orm_model.topic_id),
            activity_type=ActivityType(orm_model.activity_type),
            completed=orm_model.completed,
            journey_id=JourneyId(orm_model.journey_id) if orm_model.journey_id else None,
            score=float(orm_model.score) if orm_model.score is not None else None,
            max_score=float(orm_model.max_score) if orm_model.max_score is not None else None,
            time_spent_seconds=orm_model.time_spent_seconds,
            completed_at=as_utc(orm_model.completed_at),
            created_at=as_utc(orm_model.created_at),
        )

    def to_orm(
        self, domain_entity: ProgressEvent, orm_model: UserProgressORM | None = None
    ) -> UserProgressORM:
        journey_id = domain_entity.journey_id.value if domain_entity.journey_id else None
        if orm_model:
            # Only the mutable fields of an event change after creation
            orm_model.completed = domain_entity.completed
            orm_model.score = domain_entity.score
            orm_model.max_score = domain_entity.max_score
            orm_model.time_spent_seconds = domain_entity.time_spent_seconds
            orm_model.completed_at = domain_entity.completed_at
            return orm_model

        return UserProgressORM(
            id=domain_entity.id.value if domain_entity.id.value != 0 else None,
            user_id=domain_entity.user_id.value,
            topic_id=domain_entity.topic_id.value,
            journey_id=journey_id,
            activity_type=domain_entity.activity_type.value,
            completed=domain_entity.completed,
            score=domain_entity.score,
            max_score=domain_entity.max_score,
            time_spent_seconds=domain_entity.time_spent_seconds,
            completed_at=domain_entity.completed_at,
        )
