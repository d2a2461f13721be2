"""Mapper for UserJourney ORM ↔ JourneyAssignment conversion."""

from lingotrail.domain.common.value_objects import JourneyAssignmentId, JourneyId, UserId
from lingotrail.domain.learning.entities.journey_assignment import (
    AssignmentStatus,
    JourneyAssignment,
)
from lingotrail.infrastructure.common.storage import as_utc
from lingotrail.models import UserJourney as UserJourneyORM


class JourneyAssignmentMapper:
    """Mapper for UserJourney ORM ↔ JourneyAssignment conversion."""

    def to_domain(self, orm_model: UserJourneyORM) -> JourneyAssignment:
        return JourneyAssignment.create_with_id(
            id=JourneyAssignmentId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            journey_id=JourneyId(orm_model.journey_id),
            assigned_by=UserId(orm_model.assigned_by),
            status=AssignmentStatus(orm_model.status),
            assigned_at=as_utc(orm_model.assigned_at),
            started_at=as_utc(orm_model.started_at),
            completed_at=as_utc(orm_model.completed_at),
        )

    def to_orm(
        self, domain_entity: JourneyAssignment, orm_model: UserJourneyORM | None = None
    ) -> UserJourneyORM:
        if orm_model:
            orm_model.status = domain_entity.status.value
            orm_model.started_at = domain_entity.started_at
            orm_model.completed_at = domain_entity.completed_at
            return orm_model

        return UserJourneyORM(
            id=domain_entity.id.value if domain_entity.id.value != 0 else None,
            user_id=domain_entity.user_id.value,
            journey_id=domain_entity.journey_id.value,
            assigned_by=domain_entity.assigned_by.value,
            status=domain_entity.status.value,
            assigned_at=domain_entity.assigned_at,
            started_at=domain_entity.started_at,
            completed_at=domain_entity.completed_at,
        )
