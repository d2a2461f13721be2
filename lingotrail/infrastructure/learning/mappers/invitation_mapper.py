"""Mapper for JourneyInvitation ORM ↔ Domain conversion."""

from lingotrail.domain.common.value_objects import InvitationId, JourneyId, UserId
from lingotrail.domain.learning.entities.journey_invitation import JourneyInvitation
from lingotrail.infrastructure.common.storage import as_utc
from lingotrail.models import JourneyInvitation as JourneyInvitationORM


class InvitationMapper:
    """Mapper for JourneyInvitation ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: JourneyInvitationORM) -> JourneyInvitation:
        return JourneyInvitation.create_with_id(
            id=InvitationId(orm_model.id),
            journey_id=JourneyId(orm_model.journey_id),
            token=orm_model.token,
            created_by=UserId(orm_model.created_by),
            is_active=orm_model.is_active,
            current_uses=orm_model.current_uses,
            expires_at=as_utc(orm_model.expires_at),
            max_uses=orm_model.max_uses,
            created_at=as_utc(orm_model.created_at),
        )

    def to_orm(
        self, domain_entity: JourneyInvitation, orm_model: JourneyInvitationORM | None = None
    ) -> JourneyInvitationORM:
        if orm_model:
            orm_model.is_active = domain_entity.is_active
            orm_model.current_uses = domain_entity.current_uses
            orm_model.expires_at = domain_entity.expires_at
            orm_model.max_uses = domain_entity.max_uses
            return orm_model

        return JourneyInvitationORM(
            id=domain_entity.id.value if domain_entity.id.value != 0 else None,
            journey_id=domain_entity.journey_id.value,
            token=domain_entity.token,
            created_by=domain_entity.created_by.value,
            is_active=domain_entity.is_active,
            current_uses=domain_entity.current_uses,
            expires_at=domain_entity.expires_at,
            max_uses=domain_entity.max_uses,
        )
