"""Repository for JourneyInvitation domain entities."""

import logging

from sqlalchemy import or_, select, update
from sqlalchemy.orm import Session

from lingotrail.domain.common.value_objects.ids import InvitationId, JourneyId
from lingotrail.domain.learning.entities.journey_invitation import JourneyInvitation
from lingotrail.domain.learning.exceptions import InvitationNotFoundError
from lingotrail.infrastructure.common.storage import storage_errors
from lingotrail.infrastructure.learning.mappers.invitation_mapper import InvitationMapper
from lingotrail.models import JourneyInvitation as JourneyInvitationORM

logger = logging.getLogger(__name__)


class InvitationRepository:
    """Repository for the journey_invitations table."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = InvitationMapper()

    def find_by_id(self, invitation_id: InvitationId) -> JourneyInvitation | None:
        with storage_errors(self.db, "load invitation"):
            orm_model = self.db.get(JourneyInvitationORM, invitation_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_token(self, token: str) -> JourneyInvitation | None:
        with storage_errors(self.db, "load invitation"):
            stmt = select(JourneyInvitationORM).where(JourneyInvitationORM.token == token)
            orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_journey(self, journey_id: JourneyId) -> list[JourneyInvitation]:
        """Invitations of a journey ordered by created_at DESC."""
        with storage_errors(self.db, "list invitations"):
            stmt = (
                select(JourneyInvitationORM)
                .where(JourneyInvitationORM.journey_id == journey_id.value)
                .order_by(JourneyInvitationORM.created_at.desc(), JourneyInvitationORM.id.desc())
            )
            orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orm_models]

    def save(self, invitation: JourneyInvitation) -> JourneyInvitation:
        """Save an invitation entity (create or update)."""
        with storage_errors(self.db, "save invitation"):
            if invitation.id.value == 0:
                orm_model = self.mapper.to_orm(invitation)
                self.db.add(orm_model)
            else:
                existing = self.db.get(JourneyInvitationORM, invitation.id.value)
                if existing is None:
                    raise InvitationNotFoundError(invitation.id.value)
                orm_model = self.mapper.to_orm(invitation, existing)
            self.db.commit()
            self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)

    def claim_use(self, invitation_id: InvitationId) -> bool:
        """
        Increment current_uses with a single conditional UPDATE.

        Concurrent accepts serialize on the row, so max_uses can never be
        exceeded even when both requests read the invitation before either
        wrote it.
        """
        with storage_errors(self.db, "claim invitation use"):
            result = self.db.execute(
                update(JourneyInvitationORM)
                .where(
                    JourneyInvitationORM.id == invitation_id.value,
                    JourneyInvitationORM.is_active.is_(True),
                    or_(
                        JourneyInvitationORM.max_uses.is_(None),
                        JourneyInvitationORM.current_uses < JourneyInvitationORM.max_uses,
                    ),
                )
                .values(current_uses=JourneyInvitationORM.current_uses + 1)
            )
            self.db.commit()
        claimed = bool(result.rowcount)  # type: ignore[attr-defined]
        if not claimed:
            logger.info(f"Invitation {invitation_id.value} has no use left to claim")
        return claimed

    def release_use(self, invitation_id: InvitationId) -> None:
        with storage_errors(self.db, "release invitation use"):
            self.db.execute(
                update(JourneyInvitationORM)
                .where(
                    JourneyInvitationORM.id == invitation_id.value,
                    JourneyInvitationORM.current_uses > 0,
                )
                .values(current_uses=JourneyInvitationORM.current_uses - 1)
            )
            self.db.commit()
