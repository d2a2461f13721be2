"""Repository for JourneyAssignment domain entities."""

import logging

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from lingotrail.application.common.pagination import Pagination
from lingotrail.domain.common.value_objects.ids import JourneyId, UserId
from lingotrail.domain.learning.entities.journey_assignment import (
    AssignmentStatus,
    JourneyAssignment,
)
from lingotrail.domain.learning.exceptions import (
    AlreadyAssignedError,
    JourneyAssignmentNotFoundError,
)
from lingotrail.infrastructure.common.storage import storage_errors
from lingotrail.infrastructure.learning.mappers.journey_assignment_mapper import (
    JourneyAssignmentMapper,
)
from lingotrail.models import UserJourney as UserJourneyORM

logger = logging.getLogger(__name__)


class JourneyAssignmentRepository:
    """Repository for the user_journeys table."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = JourneyAssignmentMapper()

    def find_by_user_and_journey(
        self, user_id: UserId, journey_id: JourneyId
    ) -> JourneyAssignment | None:
        with storage_errors(self.db, "load journey assignment"):
            stmt = select(UserJourneyORM).where(
                UserJourneyORM.user_id == user_id.value,
                UserJourneyORM.journey_id == journey_id.value,
            )
            orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_user(
        self, user_id: UserId, status: AssignmentStatus | None, pagination: Pagination
    ) -> tuple[list[JourneyAssignment], int]:
        """
        Get a page of a learner's assignments.

        Returns:
            Tuple of (assignments ordered by assigned_at DESC, total count)
        """
        stmt = select(UserJourneyORM).where(UserJourneyORM.user_id == user_id.value)
        return self._paginate(stmt, status, pagination)

    def find_by_journey(
        self, journey_id: JourneyId, status: AssignmentStatus | None, pagination: Pagination
    ) -> tuple[list[JourneyAssignment], int]:
        """
        Get a page of a journey's assignments.

        Returns:
            Tuple of (assignments ordered by assigned_at DESC, total count)
        """
        stmt = select(UserJourneyORM).where(UserJourneyORM.journey_id == journey_id.value)
        return self._paginate(stmt, status, pagination)

    def save(self, assignment: JourneyAssignment) -> JourneyAssignment:
        """
        Save an assignment entity (create or update).

        Raises:
            AlreadyAssignedError: If the learner already holds the journey
            JourneyAssignmentNotFoundError: If updating a row that no longer exists
        """
        with storage_errors(self.db, "save journey assignment"):
            if assignment.id.value == 0:
                orm_model = self.mapper.to_orm(assignment)
                try:
                    self.db.add(orm_model)
                    self.db.commit()
                except IntegrityError as e:
                    self.db.rollback()
                    raise AlreadyAssignedError(
                        assignment.user_id.value, assignment.journey_id.value
                    ) from e
                self.db.refresh(orm_model)
                logger.info(
                    f"Assigned journey {assignment.journey_id.value} "
                    f"to user {assignment.user_id.value} (id={orm_model.id})"
                )
                return self.mapper.to_domain(orm_model)

            existing = self.db.get(UserJourneyORM, assignment.id.value)
            if existing is None:
                raise JourneyAssignmentNotFoundError(
                    assignment.user_id.value, assignment.journey_id.value
                )
            self.mapper.to_orm(assignment, existing)
            self.db.commit()
            self.db.refresh(existing)
        return self.mapper.to_domain(existing)

    def delete(self, user_id: UserId, journey_id: JourneyId) -> bool:
        """
        Delete an assignment whatever its status.

        Returns:
            True if a row was deleted, False if there was none
        """
        with storage_errors(self.db, "delete journey assignment"):
            result = self.db.execute(
                delete(UserJourneyORM).where(
                    UserJourneyORM.user_id == user_id.value,
                    UserJourneyORM.journey_id == journey_id.value,
                )
            )
            self.db.commit()
        return bool(result.rowcount)  # type: ignore[attr-defined]

    def _paginate(
        self,
        stmt: Select[tuple[UserJourneyORM]],
        status: AssignmentStatus | None,
        pagination: Pagination,
    ) -> tuple[list[JourneyAssignment], int]:
        if status is not None:
            stmt = stmt.where(UserJourneyORM.status == status.value)
        with storage_errors(self.db, "list journey assignments"):
            total = self.db.execute(
                select(func.count()).select_from(stmt.subquery())
            ).scalar_one()
            page = stmt.order_by(
                UserJourneyORM.assigned_at.desc(), UserJourneyORM.id.desc()
            ).offset(pagination.offset).limit(pagination.limit)
            orm_models = self.db.execute(page).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orm_models], total
