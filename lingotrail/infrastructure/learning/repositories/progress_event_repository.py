"""Repository for ProgressEvent domain entities."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from lingotrail.domain.common.value_objects.ids import TopicId, UserId
from lingotrail.domain.learning.entities.progress_event import ActivityType, ProgressEvent
from lingotrail.infrastructure.common.storage import storage_errors
from lingotrail.infrastructure.learning.mappers.progress_event_mapper import ProgressEventMapper
from lingotrail.models import UserProgress as UserProgressORM

logger = logging.getLogger(__name__)


class ProgressEventRepository:
    """Progress store backed by the user_progress table."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = ProgressEventMapper()

    def find_progress_events(
        self, user_id: UserId, topic_id: TopicId, activity_type: ActivityType | None = None
    ) -> list[ProgressEvent]:
        """
        Find a learner's events for one topic.

        Args:
            user_id: The learner
            topic_id: The topic
            activity_type: Restrict to one activity, or None for all

        Returns:
            Events ordered by id (creation order)
        """
        with storage_errors(self.db, "load progress events"):
            stmt = select(UserProgressORM).where(
                UserProgressORM.user_id == user_id.value,
                UserProgressORM.topic_id == topic_id.value,
            )
            if activity_type is not None:
                stmt = stmt.where(UserProgressORM.activity_type == activity_type.value)
            orm_models = self.db.execute(stmt.order_by(UserProgressORM.id)).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orm_models]

    def create_progress_event(self, event: ProgressEvent) -> ProgressEvent:
        with storage_errors(self.db, "create progress event"):
            orm_model = self.mapper.to_orm(event)
            self.db.add(orm_model)
            self.db.commit()
            self.db.refresh(orm_model)
        logger.debug(f"Created {event.activity_type} progress event {orm_model.id}")
        return self.mapper.to_domain(orm_model)

    def find_or_update_progress_event(self, event: ProgressEvent) -> ProgressEvent:
        """
        Upsert the learner's event for (user, topic, activity).

        The existing row is read with SELECT ... FOR UPDATE so concurrent
        sessions add their time one after the other.

        Args:
            event: A new, unsaved flashcard event

        Returns:
            The inserted event, or the existing one with the session folded in
        """
        with storage_errors(self.db, "record progress event"):
            stmt = (
                select(UserProgressORM)
                .where(
                    UserProgressORM.user_id == event.user_id.value,
                    UserProgressORM.topic_id == event.topic_id.value,
                    UserProgressORM.activity_type == event.activity_type.value,
                )
                .order_by(UserProgressORM.id)
                .limit(1)
                .with_for_update()
            )
            orm_model = self.db.execute(stmt).scalars().first()
            if orm_model is None:
                orm_model = self.mapper.to_orm(event)
                self.db.add(orm_model)
            else:
                existing = self.mapper.to_domain(orm_model)
                existing.record_repeat_session(event.time_spent_seconds, event.completed_at)
                self.mapper.to_orm(existing, orm_model)
            self.db.commit()
            self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)
