"""Read side of the users table, used for authentication and role checks."""

import logging

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from lingotrail.domain.common.value_objects.ids import UserId
from lingotrail.domain.identity.entities.user import User
from lingotrail.infrastructure.common.storage import storage_errors
from lingotrail.infrastructure.identity.mappers.user_mapper import UserMapper
from lingotrail.models import User as UserORM

logger = logging.getLogger(__name__)


class UserRepository:
    """Loads users with their roles. Users are never written through the API."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = UserMapper()

    def find_by_id(self, user_id: UserId) -> User | None:
        users = self._load(select(UserORM).where(UserORM.id == user_id.value), "load user")
        return users[0] if users else None

    def find_by_ids(self, user_ids: list[UserId]) -> list[User]:
        """Users matching the given IDs ordered by ID; unknown IDs are left out."""
        if not user_ids:
            return []
        ids = sorted({user_id.value for user_id in user_ids})
        users = self._load(
            select(UserORM).where(UserORM.id.in_(ids)).order_by(UserORM.id), "load users"
        )
        if len(users) < len(ids):
            logger.debug(f"{len(ids) - len(users)} of {len(ids)} requested users do not exist")
        return users

    def _load(self, stmt: Select[tuple[UserORM]], operation: str) -> list[User]:
        with storage_errors(self.db, operation):
            orm_models = self.db.execute(stmt).scalars().all()
            # roles are selectin-loaded, so mapping stays inside the error guard
            return [self.mapper.to_domain(orm_model) for orm_model in orm_models]
