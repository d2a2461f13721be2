"""Mapper for User ORM ↔ Domain conversion."""

from lingotrail.domain.common.value_objects.ids import UserId
from lingotrail.domain.identity.entities.user import Role, User
from lingotrail.infrastructure.common.storage import as_utc
from lingotrail.models import User as UserORM


class UserMapper:
    """Mapper for User ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: UserORM) -> User:
        """Convert ORM model to domain entity; unknown role names are ignored."""
        known = {role.value for role in Role}
        return User.create_with_id(
            id=UserId(orm_model.id),
            username=orm_model.username,
            name=orm_model.name,
            email=orm_model.email,
            roles=frozenset(Role(role.name) for role in orm_model.roles if role.name in known),
            created_at=as_utc(orm_model.created_at),
        )
