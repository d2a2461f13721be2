"""Identity domain layer."""

from lingotrail.domain.identity.entities.user import Role, User
from lingotrail.domain.identity.exceptions import UserNotFoundError

__all__ = [
    "Role",
    "User",
    "UserNotFoundError",
]
