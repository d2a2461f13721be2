"""User entity for identity and role checks."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from lingotrail.domain.common.entity import Entity
from lingotrail.domain.common.exceptions import ValidationError
from lingotrail.domain.common.value_objects.ids import UserId

MAX_USERNAME_LENGTH = 50


class Role(StrEnum):
    """Roles a user can hold."""

    LEARNER = "learner"
    TEACHER = "teacher"
    ADMIN = "admin"


@dataclass
class User(Entity[UserId]):
    """
    User entity representing an authenticated user.

    Business Rules:
    - Username must be non-empty and at most MAX_USERNAME_LENGTH chars
    - A user holds any subset of the learner/teacher/admin roles
    - Teachers and admins may manage journeys and read other learners' progress
    """

    id: UserId
    username: str
    name: str
    email: str | None = None
    roles: frozenset[Role] = field(default_factory=frozenset)
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.username:
            raise ValidationError("Username cannot be empty", field="username")
        if len(self.username) > MAX_USERNAME_LENGTH:
            raise ValidationError(
                f"Username cannot exceed {MAX_USERNAME_LENGTH} characters",
                field="username",
                value=self.username,
            )

    def has_role(self, role: Role) -> bool:
        return role in self.roles

    def has_any_role(self, *roles: Role) -> bool:
        return any(self.has_role(role) for role in roles)

    @property
    def can_manage_journeys(self) -> bool:
        """Teachers and admins manage assignments and invitations."""
        return self.has_any_role(Role.TEACHER, Role.ADMIN)

    def can_view_progress_of(self, user_id: UserId) -> bool:
        """Learners see their own progress; managers see everyone's."""
        return self.id == user_id or self.can_manage_journeys

    @classmethod
    def create_with_id(
        cls,
        id: UserId,
        username: str,
        name: str,
        email: str | None,
        roles: frozenset[Role],
        created_at: datetime | None = None,
    ) -> "User":
        """Reconstitute a user from persistence."""
        return cls(
            id=id,
            username=username,
            name=name,
            email=email,
            roles=roles,
            created_at=created_at,
        )
