from typing import Protocol

from lingotrail.domain.common.value_objects.ids import UserId
from lingotrail.domain.identity.entities.user import User


class UserRepositoryProtocol(Protocol):
    def find_by_id(self, user_id: UserId) -> User | None: ...

    def find_by_ids(self, user_ids: list[UserId]) -> list[User]: ...
