"""Identity domain exceptions."""

from lingotrail.domain.common.exceptions import EntityNotFoundError


class UserNotFoundError(EntityNotFoundError):
    """The bearer token names a user that no longer exists."""

    def __init__(self, user_id: int) -> None:
        super().__init__("User", user_id)
        self.user_id = user_id
