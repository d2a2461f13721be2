"""Use case for loading the authenticated user (used by the auth dependency)."""

import structlog

from lingotrail.application.identity.protocols.user_repository import UserRepositoryProtocol
from lingotrail.domain.common.value_objects.ids import UserId
from lingotrail.domain.identity.entities.user import User
from lingotrail.domain.identity.exceptions import UserNotFoundError

logger = structlog.get_logger(__name__)


class GetUserByIdUseCase:
    """Use case for getting a user by ID."""

    def __init__(self, user_repository: UserRepositoryProtocol) -> None:
        self.user_repository = user_repository

    def get_user(self, user_id: int) -> User:
        """
        Get a user by ID.

        Raises:
            UserNotFoundError: If user is not found
        """
        user = self.user_repository.find_by_id(UserId(user_id))
        if not user:
            logger.warning("token_user_missing", user_id=user_id)
            raise UserNotFoundError(user_id)
        return user
