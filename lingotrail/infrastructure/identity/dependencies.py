"""FastAPI dependencies for identity and role checks."""

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from lingotrail.core import container
from lingotrail.database import DatabaseSession
from lingotrail.domain.identity.entities.user import Role, User
from lingotrail.domain.identity.exceptions import UserNotFoundError
from lingotrail.exceptions import CredentialsException
from lingotrail.infrastructure.common.di import build_with_session
from lingotrail.infrastructure.identity.services.token_service import verify_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login")


def get_current_user(token: Annotated[str, Depends(oauth2_scheme)], db: DatabaseSession) -> User:
    """
    Get the current authenticated user from the access token.

    Raises:
        CredentialsException: If token is invalid or user not found
    """
    user_id = verify_access_token(token)
    if user_id is None:
        raise CredentialsException

    use_case = build_with_session(container.get_user_by_id_use_case, db)
    try:
        return use_case.get_user(user_id)
    except UserNotFoundError:
        raise CredentialsException from None


CurrentUser = Annotated[User, Depends(get_current_user)]


def require_roles(*roles: Role) -> Callable[[User], User]:
    """Dependency factory rejecting users that hold none of ``roles``."""

    def dependency(current_user: CurrentUser) -> User:
        if not current_user.has_any_role(*roles):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return current_user

    return dependency


JourneyManager = Annotated[User, Depends(require_roles(Role.TEACHER, Role.ADMIN))]
