"""Access token creation and verification.

Issuing tokens (login, refresh) happens outside this service; it only needs
to trust bearer tokens signed with the shared SECRET_KEY.
"""

from datetime import UTC, datetime, timedelta

import jwt
from jwt import InvalidTokenError

from lingotrail.config import get_settings

ALGORITHM = "HS256"


def create_access_token(user_id: int, expires_minutes: int | None = None) -> str:
    """Create an access token for a user."""
    settings = get_settings()
    if expires_minutes is None:
        expires_minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES
    expire = datetime.now(UTC) + timedelta(minutes=expires_minutes)
    to_encode = {"sub": str(user_id), "exp": expire, "type": "access"}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=ALGORITHM)


def verify_access_token(token: str) -> int | None:
    """Verify an access token and return the user_id if valid."""
    try:
        payload = jwt.decode(token, get_settings().SECRET_KEY, algorithms=[ALGORITHM])
        if payload.get("type") != "access":
            return None
        user_id = payload.get("sub")
        if user_id is None:
            return None
        return int(user_id)
    except (InvalidTokenError, ValueError):
        return None
