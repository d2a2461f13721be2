"""Custom exception hierarchy for the lingotrail application."""

from fastapi import HTTPException
from starlette import status


class LingotrailError(Exception):
    """Base exception for all lingotrail errors."""

    def __init__(self, message: str, status_code: int = 500) -> None:
        """Initialize exception with message and optional status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundError(LingotrailError):
    """Resource not found error."""

    def __init__(self, message: str) -> None:
        """Initialize with message and 404 status code."""
        super().__init__(message, status_code=404)


class JourneyNotFoundError(NotFoundError):
    """Journey not found error."""

    def __init__(self, journey_id: int | None = None, *, message: str | None = None) -> None:
        """Initialize with journey ID or custom message."""
        self.journey_id = journey_id
        if message:
            super().__init__(message)
        elif journey_id is not None:
            super().__init__(f"Journey with id {journey_id} not found")
        else:
            super().__init__("Journey not found")


class TopicNotFoundError(NotFoundError):
    """Topic not found error."""

    def __init__(self, topic_id: int | None = None, *, message: str | None = None) -> None:
        """Initialize with topic ID or custom message."""
        self.topic_id = topic_id
        if message:
            super().__init__(message)
        elif topic_id is not None:
            super().__init__(f"Topic with id {topic_id} not found")
        else:
            super().__init__("Topic not found")


class ValidationError(LingotrailError):
    """Validation error."""

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code=status_code)


class StorageError(LingotrailError):
    """The database could not be read or written."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Storage failure while trying to {operation}", status_code=503)


CredentialsException = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Could not validate credentials",
    headers={"WWW-Authenticate": "Bearer"},
)
