"""Shared helpers for SQLAlchemy repositories."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import overload

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from lingotrail.exceptions import StorageError

logger = logging.getLogger(__name__)


@contextmanager
def storage_errors(db: Session, operation: str) -> Iterator[None]:
    """Roll back and re-raise database failures as StorageError."""
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Storage failure while trying to {operation}")
        raise StorageError(operation) from e


@overload
def as_utc(value: datetime) -> datetime: ...


@overload
def as_utc(value: None) -> None: ...


def as_utc(value: datetime | None) -> datetime | None:
    """SQLite drops tzinfo; stored timestamps are always UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)
