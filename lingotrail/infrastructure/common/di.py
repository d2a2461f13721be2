from collections.abc import Callable
from typing import TypeVar

from dependency_injector.providers import Provider
from sqlalchemy.orm import Session

from lingotrail.core import container
from lingotrail.database import DatabaseSession

T = TypeVar("T")


def build_with_session(provider: Provider[T], db: Session) -> T:
    """Build the provider's object graph with ``db`` as the session of every repository."""
    with container.db.override(db):
        return provider()


def inject_use_case(provider: Provider[T]) -> Callable[[DatabaseSession], T]:
    """
    Create a FastAPI dependency for a container provider.

    Each request gets repositories bound to its own session; the override is
    removed before the handler runs.
    """

    def dependency(db: DatabaseSession) -> T:
        return build_with_session(provider, db)

    return dependency
