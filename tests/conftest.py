"""Pytest configuration and fixtures."""

import os

os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"

from collections.abc import Callable, Generator  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from lingotrail import models  # noqa: E402
from lingotrail.database import Base, get_db  # noqa: E402
from lingotrail.infrastructure.identity.services.token_service import (  # noqa: E402
    create_access_token,
)
from lingotrail.main import app  # noqa: E402

# Test database URL (in-memory SQLite shared by every connection)
TEST_DATABASE_URL = "sqlite:///:memory:"

test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, Any, None]:
    """Create a test client with database session."""

    def override_get_db() -> Generator[Session, None, None]:
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def roles(db_session: Session) -> dict[str, models.Role]:
    """Seed the three roles."""
    seeded = {name: models.Role(name=name) for name in ("learner", "teacher", "admin")}
    db_session.add_all(seeded.values())
    db_session.commit()
    return seeded


def _create_user(
    db_session: Session, roles: dict[str, models.Role], username: str, *role_names: str
) -> models.User:
    user = models.User(
        username=username,
        name=username.title(),
        email=f"{username}@example.com",
        roles=[roles[name] for name in role_names],
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def learner(db_session: Session, roles: dict[str, models.Role]) -> models.User:
    return _create_user(db_session, roles, "learner", "learner")


@pytest.fixture
def other_learner(db_session: Session, roles: dict[str, models.Role]) -> models.User:
    return _create_user(db_session, roles, "other", "learner")


@pytest.fixture
def teacher(db_session: Session, roles: dict[str, models.Role]) -> models.User:
    return _create_user(db_session, roles, "teacher", "teacher")


@pytest.fixture
def admin(db_session: Session, roles: dict[str, models.Role]) -> models.User:
    return _create_user(db_session, roles, "admin", "admin")


def _auth_headers(user: models.User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def learner_headers(learner: models.User) -> dict[str, str]:
    return _auth_headers(learner)


@pytest.fixture
def other_learner_headers(other_learner: models.User) -> dict[str, str]:
    return _auth_headers(other_learner)


@pytest.fixture
def teacher_headers(teacher: models.User) -> dict[str, str]:
    return _auth_headers(teacher)


@pytest.fixture
def make_topic(
    db_session: Session, teacher: models.User
) -> Callable[..., models.Topic]:
    """
    Factory creating a topic with words and quiz questions.

    Every question's correct answer is "a".
    """

    def factory(name: str, word_count: int = 2, quiz_count: int = 0) -> models.Topic:
        topic = models.Topic(name=name, level="beginner", created_by=teacher.id)
        db_session.add(topic)
        db_session.flush()
        for i in range(word_count):
            word = models.Word(base_word=f"{name}-word-{i}", created_by=teacher.id)
            db_session.add(word)
            db_session.flush()
            db_session.add(models.TopicWord(topic_id=topic.id, word_id=word.id, sequence_order=i))
        for i in range(quiz_count):
            db_session.add(
                models.QuizQuestion(
                    topic_id=topic.id,
                    question_type="translation",
                    question_text=f"{name} question {i}",
                    correct_answer="a",
                    option_a="right",
                    option_b="wrong",
                    option_c="wrong",
                    option_d="wrong",
                )
            )
        db_session.commit()
        db_session.refresh(topic)
        return topic

    return factory


@pytest.fixture
def make_journey(
    db_session: Session, teacher: models.User
) -> Callable[..., models.Journey]:
    """Factory creating a journey whose topics follow the given order."""

    def factory(
        name: str, topics: list[models.Topic], sequence_orders: list[int] | None = None
    ) -> models.Journey:
        journey = models.Journey(name=name, description=f"{name} journey", created_by=teacher.id)
        db_session.add(journey)
        db_session.flush()
        orders = sequence_orders or list(range(1, len(topics) + 1))
        for topic, order in zip(topics, orders, strict=True):
            db_session.add(
                models.JourneyTopic(journey_id=journey.id, topic_id=topic.id, sequence_order=order)
            )
        db_session.commit()
        db_session.refresh(journey)
        return journey

    return factory


@pytest.fixture
def admin_headers(admin: models.User) -> dict[str, str]:
    return _auth_headers(admin)


@pytest.fixture
def basics_topics(make_topic: Callable[..., models.Topic]) -> list[models.Topic]:
    """Greetings has no quiz; Numbers has one question."""
    return [make_topic("Greetings", quiz_count=0), make_topic("Numbers", quiz_count=1)]


@pytest.fixture
def basics_journey(
    basics_topics: list[models.Topic], make_journey: Callable[..., models.Journey]
) -> models.Journey:
    return make_journey("Basics", basics_topics)
