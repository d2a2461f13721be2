"""Tests for flashcard and quiz API endpoints."""

from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from lingotrail import models


class TestCompleteFlashcards:
    """Test suite for POST /topics/:id/flashcards/complete endpoint."""

    def test_first_session(
        self,
        client: TestClient,
        db_session: Session,
        learner: models.User,
        learner_headers: dict[str, str],
        basics_journey: models.Journey,
        basics_topics: list[models.Topic],
    ) -> None:
        topic = basics_topics[0]

        response = client.post(
            f"/api/v1/topics/{topic.id}/flashcards/complete",
            json={"journey_id": basics_journey.id, "time_spent_seconds": 120},
            headers=learner_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["activity_type"] == "flashcard"
        assert data["completed"] is True
        assert data["time_spent_seconds"] == 120
        assert data["journey_id"] == basics_journey.id
        assert data["user_id"] == learner.id

        stored = db_session.query(models.UserProgress).filter_by(id=data["id"]).first()
        assert stored is not None
        assert stored.completed is True

    def test_repeat_session_accumulates_time(
        self,
        client: TestClient,
        db_session: Session,
        learner_headers: dict[str, str],
        basics_topics: list[models.Topic],
    ) -> None:
        url = f"/api/v1/topics/{basics_topics[0].id}/flashcards/complete"

        first = client.post(url, json={"time_spent_seconds": 60}, headers=learner_headers)
        second = client.post(url, json={"time_spent_seconds": 45}, headers=learner_headers)

        assert second.json()["id"] == first.json()["id"]
        assert second.json()["time_spent_seconds"] == 105
        assert db_session.query(models.UserProgress).count() == 1

    def test_negative_time_rejected(
        self,
        client: TestClient,
        learner_headers: dict[str, str],
        basics_topics: list[models.Topic],
    ) -> None:
        response = client.post(
            f"/api/v1/topics/{basics_topics[0].id}/flashcards/complete",
            json={"time_spent_seconds": -5},
            headers=learner_headers,
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT

    def test_topic_not_found(self, client: TestClient, learner_headers: dict[str, str]) -> None:
        response = client.post(
            "/api/v1/topics/99999/flashcards/complete", json={}, headers=learner_headers
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_journey_not_found(
        self,
        client: TestClient,
        learner_headers: dict[str, str],
        basics_topics: list[models.Topic],
    ) -> None:
        response = client.post(
            f"/api/v1/topics/{basics_topics[0].id}/flashcards/complete",
            json={"journey_id": 99999},
            headers=learner_headers,
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestSubmitQuiz:
    """Test suite for POST /topics/:id/quiz/submit endpoint."""

    def test_grades_and_records_attempt(
        self,
        client: TestClient,
        db_session: Session,
        learner_headers: dict[str, str],
        make_topic,
    ) -> None:
        topic = make_topic("Colours", quiz_count=4)
        questions = db_session.query(models.QuizQuestion).filter_by(topic_id=topic.id).all()
        answers = [
            {"question_id": q.id, "answer": "a" if i < 3 else "b"}
            for i, q in enumerate(questions)
        ]

        response = client.post(
            f"/api/v1/topics/{topic.id}/quiz/submit",
            json={"answers": answers, "time_spent_seconds": 200},
            headers=learner_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["total_questions"] == 4
        assert data["correct_answers"] == 3
        assert data["score"] == 75.0
        assert data["passed"] is True
        assert len(data["question_results"]) == 4
        wrong = data["question_results"][3]
        assert wrong["is_correct"] is False
        assert wrong["user_answer"] == "b"
        assert wrong["correct_answer"] == "a"
        assert wrong["option_a"] == "right"

        event = db_session.query(models.UserProgress).filter_by(activity_type="quiz").one()
        assert event.completed is True
        assert event.score == 75.0

    def test_failed_attempt_recorded_as_not_completed(
        self,
        client: TestClient,
        db_session: Session,
        learner_headers: dict[str, str],
        make_topic,
    ) -> None:
        topic = make_topic("Colours", quiz_count=2)
        questions = db_session.query(models.QuizQuestion).filter_by(topic_id=topic.id).all()

        response = client.post(
            f"/api/v1/topics/{topic.id}/quiz/submit",
            json={"answers": [{"question_id": q.id, "answer": "c"} for q in questions]},
            headers=learner_headers,
        )

        assert response.json()["passed"] is False
        event = db_session.query(models.UserProgress).filter_by(activity_type="quiz").one()
        assert event.completed is False

    def test_topic_without_questions(
        self,
        client: TestClient,
        learner_headers: dict[str, str],
        basics_topics: list[models.Topic],
    ) -> None:
        response = client.post(
            f"/api/v1/topics/{basics_topics[0].id}/quiz/submit",
            json={"answers": [{"question_id": 1, "answer": "a"}]},
            headers=learner_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "No questions found for this topic"

    def test_invalid_answer_option(
        self,
        client: TestClient,
        learner_headers: dict[str, str],
        basics_topics: list[models.Topic],
    ) -> None:
        response = client.post(
            f"/api/v1/topics/{basics_topics[1].id}/quiz/submit",
            json={"answers": [{"question_id": 1, "answer": "e"}]},
            headers=learner_headers,
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT

    def test_empty_answers(
        self,
        client: TestClient,
        learner_headers: dict[str, str],
        basics_topics: list[models.Topic],
    ) -> None:
        response = client.post(
            f"/api/v1/topics/{basics_topics[1].id}/quiz/submit",
            json={"answers": []},
            headers=learner_headers,
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
