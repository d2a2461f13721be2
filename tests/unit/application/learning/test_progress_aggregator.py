from datetime import UTC, datetime

import pytest

from lingotrail.domain.common.value_objects.ids import JourneyId, TopicId, UserId
from lingotrail.domain.learning.entities.progress_event import ProgressEvent
from lingotrail.exceptions import StorageError

NOW = datetime(2026, 3, 1, tzinfo=UTC)
LEARNER = UserId(1)


def complete_flashcards(store, topic_id: TopicId, user_id: UserId = LEARNER) -> None:
    store.find_or_update_progress_event(
        ProgressEvent.flashcard_completion(
            user_id=user_id,
            topic_id=topic_id,
            journey_id=None,
            time_spent_seconds=30,
            completed_at=NOW,
        )
    )


def take_quiz(store, topic_id: TopicId, passed: bool = True, user_id: UserId = LEARNER) -> None:
    store.create_progress_event(
        ProgressEvent.quiz_result(
            user_id=user_id,
            topic_id=topic_id,
            journey_id=None,
            score=100.0 if passed else 0.0,
            passed=passed,
            time_spent_seconds=60,
            completed_at=NOW,
        )
    )


class TestEmptyJourney:
    def test_progress_is_zero_without_topics(self, content, aggregator) -> None:
        journey_id = content.add_journey(1, [])

        snapshot = aggregator.get_journey_progress(LEARNER, journey_id)

        assert snapshot.total_topics == 0
        assert snapshot.completed_topics == 0
        assert snapshot.progress_percent == 0.0
        assert snapshot.next_topic is None
        assert not snapshot.is_finished

    def test_unknown_journey_behaves_like_empty(self, aggregator) -> None:
        assert aggregator.get_completed_topic_ids(LEARNER, JourneyId(999)) == set()
        assert aggregator.get_next_topic(LEARNER, JourneyId(999)) is None


class TestTopicCompletion:
    def test_topic_without_quizzes_completes_on_flashcards(
        self, content, progress_store, aggregator
    ) -> None:
        topic = content.add_topic(1, quiz_count=0)
        journey_id = content.add_journey(1, [(1, 1)])

        complete_flashcards(progress_store, topic)

        assert aggregator.get_completed_topic_ids(LEARNER, journey_id) == {topic}

    def test_quiz_events_not_read_for_topic_without_quizzes(
        self, content, progress_store, aggregator
    ) -> None:
        topic = content.add_topic(1, quiz_count=0)
        complete_flashcards(progress_store, topic)
        progress_store.reads = 0

        assert aggregator.is_topic_completed(LEARNER, topic)
        assert progress_store.reads == 1

    def test_topic_with_quizzes_needs_passed_quiz(
        self, content, progress_store, aggregator
    ) -> None:
        topic = content.add_topic(1, quiz_count=2)
        content.add_journey(1, [(1, 1)])

        complete_flashcards(progress_store, topic)
        assert not aggregator.is_topic_completed(LEARNER, topic)

        take_quiz(progress_store, topic, passed=False)
        assert not aggregator.is_topic_completed(LEARNER, topic)

        take_quiz(progress_store, topic, passed=True)
        assert aggregator.is_topic_completed(LEARNER, topic)

    def test_quiz_before_flashcards(self, content, progress_store, aggregator) -> None:
        topic = content.add_topic(1, quiz_count=1)

        take_quiz(progress_store, topic, passed=True)
        assert not aggregator.is_topic_completed(LEARNER, topic)

        complete_flashcards(progress_store, topic)
        assert aggregator.is_topic_completed(LEARNER, topic)

    def test_other_learners_progress_is_ignored(
        self, content, progress_store, aggregator
    ) -> None:
        topic = content.add_topic(1, quiz_count=0)
        journey_id = content.add_journey(1, [(1, 1)])

        complete_flashcards(progress_store, topic, user_id=UserId(2))

        assert aggregator.get_completed_topic_ids(LEARNER, journey_id) == set()

    def test_completion_carries_across_journeys(
        self, content, progress_store, aggregator
    ) -> None:
        topic = content.add_topic(1, quiz_count=0)
        first = content.add_journey(1, [(1, 1)])
        second = content.add_journey(2, [(1, 5)])

        complete_flashcards(progress_store, topic)

        assert aggregator.get_completed_topic_ids(LEARNER, first) == {topic}
        assert aggregator.get_completed_topic_ids(LEARNER, second) == {topic}


class TestProgressPercent:
    def test_one_of_three_is_33_3(self, content, progress_store, aggregator) -> None:
        for topic_id in (1, 2, 3):
            content.add_topic(topic_id)
        journey_id = content.add_journey(1, [(1, 1), (2, 2), (3, 3)])

        complete_flashcards(progress_store, TopicId(2))
        snapshot = aggregator.get_journey_progress(LEARNER, journey_id)

        assert snapshot.total_topics == 3
        assert snapshot.completed_topics == 1
        assert snapshot.progress_percent == 33.3


class TestNextTopic:
    def test_follows_sequence_order_not_insertion_order(
        self, content, progress_store, aggregator
    ) -> None:
        for topic_id in (1, 2, 3):
            content.add_topic(topic_id)
        journey_id = content.add_journey(1, [(1, 30), (2, 10), (3, 20)])

        assert aggregator.get_next_topic(LEARNER, journey_id).topic_id == TopicId(2)

        complete_flashcards(progress_store, TopicId(2))
        assert aggregator.get_next_topic(LEARNER, journey_id).topic_id == TopicId(3)

    def test_skips_completed_topic_ahead_in_sequence(
        self, content, progress_store, aggregator
    ) -> None:
        for topic_id in (1, 2):
            content.add_topic(topic_id)
        journey_id = content.add_journey(1, [(1, 1), (2, 2)])

        complete_flashcards(progress_store, TopicId(2))

        assert aggregator.get_next_topic(LEARNER, journey_id).topic_id == TopicId(1)


class TestSnapshot:
    def test_snapshot_includes_completed_ids(self, content, progress_store, aggregator) -> None:
        for topic_id in (1, 2):
            content.add_topic(topic_id)
        journey_id = content.add_journey(1, [(1, 1), (2, 2)])
        complete_flashcards(progress_store, TopicId(1))

        snapshot, completed_ids = aggregator.get_snapshot(LEARNER, journey_id)

        assert completed_ids == {TopicId(1)}
        assert snapshot.next_topic.topic_id == TopicId(2)

    def test_reflects_new_events_immediately(self, content, progress_store, aggregator) -> None:
        content.add_topic(1)
        journey_id = content.add_journey(1, [(1, 1)])

        assert aggregator.get_journey_progress(LEARNER, journey_id).progress_percent == 0.0
        complete_flashcards(progress_store, TopicId(1))
        assert aggregator.get_journey_progress(LEARNER, journey_id).progress_percent == 100.0


def test_two_topic_journey_unlocks_in_order(content, progress_store, aggregator) -> None:
    """Greetings has no quiz and Numbers has one; they unlock one after the other."""
    greetings = content.add_topic(1, quiz_count=0)
    numbers = content.add_topic(2, quiz_count=1)
    journey_id = content.add_journey(1, [(1, 1), (2, 2)])

    complete_flashcards(progress_store, greetings)
    assert aggregator.get_completed_topic_ids(LEARNER, journey_id) == {greetings}
    assert aggregator.get_next_topic(LEARNER, journey_id).topic_id == numbers
    assert aggregator.get_journey_progress(LEARNER, journey_id).progress_percent == 50.0

    complete_flashcards(progress_store, numbers)
    assert aggregator.get_completed_topic_ids(LEARNER, journey_id) == {greetings}
    assert aggregator.get_next_topic(LEARNER, journey_id).topic_id == numbers

    take_quiz(progress_store, numbers)
    assert aggregator.get_completed_topic_ids(LEARNER, journey_id) == {greetings, numbers}
    assert aggregator.get_next_topic(LEARNER, journey_id) is None
    snapshot = aggregator.get_journey_progress(LEARNER, journey_id)
    assert snapshot.progress_percent == 100.0
    assert snapshot.is_finished


class TestQueryCount:
    def test_journey_topic_quiz_counts_are_reused(self, content, progress_store, aggregator):
        quiz_topic = content.add_topic(1, quiz_count=2)
        plain_topic = content.add_topic(2)
        journey_id = content.add_journey(1, [(1, 1), (2, 2)])
        complete_flashcards(progress_store, quiz_topic)
        complete_flashcards(progress_store, plain_topic)
        take_quiz(progress_store, quiz_topic)

        snapshot = aggregator.get_journey_progress(LEARNER, journey_id)

        assert snapshot.completed_topics == 2
        assert content.quiz_count_reads == 0


class TestStorageFailures:
    """Store failures surface to the caller instead of reading as zero progress."""

    @pytest.fixture
    def journey_id(self, content, progress_store) -> JourneyId:
        topic = content.add_topic(1)
        complete_flashcards(progress_store, topic)
        return content.add_journey(1, [(1, 1)])

    @pytest.mark.parametrize(
        "query", ["get_journey_progress", "get_completed_topic_ids", "get_next_topic"]
    )
    def test_progress_store_failure_propagates(
        self, progress_store, aggregator, journey_id, query
    ) -> None:
        progress_store.failure = StorageError("load progress events")

        with pytest.raises(StorageError, match="load progress events"):
            getattr(aggregator, query)(LEARNER, journey_id)

    @pytest.mark.parametrize(
        "query", ["get_journey_progress", "get_completed_topic_ids", "get_next_topic"]
    )
    def test_content_failure_propagates(self, content, aggregator, journey_id, query) -> None:
        content.failure = StorageError("load journey topics")

        with pytest.raises(StorageError, match="load journey topics"):
            getattr(aggregator, query)(LEARNER, journey_id)
