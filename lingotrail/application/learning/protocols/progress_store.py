"""Protocol for the learner progress event log."""

from typing import Protocol

from lingotrail.domain.common.value_objects.ids import TopicId, UserId
from lingotrail.domain.learning.entities.progress_event import ActivityType, ProgressEvent


class ProgressStoreProtocol(Protocol):
    """Durable log of per-user, per-topic activity events."""

    def find_progress_events(
        self, user_id: UserId, topic_id: TopicId, activity_type: ActivityType | None = None
    ) -> list[ProgressEvent]:
        """
        Find a learner's events for one topic.

        Args:
            user_id: The learner
            topic_id: The topic
            activity_type: Restrict to one activity, or None for all

        Returns:
            Events in creation order
        """
        ...

    def create_progress_event(self, event: ProgressEvent) -> ProgressEvent:
        """Append a new event and return it with its database ID."""
        ...

    def find_or_update_progress_event(self, event: ProgressEvent) -> ProgressEvent:
        """
        Upsert the learner's event for (user, topic, activity).

        If an event already exists it is locked, marked completed and has the
        new session's time added to it; otherwise ``event`` is inserted.
        """
        ...
