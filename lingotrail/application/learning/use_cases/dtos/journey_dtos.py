"""DTOs for journey progress and assignment use cases."""

from dataclasses import dataclass

from lingotrail.domain.common.value_objects.ids import TopicId
from lingotrail.domain.identity.entities.user import User
from lingotrail.domain.learning.entities.journey_assignment import JourneyAssignment
from lingotrail.domain.learning.value_objects import JourneySummary, ProgressSnapshot


@dataclass
class JourneyProgress:
    journey: JourneySummary
    snapshot: ProgressSnapshot
    completed_topic_ids: list[TopicId]


@dataclass
class AssignmentWithProgress:
    """Assignment joined with its journey, its learner and current progress."""

    assignment: JourneyAssignment
    snapshot: ProgressSnapshot
    journey: JourneySummary | None = None
    user: User | None = None
