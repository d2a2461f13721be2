"""Use case for reading a learner's progress on a journey."""

from lingotrail.application.learning.protocols.content_repository import (
    ContentRepositoryProtocol,
)
from lingotrail.application.learning.services.progress_aggregator import ProgressAggregator
from lingotrail.application.learning.use_cases.dtos.journey_dtos import JourneyProgress
from lingotrail.domain.common.value_objects.ids import JourneyId, UserId
from lingotrail.exceptions import JourneyNotFoundError


class JourneyProgressUseCase:
    def __init__(
        self,
        content_repository: ContentRepositoryProtocol,
        progress_aggregator: ProgressAggregator,
    ) -> None:
        self.content_repository = content_repository
        self.progress_aggregator = progress_aggregator

    def get_progress(self, user_id: int, journey_id: int) -> JourneyProgress:
        """
        Progress snapshot and completed topics of one learner on one journey.

        Raises:
            JourneyNotFoundError: If the journey does not exist
        """
        journey_id_vo = JourneyId(journey_id)
        journey = self.content_repository.find_journey(journey_id_vo)
        if journey is None:
            raise JourneyNotFoundError(journey_id)

        snapshot, completed_ids = self.progress_aggregator.get_snapshot(
            UserId(user_id), journey_id_vo
        )
        return JourneyProgress(
            journey=journey,
            snapshot=snapshot,
            completed_topic_ids=sorted(completed_ids, key=lambda topic_id: topic_id.value),
        )
