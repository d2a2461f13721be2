from .journey_status_machine import JourneyStatusMachine
from .progress_aggregator import ProgressAggregator

__all__ = ["JourneyStatusMachine", "ProgressAggregator"]
