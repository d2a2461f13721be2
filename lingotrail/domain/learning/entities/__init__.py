from .journey_assignment import AssignmentStatus, JourneyAssignment
from .journey_invitation import JourneyInvitation, generate_invitation_token
from .progress_event import ActivityType, ProgressEvent

__all__ = [
    "ActivityType",
    "AssignmentStatus",
    "JourneyAssignment",
    "JourneyInvitation",
    "ProgressEvent",
    "generate_invitation_token",
]
