from .content_repository import ContentRepository
from .invitation_repository import InvitationRepository
from .journey_assignment_repository import JourneyAssignmentRepository
from .progress_event_repository import ProgressEventRepository

__all__ = [
    "ContentRepository",
    "InvitationRepository",
    "JourneyAssignmentRepository",
    "ProgressEventRepository",
]
