from .content_repository import ContentRepositoryProtocol
from .invitation_repository import InvitationRepositoryProtocol
from .journey_assignment_repository import JourneyAssignmentRepositoryProtocol
from .progress_store import ProgressStoreProtocol

__all__ = [
    "ContentRepositoryProtocol",
    "InvitationRepositoryProtocol",
    "JourneyAssignmentRepositoryProtocol",
    "ProgressStoreProtocol",
]
