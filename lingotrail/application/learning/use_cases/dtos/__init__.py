from .invitation_dtos import InvitationDetails
from .journey_dtos import AssignmentWithProgress, JourneyProgress
from .progress_dtos import QuestionResult, QuizAnswer, QuizResult

__all__ = [
    "AssignmentWithProgress",
    "InvitationDetails",
    "JourneyProgress",
    "QuestionResult",
    "QuizAnswer",
    "QuizResult",
]
