from .invitation_schemas import (
    AcceptInvitationResponse,
    CreateInvitationRequest,
    Invitation,
    InvitationDetailsResponse,
)
from .journey_schemas import (
    AssignJourneyRequest,
    AssignJourneyResponse,
    JourneyAssignment,
    JourneyInfo,
    UnassignJourneyRequest,
    UnassignJourneyResponse,
    UserInfo,
    UserJourney,
)
from .progress_schemas import (
    FlashcardCompleteRequest,
    JourneyProgressResponse,
    ProgressEvent,
    QuestionResult,
    QuizAnswer,
    QuizResultResponse,
    QuizSubmitRequest,
    TopicSummary,
)

__all__ = [
    "AcceptInvitationResponse",
    "AssignJourneyRequest",
    "AssignJourneyResponse",
    "CreateInvitationRequest",
    "FlashcardCompleteRequest",
    "Invitation",
    "InvitationDetailsResponse",
    "JourneyAssignment",
    "JourneyInfo",
    "JourneyProgressResponse",
    "ProgressEvent",
    "QuestionResult",
    "QuizAnswer",
    "QuizResultResponse",
    "QuizSubmitRequest",
    "TopicSummary",
    "UnassignJourneyRequest",
    "UnassignJourneyResponse",
    "UserInfo",
    "UserJourney",
]
