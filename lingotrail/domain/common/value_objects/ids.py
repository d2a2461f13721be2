from dataclasses import dataclass

from ..entity import EntityId


@dataclass(frozen=True)
class UserId(EntityId):
    """Strongly-typed user identifier."""


@dataclass(frozen=True)
class TopicId(EntityId):
    """Strongly-typed topic identifier."""


@dataclass(frozen=True)
class JourneyId(EntityId):
    """Strongly-typed journey identifier."""


@dataclass(frozen=True)
class QuizQuestionId(EntityId):
    """Strongly-typed quiz question identifier."""


@dataclass(frozen=True)
class ProgressEventId(EntityId):
    """Strongly-typed progress event identifier."""


@dataclass(frozen=True)
class JourneyAssignmentId(EntityId):
    """Strongly-typed journey assignment identifier."""


@dataclass(frozen=True)
class InvitationId(EntityId):
    """Strongly-typed journey invitation identifier."""
