"""Typed identifiers; import them from here rather than from ``ids``."""

from .ids import (
    InvitationId,
    JourneyAssignmentId,
    JourneyId,
    ProgressEventId,
    QuizQuestionId,
    TopicId,
    UserId,
)

__all__ = [
    "InvitationId",
    "JourneyAssignmentId",
    "JourneyId",
    "ProgressEventId",
    "QuizQuestionId",
    "TopicId",
    "UserId",
]
