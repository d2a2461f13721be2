"""DTOs for progress recording use cases."""

from dataclasses import dataclass

from lingotrail.domain.learning.entities.progress_event import ProgressEvent
from lingotrail.domain.learning.value_objects import QuizQuestion


@dataclass(frozen=True)
class QuizAnswer:
    question_id: int
    answer: str


@dataclass
class QuestionResult:
    question: QuizQuestion
    user_answer: str
    is_correct: bool


@dataclass
class QuizResult:
    """Graded quiz submission and the event recorded for it."""

    total_questions: int
    correct_answers: int
    score: float
    passed: bool
    time_spent_seconds: int
    question_results: list[QuestionResult]
    event: ProgressEvent
