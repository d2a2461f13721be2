"""Pydantic schemas for progress recording and journey progress."""

from datetime import datetime

from pydantic import BaseModel, Field


class TopicSummary(BaseModel):
    """Topic as offered to the learner as the next one to study."""

    id: int
    name: str
    description: str | None = None
    level: str | None = None
    word_count: int = 0
    quiz_count: int = 0
    sequence_order: int


class JourneyProgressResponse(BaseModel):
    """Schema for a learner's progress on a journey."""

    journey_id: int
    journey_name: str
    total_topics: int = Field(..., ge=0)
    completed_topics: int = Field(..., ge=0)
    progress_percent: float = Field(..., ge=0, le=100, description="Rounded to one decimal")
    completed_topic_ids: list[int]
    next_topic: TopicSummary | None = Field(
        None, description="First unfinished topic; null once every topic is done"
    )


class FlashcardCompleteRequest(BaseModel):
    """Schema for finishing a flashcard session."""

    journey_id: int | None = Field(None, description="Journey the session belongs to")
    time_spent_seconds: int = Field(0, ge=0, description="Length of the session")


class ProgressEvent(BaseModel):
    """Schema for a stored progress event."""

    id: int
    user_id: int
    topic_id: int
    journey_id: int | None
    activity_type: str
    completed: bool
    score: float | None = None
    max_score: float | None = None
    time_spent_seconds: int
    completed_at: datetime | None = None


class QuizAnswer(BaseModel):
    question_id: int
    answer: str = Field(..., pattern="^[abcd]$", description="Chosen option")


class QuizSubmitRequest(BaseModel):
    """Schema for submitting a quiz attempt."""

    journey_id: int | None = Field(None, description="Journey the attempt belongs to")
    answers: list[QuizAnswer] = Field(..., min_length=1)
    time_spent_seconds: int = Field(0, ge=0)


class QuestionResult(BaseModel):
    question_id: int
    question_type: str
    question_text: str
    user_answer: str
    correct_answer: str
    is_correct: bool
    option_a: str
    option_b: str
    option_c: str
    option_d: str


class QuizResultResponse(BaseModel):
    """Schema for a graded quiz."""

    total_questions: int
    correct_answers: int
    score: float = Field(..., description="Percentage of correct answers")
    passed: bool
    time_spent_seconds: int
    question_results: list[QuestionResult]
