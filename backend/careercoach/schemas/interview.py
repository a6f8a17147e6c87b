"""
Interview practice Pydantic schemas.

Quiz questions accept ``correct_answer`` or the camel-case ``correctAnswer``
the client and the model may use.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


class QuizQuestion(BaseModel):
    """One multiple-choice question."""

    model_config = ConfigDict(populate_by_name=True)

    question: str = Field(..., min_length=1)
    options: List[str] = Field(..., min_length=2)
    correct_answer: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("correct_answer", "correctAnswer"),
    )
    explanation: str = ""

    @field_validator('options', mode='before')
    @classmethod
    def validate_options(cls, v):
        if not isinstance(v, list):
            raise ValueError('Options must be a list')
        return [str(option) for option in v]

    @field_validator('explanation', mode='before')
    @classmethod
    def default_explanation(cls, v):
        return v or ""


class QuizResultRequest(BaseModel):
    """Schema for submitting a completed quiz."""

    questions: List[QuizQuestion] = Field(..., min_length=1)
    answers: List[Optional[str]] = Field(default_factory=list)
    score: float = Field(..., ge=0, le=100)

    @model_validator(mode='after')
    def validate_answer_count(self):
        if len(self.answers) > len(self.questions):
            raise ValueError('More answers than questions')
        return self


class QuestionResult(BaseModel):
    question: str
    answer: str
    user_answer: Optional[str] = None
    is_correct: bool
    explanation: str = ""


class AssessmentResponse(BaseModel):
    """Schema for stored assessments."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    quiz_score: float
    questions: List[QuestionResult] = Field(default_factory=list)
    category: str
    improvement_tip: Optional[str] = None
    created_at: Optional[datetime] = None
