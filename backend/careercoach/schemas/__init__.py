"""
Pydantic schemas package for the AI Career Coach backend.

Schemas are organized by domain:
- user: profile updates, onboarding status
- insight: industry insight responses
- document: cover letter requests and responses
- interview: quiz questions, quiz results, assessments
"""

from .insight import IndustryInsightResponse

from .user import (
    ProfileUpdate,
    UserResponse,
    ProfileUpdateResponse,
    OnboardingStatus,
)

from .document import (
    CoverLetterRequest,
    CoverLetterResponse,
)

from .interview import (
    QuizQuestion,
    QuizResultRequest,
    QuestionResult,
    AssessmentResponse,
)

__all__ = [
    "IndustryInsightResponse",
    "ProfileUpdate",
    "UserResponse",
    "ProfileUpdateResponse",
    "OnboardingStatus",
    "CoverLetterRequest",
    "CoverLetterResponse",
    "QuizQuestion",
    "QuizResultRequest",
    "QuestionResult",
    "AssessmentResponse",
]
