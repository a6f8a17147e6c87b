"""
Services package for the AI Career Coach backend.

- insight_service: freshness-gated industry insights and the dashboard
- insight_refresh: weekly batch regeneration and its scheduler
- user_service: user creation, onboarding, onboarding status
- cover_letter_service: cover letter generation and management
- interview_service: practice quizzes and assessments
"""

from .insight_service import (
    INDUSTRY_INSIGHT_SCHEMA,
    IndustryInsightGenerator,
    InsightFetcher,
    DashboardService,
)
from .insight_refresh import (
    InsightRefreshJob,
    RefreshReport,
    create_scheduler,
    run_insight_refresh,
)
from .user_service import UserService, ProfileUpdateResult
from .cover_letter_service import CoverLetterService, extract_cover_letter_content
from .interview_service import InterviewService, PLACEHOLDER_QUESTION, PLACEHOLDER_TIP

__all__ = [
    "INDUSTRY_INSIGHT_SCHEMA",
    "IndustryInsightGenerator",
    "InsightFetcher",
    "DashboardService",
    "InsightRefreshJob",
    "RefreshReport",
    "create_scheduler",
    "run_insight_refresh",
    "UserService",
    "ProfileUpdateResult",
    "CoverLetterService",
    "extract_cover_letter_content",
    "InterviewService",
    "PLACEHOLDER_QUESTION",
    "PLACEHOLDER_TIP",
]
