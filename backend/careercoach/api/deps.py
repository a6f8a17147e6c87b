"""
FastAPI dependencies that assemble services per request.

Long-lived collaborators (database manager, structured generator) live on
``app.state`` and are set up in the application lifespan; repositories share
the request's session so a service's writes commit together.
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from careercoach.core.config import Settings, get_settings
from careercoach.core.database import get_db
from careercoach.repositories import (
    AssessmentRepository,
    CoverLetterRepository,
    IndustryInsightRepository,
    UserRepository,
)
from careercoach.services import (
    CoverLetterService,
    DashboardService,
    IndustryInsightGenerator,
    InsightFetcher,
    InterviewService,
    UserService,
)
from careercoach.services.llm import ResilientStructuredGenerator


def get_structured_generator(request: Request) -> ResilientStructuredGenerator:
    return request.app.state.structured_generator


def get_insight_generator(
    structured: ResilientStructuredGenerator = Depends(get_structured_generator),
) -> IndustryInsightGenerator:
    return IndustryInsightGenerator(structured)


def get_dashboard_service(
    db: AsyncSession = Depends(get_db),
    generator: IndustryInsightGenerator = Depends(get_insight_generator),
    settings: Settings = Depends(get_settings),
) -> DashboardService:
    fetcher = InsightFetcher(
        store=IndustryInsightRepository(db),
        generator=generator,
        ttl=settings.insight_ttl,
    )
    return DashboardService(UserRepository(db), fetcher)


def get_user_service(
    db: AsyncSession = Depends(get_db),
    generator: IndustryInsightGenerator = Depends(get_insight_generator),
    settings: Settings = Depends(get_settings),
) -> UserService:
    return UserService(
        users=UserRepository(db),
        insights=IndustryInsightRepository(db),
        generator=generator,
        ttl=settings.insight_ttl,
    )


def get_cover_letter_service(
    db: AsyncSession = Depends(get_db),
    structured: ResilientStructuredGenerator = Depends(get_structured_generator),
) -> CoverLetterService:
    return CoverLetterService(UserRepository(db), CoverLetterRepository(db), structured)


def get_interview_service(
    db: AsyncSession = Depends(get_db),
    structured: ResilientStructuredGenerator = Depends(get_structured_generator),
    settings: Settings = Depends(get_settings),
) -> InterviewService:
    return InterviewService(
        UserRepository(db),
        AssessmentRepository(db),
        structured,
        question_count=settings.quiz_question_count,
    )
