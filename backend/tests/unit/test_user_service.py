"""
Unit tests for user creation, onboarding and onboarding status.
"""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy import func, select

from careercoach.core.exceptions import GenerationFailedError, UnauthorizedError
from careercoach.models import DemandLevel, IndustryInsight, User
from careercoach.repositories import IndustryInsightRepository, UserRepository
from careercoach.schemas import ProfileUpdate
from careercoach.services import IndustryInsightGenerator, UserService

from conftest import NOW, insight_json, insight_payload


@pytest.fixture
def user_service(db_session, structured, clock):
    return UserService(
        users=UserRepository(db_session),
        insights=IndustryInsightRepository(db_session),
        generator=IndustryInsightGenerator(structured),
        clock=clock,
    )


def profile(**overrides):
    data = {
        "industry": "tech-software-development",
        "experience": 5,
        "bio": "Backend engineer",
        "skills": ["Python", "SQL"],
    }
    data.update(overrides)
    return ProfileUpdate(**data)


class TestUserService:
    """Test suite for UserService."""

    async def test_ensure_user_creates_once(self, user_service, identity, db_session):
        first = await user_service.ensure_user(identity)
        second = await user_service.ensure_user(identity)

        assert first.id == second.id
        assert first.email == "jane@example.com"
        count = await db_session.scalar(select(func.count()).select_from(User))
        assert count == 1

    async def test_ensure_user_requires_identity(self, user_service):
        with pytest.raises(UnauthorizedError):
            await user_service.ensure_user(None)

    async def test_update_profile_generates_missing_insight(self, user_service, identity, text_client):
        text_client.queue(insight_json(demand_level="high"))

        result = await user_service.update_profile(identity, profile())

        assert text_client.call_count == 1
        assert result.user.industry == "tech-software-development"
        assert result.user.skills == ["Python", "SQL"]
        assert result.user.experience == 5
        assert result.industry_insight.industry == "tech-software-development"
        assert result.industry_insight.demand_level == DemandLevel.HIGH

    async def test_update_profile_generates_with_no_transaction_open(
        self, user_service, identity, text_client, db_session
    ):
        await user_service.ensure_user(identity)
        text_client.queue(insight_json())
        text_client.observer = db_session.in_transaction

        await user_service.update_profile(identity, profile())

        assert text_client.observed == [False]

    async def test_update_profile_reuses_existing_insight(self, user_service, identity, text_client, db_session):
        repository = IndustryInsightRepository(db_session)
        async with repository.transaction():
            await repository.upsert("finance", insight_payload(), last_updated=NOW, next_update=NOW)

        result = await user_service.update_profile(identity, profile(industry="finance"))

        assert text_client.call_count == 0
        assert result.industry_insight.industry == "finance"

    async def test_generation_failure_leaves_profile_untouched(self, user_service, identity, text_client, db_session):
        text_client.queue("garbage")

        with pytest.raises(GenerationFailedError):
            await user_service.update_profile(identity, profile())

        user = await UserRepository(db_session).find_by_subject(identity.subject)
        assert user.industry is None
        count = await db_session.scalar(select(func.count()).select_from(IndustryInsight))
        assert count == 0

    async def test_update_profile_requires_identity_before_store_access(self, structured):
        users = AsyncMock(spec=UserRepository)
        insights = AsyncMock(spec=IndustryInsightRepository)
        service = UserService(users, insights, IndustryInsightGenerator(structured))

        with pytest.raises(UnauthorizedError):
            await service.update_profile(None, profile())
        users.find_by_subject.assert_not_called()
        insights.find_by_key.assert_not_called()

    async def test_onboarding_status(self, user_service, identity, text_client):
        assert await user_service.get_onboarding_status(None) is False
        assert await user_service.get_onboarding_status(identity) is False

        await user_service.ensure_user(identity)
        assert await user_service.get_onboarding_status(identity) is False

        text_client.queue(insight_json())
        await user_service.update_profile(identity, profile())
        assert await user_service.get_onboarding_status(identity) is True


class TestProfileUpdateSchema:

    def test_skills_from_comma_string(self):
        assert profile(skills="Python, Go").skills == ["Python", "Go"]

    def test_blank_industry_rejected(self):
        from pydantic import ValidationError

        with pytest.raises(ValidationError):
            profile(industry="   ")
