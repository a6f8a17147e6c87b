"""
User profile service.

Handles first-seen user creation, onboarding (choosing an industry, which
also provisions that industry's insight) and the onboarding status check.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from careercoach.core.security import Identity, require_identity
from careercoach.models import IndustryInsight, User
from careercoach.repositories import IndustryInsightRepository, UserRepository
from careercoach.schemas.user import ProfileUpdate
from careercoach.services.insight_service import IndustryInsightGenerator
from careercoach.utils import utcnow

logger = logging.getLogger(__name__)


@dataclass
class ProfileUpdateResult:
    user: User
    industry_insight: IndustryInsight


class UserService:
    """Service for user profiles and onboarding."""

    def __init__(
        self,
        users: UserRepository,
        insights: IndustryInsightRepository,
        generator: IndustryInsightGenerator,
        ttl: timedelta = timedelta(days=7),
        clock=utcnow,
    ):
        self.users = users
        self.insights = insights
        self.generator = generator
        self.ttl = ttl
        self.clock = clock

    async def ensure_user(self, identity: Optional[Identity]) -> User:
        """
        Return the user for an identity, creating it on first sight.

        Raises:
            UnauthorizedError: No caller identity
        """
        identity = require_identity(identity)
        user = await self.users.find_by_subject(identity.subject)
        if user is not None:
            return user

        async with self.users.transaction():
            user = await self.users.create_from_identity(identity)
        logger.info(f"Created user for subject {identity.subject}")
        return user

    async def update_profile(self, identity: Optional[Identity], profile: ProfileUpdate) -> ProfileUpdateResult:
        """
        Save the caller's profile and make sure the chosen industry has insights.

        A missing insight is generated before the transaction opens; the
        insight and the profile are then written together.

        Raises:
            UnauthorizedError: No caller identity
            GenerationFailedError: The industry's insight could not be generated
            PersistenceFailedError: The writes were rejected
        """
        user = await self.ensure_user(identity)

        insight = await self.insights.find_by_key(profile.industry)
        payload = None
        if insight is None:
            await self.insights.release()
            payload = await self.generator.generate(profile.industry)

        async with self.users.transaction():
            if payload is not None:
                now = self.clock()
                insight = await self.insights.upsert(
                    profile.industry,
                    payload,
                    last_updated=now,
                    next_update=now + self.ttl,
                )
            user.industry = profile.industry
            user.experience = profile.experience
            user.bio = profile.bio
            user.skills = profile.skills
            await self.users.flush()

        await self.users.refresh(user)
        logger.info(f"Updated profile for user {user.id} (industry={profile.industry})")
        return ProfileUpdateResult(user=user, industry_insight=insight)

    async def get_onboarding_status(self, identity: Optional[Identity]) -> bool:
        """Whether the caller has chosen an industry; False without an identity."""
        if identity is None:
            return False
        user = await self.users.find_by_subject(identity.subject)
        return user is not None and user.is_onboarded
