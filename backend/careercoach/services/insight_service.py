"""
Industry insight service.

Provides the freshness-gated access path to industry insights:

- ``IndustryInsightGenerator`` turns an industry name into a normalized
  insight payload through the resilient structured generator.
- ``InsightFetcher`` returns the stored insight for a key, regenerating and
  upserting it first when it is missing or past ``next_update``.
- ``DashboardService`` resolves the caller's industry and hands it to the
  fetcher.

Concurrent callers that see the same stale record may both regenerate it;
the store's upsert keeps a single row and the last writer wins.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, AsyncContextManager, Callable, Dict, Optional, Protocol

from careercoach.core.exceptions import NotFoundError
from careercoach.core.security import Identity, require_identity
from careercoach.models import DemandLevel, IndustryInsight, MarketOutlook
from careercoach.repositories import UserRepository
from careercoach.services.llm.structured_generator import FailurePolicy, ResilientStructuredGenerator
from careercoach.templates.prompts import industry_insight_prompt
from careercoach.utils import utcnow
from careercoach.utils.validation import DocumentSchema, EnumField

logger = logging.getLogger(__name__)

INDUSTRY_INSIGHT_SCHEMA = DocumentSchema(
    enum_fields={
        "demand_level": EnumField(
            allowed=frozenset(level.value for level in DemandLevel),
            default=DemandLevel.MEDIUM.value,
        ),
        "market_outlook": EnumField(
            allowed=frozenset(outlook.value for outlook in MarketOutlook),
            default=MarketOutlook.NEUTRAL.value,
        ),
    },
    list_fields=("salary_ranges", "top_skills", "key_trends", "recommended_skills"),
    number_fields={"growth_rate": 0.0},
)


class InsightStore(Protocol):
    async def find_by_key(self, key: str) -> Optional[IndustryInsight]:
        ...

    def transaction(self) -> AsyncContextManager[Any]:
        ...

    async def release(self) -> None:
        ...

    async def upsert(
        self,
        key: str,
        payload: Dict[str, Any],
        *,
        last_updated: datetime,
        next_update: datetime,
    ) -> IndustryInsight:
        ...


class InsightGenerator(Protocol):
    async def generate(self, key: str) -> Dict[str, Any]:
        ...


class IndustryInsightGenerator:
    """Generates normalized industry insight payloads."""

    def __init__(self, structured: ResilientStructuredGenerator):
        self.structured = structured

    async def generate(self, industry: str) -> Dict[str, Any]:
        """
        Generate the insight payload for an industry.

        Raises:
            GenerationFailedError: If no usable document could be produced
        """
        logger.info(f"Generating industry insights for {industry}")
        return await self.structured.generate(industry_insight_prompt(industry), INDUSTRY_INSIGHT_SCHEMA)

    async def generate_or_skip(self, industry: str) -> Optional[Dict[str, Any]]:
        """Batch variant: None instead of an error."""
        return await self.structured.generate_or_skip(
            industry_insight_prompt(industry), INDUSTRY_INSIGHT_SCHEMA, subject=industry
        )


class InsightFetcher:
    """Read-through access to insights with a time-to-live."""

    failure_policy = FailurePolicy.PROPAGATE

    def __init__(
        self,
        store: InsightStore,
        generator: InsightGenerator,
        ttl: timedelta = timedelta(days=7),
        clock: Callable[[], datetime] = utcnow,
    ):
        self.store = store
        self.generator = generator
        self.ttl = ttl
        self.clock = clock

    async def get(self, key: str) -> IndustryInsight:
        """
        Return the insight for ``key``, regenerating it if missing or stale.

        A fresh record is returned without any write. Otherwise the payload is
        generated with no transaction open and stored with one upsert.

        Raises:
            GenerationFailedError: Regeneration failed; nothing is written
            PersistenceFailedError: The upsert was rejected
        """
        record = await self.store.find_by_key(key)
        now = self.clock()
        if record is not None and not record.is_stale(now):
            return record

        reason = "missing" if record is None else "stale"
        logger.info(f"Insight for {key} is {reason}; regenerating")
        await self.store.release()
        payload = await self.generator.generate(key)

        async with self.store.transaction():
            record = await self.store.upsert(
                key,
                payload,
                last_updated=now,
                next_update=now + self.ttl,
            )
        return record


class DashboardService:
    """Industry insights for the caller's dashboard."""

    def __init__(self, users: UserRepository, fetcher: InsightFetcher):
        self.users = users
        self.fetcher = fetcher

    async def get_industry_insights(self, identity: Optional[Identity]) -> IndustryInsight:
        """
        Raises:
            UnauthorizedError: No caller identity
            NotFoundError: Unknown user or no industry chosen yet
        """
        identity = require_identity(identity)
        user = await self.users.find_by_subject(identity.subject)
        if user is None:
            raise NotFoundError("User not found")
        if not user.industry:
            raise NotFoundError("User has not selected an industry")
        return await self.fetcher.get(user.industry)
