"""
Weekly industry insight refresh.

``InsightRefreshJob`` regenerates every stored industry insight, one
industry at a time. Industries whose generation fails are logged and skipped
with their row untouched; the rest are updated each in its own transaction.

``create_scheduler`` registers the job on an APScheduler cron trigger, and
``run_insight_refresh`` is the entry point shared by the scheduler and the
``refresh_insights`` script.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Awaitable, Callable, List

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from careercoach.core.config import Settings
from careercoach.core.database import DatabaseManager
from careercoach.repositories import IndustryInsightRepository
from careercoach.services.insight_service import IndustryInsightGenerator
from careercoach.services.llm.structured_generator import FailurePolicy, ResilientStructuredGenerator
from careercoach.utils import utcnow

logger = logging.getLogger(__name__)

INSIGHT_REFRESH_JOB_ID = "insight-refresh"


@dataclass
class RefreshReport:
    """Outcome of one batch run."""
    updated: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)


class InsightRefreshJob:
    """Regenerates all stored industry insights sequentially."""

    failure_policy = FailurePolicy.SKIP_AND_CONTINUE

    def __init__(
        self,
        repository: IndustryInsightRepository,
        generator: IndustryInsightGenerator,
        ttl: timedelta = timedelta(days=7),
        clock: Callable[[], datetime] = utcnow,
    ):
        self.repository = repository
        self.generator = generator
        self.ttl = ttl
        self.clock = clock

    async def run(self) -> RefreshReport:
        """
        Refresh every industry.

        Raises:
            PersistenceFailedError: A listing or an update was rejected
        """
        report = RefreshReport()
        industries = await self.repository.list_keys()
        await self.repository.release()
        logger.info(f"Refreshing insights for {len(industries)} industries")

        for industry in industries:
            payload = await self.generator.generate_or_skip(industry)
            if payload is None:
                logger.warning(f"Insight refresh skipped for {industry}")
                report.skipped.append(industry)
                continue

            now = self.clock()
            async with self.repository.transaction():
                await self.repository.update(
                    industry,
                    payload,
                    last_updated=now,
                    next_update=now + self.ttl,
                )
            logger.info(f"Updated insights for {industry}")
            report.updated.append(industry)

        logger.info(
            f"Insight refresh finished: {len(report.updated)} updated, {len(report.skipped)} skipped"
        )
        return report


async def run_insight_refresh(
    db_manager: DatabaseManager,
    structured: ResilientStructuredGenerator,
    settings: Settings,
) -> RefreshReport:
    """Run the refresh job once with a dedicated session."""
    async with db_manager.sessionmaker() as session:
        job = InsightRefreshJob(
            repository=IndustryInsightRepository(session),
            generator=IndustryInsightGenerator(structured),
            ttl=settings.insight_ttl,
        )
        return await job.run()


def create_scheduler(
    settings: Settings,
    job_runner: Callable[[], Awaitable[RefreshReport]],
) -> AsyncIOScheduler:
    """Create a scheduler with the insight refresh registered on its cron trigger."""
    scheduler = AsyncIOScheduler(timezone=settings.scheduler_timezone)
    scheduler.add_job(
        job_runner,
        CronTrigger.from_crontab(settings.insight_refresh_cron, timezone=settings.scheduler_timezone),
        id=INSIGHT_REFRESH_JOB_ID,
        name="Industry Insights: Weekly Refresh",
        max_instances=1,
        coalesce=True,
        replace_existing=True,
    )
    logger.info(f"Registered job: Industry Insights Refresh (cron '{settings.insight_refresh_cron}')")
    return scheduler
