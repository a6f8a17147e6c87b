#!/usr/bin/env python3
"""
Industry insight refresh utility for the AI Career Coach backend.
Runs the weekly insight regeneration once, outside the scheduler.
"""

import sys
import asyncio
import logging
from pathlib import Path

import click

# Add the backend directory to the Python path
sys.path.append(str(Path(__file__).parent.parent / "backend"))

from careercoach.core.config import get_settings
from careercoach.core.database import DatabaseManager
from careercoach.core.logging import setup_logging
from careercoach.services import RefreshReport, run_insight_refresh
from careercoach.services.llm import GeminiService, ResilientStructuredGenerator

# Setup logging
logger = logging.getLogger(__name__)


async def refresh_once(retry_delay: float = None) -> RefreshReport:
    """Regenerate every stored industry insight one time."""
    settings = get_settings()

    db_manager = DatabaseManager(settings)
    await db_manager.initialize()
    gemini = GeminiService(**settings.gemini_config)
    structured = ResilientStructuredGenerator(
        gemini,
        max_retries=settings.llm_max_retries,
        retry_delay=settings.llm_retry_delay if retry_delay is None else retry_delay,
    )

    try:
        await db_manager.create_all_tables()
        return await run_insight_refresh(db_manager, structured, settings)
    finally:
        await gemini.aclose()
        await db_manager.close()


@click.command()
@click.option('--retry-delay',
              type=float,
              default=None,
              help='Seconds to wait after a rate-limited call (default: LLM_RETRY_DELAY)')
@click.option('--quiet', '-q',
              is_flag=True,
              help='Only print the summary line')
def main(retry_delay, quiet):
    """Refresh all industry insights now."""
    setup_logging()
    if quiet:
        logging.getLogger().setLevel(logging.WARNING)

    report = asyncio.run(refresh_once(retry_delay))

    if not quiet:
        for industry in report.updated:
            click.echo(f"✅ {industry}")
        for industry in report.skipped:
            click.echo(f"⚠️  {industry} (skipped)")
    click.echo(f"Updated {len(report.updated)}, skipped {len(report.skipped)}")

    if report.skipped:
        sys.exit(1)


if __name__ == '__main__':
    main()
