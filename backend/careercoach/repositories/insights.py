"""
IndustryInsightRepository

Store for the per-industry insight records.

Methods:
- find_by_key(industry) -> Optional[IndustryInsight]
- list_keys() -> List[str]: every stored industry
- upsert(industry, payload, last_updated, next_update) -> IndustryInsight
- update(industry, payload, last_updated, next_update) -> Optional[IndustryInsight]

upsert is a single INSERT .. ON CONFLICT DO UPDATE on SQLite and PostgreSQL,
so concurrent refreshes of the same industry converge to one row (last
writer wins).
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import select

from careercoach.models import IndustryInsight
from careercoach.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class IndustryInsightRepository(BaseRepository):
    """SQLAlchemy-backed store of industry insights keyed by industry name."""

    async def find_by_key(self, industry: str) -> Optional[IndustryInsight]:
        result = await self.execute(
            select(IndustryInsight)
            .where(IndustryInsight.industry == industry)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_keys(self) -> List[str]:
        result = await self.execute(select(IndustryInsight.industry).order_by(IndustryInsight.id))
        return list(result.scalars().all())

    async def upsert(
        self,
        industry: str,
        payload: Dict[str, Any],
        *,
        last_updated: datetime,
        next_update: datetime,
    ) -> IndustryInsight:
        """Create or overwrite the insight for an industry."""
        values = {
            "industry": industry,
            **IndustryInsight.column_values(payload),
            "last_updated": last_updated,
            "next_update": next_update,
        }

        insert = self._dialect_insert()
        if insert is None:
            insight = await self.find_by_key(industry)
            if insight is None:
                insight = IndustryInsight(industry=industry)
                self.session.add(insight)
            for name, value in values.items():
                setattr(insight, name, value)
            await self.flush()
            return insight

        statement = insert(IndustryInsight).values(**values)
        statement = statement.on_conflict_do_update(
            index_elements=[IndustryInsight.industry],
            set_={name: statement.excluded[name] for name in values if name != "industry"},
        )
        await self.execute(statement)
        logger.debug(f"Upserted industry insight for {industry}")
        return await self.find_by_key(industry)

    async def update(
        self,
        industry: str,
        payload: Dict[str, Any],
        *,
        last_updated: datetime,
        next_update: datetime,
    ) -> Optional[IndustryInsight]:
        """Overwrite an existing insight; returns None if the industry is unknown."""
        insight = await self.find_by_key(industry)
        if insight is None:
            return None
        insight.apply_payload(payload)
        insight.last_updated = last_updated
        insight.next_update = next_update
        await self.flush()
        return insight

    def _dialect_insert(self):
        bind = self.session.bind
        dialect = bind.dialect.name if bind is not None else None
        if dialect == "postgresql":
            from sqlalchemy.dialects.postgresql import insert
            return insert
        if dialect == "sqlite":
            from sqlalchemy.dialects.sqlite import insert
            return insert
        return None
