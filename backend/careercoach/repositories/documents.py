"""
CoverLetterRepository and AssessmentRepository

Per-user storage of generated cover letters and quiz assessments. Every
query is scoped to the owning user id.
"""

from typing import List, Optional

from sqlalchemy import select

from careercoach.models import Assessment, CoverLetter
from careercoach.repositories.base import BaseRepository


class CoverLetterRepository(BaseRepository):

    async def add(self, cover_letter: CoverLetter) -> CoverLetter:
        self.session.add(cover_letter)
        await self.flush()
        await self.refresh(cover_letter)
        return cover_letter

    async def list_for_user(self, user_id: int) -> List[CoverLetter]:
        result = await self.execute(
            select(CoverLetter)
            .where(CoverLetter.user_id == user_id)
            .order_by(CoverLetter.created_at.desc(), CoverLetter.id.desc())
        )
        return list(result.scalars().all())

    async def get_for_user(self, cover_letter_id: int, user_id: int) -> Optional[CoverLetter]:
        result = await self.execute(
            select(CoverLetter).where(
                CoverLetter.id == cover_letter_id,
                CoverLetter.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()


class AssessmentRepository(BaseRepository):

    async def add(self, assessment: Assessment) -> Assessment:
        self.session.add(assessment)
        await self.flush()
        await self.refresh(assessment)
        return assessment

    async def list_for_user(self, user_id: int) -> List[Assessment]:
        result = await self.execute(
            select(Assessment)
            .where(Assessment.user_id == user_id)
            .order_by(Assessment.created_at.asc(), Assessment.id.asc())
        )
        return list(result.scalars().all())
