"""
UserRepository

Lookup and creation of users by identity-provider subject.
"""

from typing import Optional

from sqlalchemy import select

from careercoach.core.security import Identity
from careercoach.models import User
from careercoach.repositories.base import BaseRepository


class UserRepository(BaseRepository):

    async def find_by_subject(self, subject: str) -> Optional[User]:
        result = await self.execute(select(User).where(User.auth_subject == subject))
        return result.scalar_one_or_none()

    async def create_from_identity(self, identity: Identity) -> User:
        user = User(
            auth_subject=identity.subject,
            email=identity.email,
            name=identity.name,
            image_url=identity.image_url,
        )
        self.session.add(user)
        await self.flush()
        await self.refresh(user)
        return user
