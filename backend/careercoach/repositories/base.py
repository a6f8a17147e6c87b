"""
BaseRepository

Common plumbing for the SQLAlchemy repositories:
- one AsyncSession per repository instance
- transaction(): begins its own unit, commits on success, rolls back on any error
- release(): ends the implicit read transaction before slow work such as
  text generation, so no connection is held while waiting
- SQLAlchemy errors surface as PersistenceFailedError
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from careercoach.core.exceptions import PersistenceFailedError

logger = logging.getLogger(__name__)


class BaseRepository:
    """Base class for repositories sharing one session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """
        Run a group of writes as one all-or-nothing unit.

        Raises:
            PersistenceFailedError: If the store rejects any write or the commit
        """
        try:
            if not self.session.in_transaction():
                await self.session.begin()
            yield self.session
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Database transaction error: {e}")
            raise PersistenceFailedError(f"Database transaction failed: {e}") from e
        except Exception:
            await self.session.rollback()
            raise

    async def release(self) -> None:
        """End the read transaction opened by earlier queries, if any."""
        if not self.session.in_transaction():
            return
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Database release error: {e}")
            raise PersistenceFailedError(f"Database read failed: {e}") from e

    async def execute(self, statement: Any) -> Any:
        """Execute a statement, mapping store errors to PersistenceFailedError."""
        try:
            return await self.session.execute(statement)
        except SQLAlchemyError as e:
            logger.error(f"Query execution error: {e}")
            raise PersistenceFailedError(f"Database query failed: {e}") from e

    async def flush(self) -> None:
        try:
            await self.session.flush()
        except SQLAlchemyError as e:
            logger.error(f"Database flush error: {e}")
            raise PersistenceFailedError(f"Database write failed: {e}") from e

    async def delete(self, instance: Any) -> None:
        try:
            await self.session.delete(instance)
        except SQLAlchemyError as e:
            logger.error(f"Database delete error: {e}")
            raise PersistenceFailedError(f"Database delete failed: {e}") from e

    async def refresh(self, instance: Any) -> None:
        """Reload server-generated columns such as timestamps."""
        try:
            await self.session.refresh(instance)
        except SQLAlchemyError as e:
            logger.error(f"Database refresh error: {e}")
            raise PersistenceFailedError(f"Database read failed: {e}") from e
