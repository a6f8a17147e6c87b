"""
Database connection and session management for the AI Career Coach backend.

This module handles database connectivity and session management using
SQLAlchemy with async support.

Features:
- Async SQLAlchemy engine and session management
- Connection pooling for PostgreSQL, pool-less SQLite
- Table creation on startup
- Database health monitoring
"""

import asyncio
import logging
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from careercoach.core.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


class DatabaseManager:
    """Database connection and session manager."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._engine: Optional[AsyncEngine] = None
        self._sessionmaker: Optional[async_sessionmaker] = None
        self._initialized = False

    @property
    def engine(self) -> AsyncEngine:
        """Get the database engine."""
        if self._engine is None:
            raise RuntimeError("Database not initialized. Call initialize() first.")
        return self._engine

    @property
    def sessionmaker(self) -> async_sessionmaker:
        """Get the session maker."""
        if self._sessionmaker is None:
            raise RuntimeError("Database not initialized. Call initialize() first.")
        return self._sessionmaker

    @property
    def is_sqlite(self) -> bool:
        return "sqlite" in self.settings.database_url

    async def initialize(self) -> None:
        """Initialize database connection and session factory."""
        if self._initialized:
            logger.warning("Database already initialized")
            return

        try:
            self._engine = create_async_engine(
                self._get_database_url(),
                **self._get_engine_config()
            )

            self._sessionmaker = async_sessionmaker(
                bind=self._engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=True,
            )

            self._setup_event_listeners()
            await self._test_connection()

            self._initialized = True
            logger.info("Database initialized successfully")

        except SQLAlchemyError as e:
            logger.error(f"Failed to initialize database: {e}")
            raise

    async def close(self) -> None:
        """Close database connections."""
        if self._engine:
            await self._engine.dispose()
            self._engine = None
            self._sessionmaker = None
            self._initialized = False
            logger.info("Database connections closed")

    def _get_database_url(self) -> str:
        """Get the database URL for async operations."""
        db_url = self.settings.database_url

        # Convert to async URL if needed
        if db_url.startswith("postgresql://"):
            db_url = db_url.replace("postgresql://", "postgresql+asyncpg://", 1)
        elif db_url.startswith("sqlite:"):
            db_url = db_url.replace("sqlite:", "sqlite+aiosqlite:", 1)

        return db_url

    def _get_engine_config(self) -> Dict[str, Any]:
        """Get engine configuration."""
        config: Dict[str, Any] = {
            "echo": self.settings.database_echo,
            "pool_pre_ping": True,
        }

        if self.is_sqlite:
            # SQLite doesn't support connection pooling
            config.update({
                "poolclass": NullPool,
                "connect_args": {"check_same_thread": False},
            })
        else:
            config.update({
                "pool_size": self.settings.database_pool_size,
                "max_overflow": self.settings.database_max_overflow,
                "pool_timeout": self.settings.database_pool_timeout,
                "pool_recycle": self.settings.database_pool_recycle,
            })

        return config

    def _setup_event_listeners(self) -> None:
        """Set up SQLAlchemy event listeners."""
        is_sqlite = self.is_sqlite

        @event.listens_for(self._engine.sync_engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            """Enforce foreign keys on SQLite connections."""
            if is_sqlite:
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

    async def _test_connection(self) -> None:
        """Test database connection."""
        async with self._engine.begin() as conn:
            result = await conn.execute(text("SELECT 1"))
            result.fetchall()
        logger.info("Database connection test successful")

    async def create_all_tables(self) -> None:
        """Create all database tables."""
        # Register models on Base.metadata
        import careercoach.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("All database tables created successfully")

    async def check_health(self) -> Dict[str, Any]:
        """Check database health."""
        loop = asyncio.get_running_loop()
        start_time = loop.time()

        try:
            async with self.sessionmaker() as session:
                await session.execute(text("SELECT 1"))

            return {
                "status": "healthy",
                "response_time": loop.time() - start_time,
            }

        except (SQLAlchemyError, RuntimeError) as e:
            return {
                "status": "unhealthy",
                "error": str(e),
                "response_time": loop.time() - start_time,
            }


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency to get a database session from the application's manager.

    Yields:
        AsyncSession: Database session
    """
    db_manager: DatabaseManager = request.app.state.db_manager
    async with db_manager.sessionmaker() as session:
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"Database session error: {e}")
            raise
