"""
Test configuration and shared fixtures for the AI Career Coach backend.

This module provides pytest fixtures for an in-memory database, a scripted
text-generation client, settings, identities and bearer tokens.
"""

import json
from datetime import datetime, timedelta, timezone
from typing import Any, AsyncGenerator, Callable, Dict, List, Optional, Union
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from careercoach.core.config import Settings
from careercoach.core.database import Base
from careercoach.core.security import Identity, create_access_token
from careercoach.models import User
from careercoach.services.llm import ResilientStructuredGenerator

# Test database URL - in-memory SQLite shared through a static pool
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


class FakeTextClient:
    """
    Scripted stand-in for GeminiService.

    Each call consumes the next scripted item: strings are returned, exceptions
    are raised. Prompts and response formats are recorded. When ``observer``
    is set, its return value is captured in ``observed`` on every call.
    """

    def __init__(self, responses: Optional[List[Union[str, Exception]]] = None):
        self.responses = list(responses or [])
        self.prompts: List[str] = []
        self.formats: List[Optional[str]] = []
        self.observer: Optional[Callable[[], Any]] = None
        self.observed: List[Any] = []

    def queue(self, *responses: Union[str, Exception]) -> None:
        self.responses.extend(responses)

    @property
    def call_count(self) -> int:
        return len(self.prompts)

    async def generate_text(self, prompt: str, response_format: Optional[str] = None) -> str:
        self.prompts.append(prompt)
        self.formats.append(response_format)
        if self.observer is not None:
            self.observed.append(self.observer())
        if not self.responses:
            raise AssertionError("FakeTextClient has no scripted response left")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FixedClock:
    """Controllable clock for freshness tests."""

    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


def insight_payload(**overrides) -> Dict[str, Any]:
    """A well-formed generated insight document."""
    payload = {
        "salary_ranges": [
            {"role": "Software Engineer", "min": 90000, "max": 160000, "median": 120000, "location": "US"}
        ],
        "growth_rate": 12.5,
        "demand_level": "HIGH",
        "top_skills": ["Python", "Cloud", "SQL"],
        "market_outlook": "POSITIVE",
        "key_trends": ["AI adoption", "Remote work"],
        "recommended_skills": ["Kubernetes", "MLOps"],
    }
    payload.update(overrides)
    return payload


def insight_json(**overrides) -> str:
    return json.dumps(insight_payload(**overrides))


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings with appropriate test configurations."""
    return Settings(
        database_url=TEST_DATABASE_URL,
        secret_key="test-secret-key",
        env="testing",
        debug=True,
        gemini_api_key="test-gemini-key",
        scheduler_enabled=False,
        rate_limit_enabled=False,
        llm_retry_delay=0.0,
        log_level="WARNING",
    )


@pytest.fixture
async def async_engine():
    """Create async in-memory test database engine with all tables."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(async_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for testing."""
    session_maker = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session


@pytest.fixture
def text_client() -> FakeTextClient:
    return FakeTextClient()


@pytest.fixture
def fake_sleep() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def structured(text_client, fake_sleep) -> ResilientStructuredGenerator:
    """Structured generator over the scripted client, without real waiting."""
    return ResilientStructuredGenerator(text_client, max_retries=3, retry_delay=30.0, sleep=fake_sleep)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def identity() -> Identity:
    return Identity(subject="user_123", email="jane@example.com", name="Jane Doe")


@pytest.fixture
def other_identity() -> Identity:
    return Identity(subject="user_456", email="sam@example.com", name="Sam Roe")


@pytest.fixture
async def test_user(db_session, identity) -> User:
    """A stored user without an industry."""
    user = User(auth_subject=identity.subject, email=identity.email, name=identity.name)
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
def auth_headers(test_settings, identity) -> Dict[str, str]:
    """Create authentication headers for API requests."""
    token = create_access_token(
        {"sub": identity.subject, "email": identity.email, "name": identity.name},
        test_settings,
    )
    return {"Authorization": f"Bearer {token}"}
