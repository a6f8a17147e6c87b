"""
Application configuration settings for the AI Career Coach backend.

This module handles all configuration management including environment variables,
database settings, Gemini API access, refresh scheduling and logging, using
Pydantic Settings.

Features:
- Environment-based configuration
- Database connection settings
- Text-generation service settings and retry budget
- Industry insight refresh interval and weekly schedule
- Rate limiting, security and logging settings
"""

import secrets
from datetime import timedelta
from functools import lru_cache
from typing import Any, Dict, List, Optional

from apscheduler.triggers.cron import CronTrigger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with validation and type checking."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_assignment=True,
        populate_by_name=True,
        extra="ignore",
    )

    # Application settings
    app_name: str = Field(default="AI Career Coach")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)
    env: str = Field(default="development", validation_alias="ENVIRONMENT")
    api_v1_str: str = Field(default="/api/v1")

    # Security settings
    secret_key: str = Field(default_factory=lambda: secrets.token_urlsafe(32))
    algorithm: str = Field(default="HS256")

    # CORS settings
    allowed_hosts: List[str] = Field(default=["*"])
    cors_origins: List[str] = Field(default=["*"])
    cors_credentials: bool = Field(default=True)
    cors_methods: List[str] = Field(default=["*"])
    cors_headers: List[str] = Field(default=["*"])

    # Database settings
    database_url: str = Field(default="sqlite+aiosqlite:///./careercoach.db")
    database_pool_size: int = Field(default=10)
    database_max_overflow: int = Field(default=20)
    database_pool_timeout: int = Field(default=30)
    database_pool_recycle: int = Field(default=3600)
    database_echo: bool = Field(default=False)

    # Gemini text-generation service
    gemini_api_key: Optional[str] = Field(default=None)
    gemini_model: str = Field(default="gemini-2.5-flash-lite")
    gemini_base_url: str = Field(default="https://generativelanguage.googleapis.com/v1beta")

    # LLM call settings
    llm_timeout: int = Field(default=60)
    llm_max_retries: int = Field(default=3)
    llm_retry_delay: float = Field(default=30.0)  # seconds, applied on HTTP 429

    # Industry insight refresh
    insight_refresh_interval_days: int = Field(default=7)
    insight_refresh_cron: str = Field(default="0 0 * * sun")  # Sunday midnight
    scheduler_enabled: bool = Field(default=True)
    scheduler_timezone: str = Field(default="UTC")

    # Interview practice
    quiz_question_count: int = Field(default=10)

    # Rate limiting settings
    rate_limit_enabled: bool = Field(default=True)
    rate_limit_default: str = Field(default="60/minute")

    # Logging settings
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    log_file: Optional[str] = Field(default=None)
    log_max_bytes: int = Field(default=10485760)  # 10MB
    log_backup_count: int = Field(default=5)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of: {', '.join(valid_levels)}")
        return v.upper()

    @field_validator("insight_refresh_cron")
    @classmethod
    def validate_refresh_cron(cls, v: str) -> str:
        """Reject cron expressions the scheduler cannot parse."""
        CronTrigger.from_crontab(v)
        return v

    @field_validator("insight_refresh_interval_days", "llm_max_retries", "quiz_question_count")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 0:
            raise ValueError("value must not be negative")
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.env.lower() == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.env.lower() == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.env.lower() == "testing"

    @property
    def insight_ttl(self) -> timedelta:
        """Time after which a stored industry insight is considered stale."""
        return timedelta(days=self.insight_refresh_interval_days)

    @property
    def database_config(self) -> Dict[str, Any]:
        """Get database configuration dictionary."""
        return {
            "url": self.database_url,
            "pool_size": self.database_pool_size,
            "max_overflow": self.database_max_overflow,
            "pool_timeout": self.database_pool_timeout,
            "pool_recycle": self.database_pool_recycle,
            "echo": self.database_echo or self.debug,
        }

    @property
    def gemini_config(self) -> Dict[str, Any]:
        """Get Gemini client configuration dictionary."""
        return {
            "api_key": self.gemini_api_key,
            "model": self.gemini_model,
            "base_url": self.gemini_base_url,
            "timeout": float(self.llm_timeout),
        }


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings instance with all configuration loaded
    """
    return Settings()
