"""
Unit tests for application settings.
"""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from careercoach.core.config import Settings


class TestSettings:

    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.gemini_model == "gemini-2.5-flash-lite"
        assert settings.llm_max_retries == 3
        assert settings.llm_retry_delay == 30.0
        assert settings.insight_ttl == timedelta(days=7)
        assert settings.quiz_question_count == 10

    def test_environment_alias(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        settings = Settings(_env_file=None)

        assert settings.is_production

    def test_log_level_normalized(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="LOUD")

    def test_negative_interval_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, insight_refresh_interval_days=-1)

    def test_gemini_config(self):
        settings = Settings(_env_file=None, gemini_api_key="k", llm_timeout=5)

        assert settings.gemini_config == {
            "api_key": "k",
            "model": "gemini-2.5-flash-lite",
            "base_url": "https://generativelanguage.googleapis.com/v1beta",
            "timeout": 5.0,
        }
