"""
AI Career Coach - Main Application Package

This package contains the FastAPI backend for the AI career coach. It keeps
per-industry market insights fresh, generates cover letters, and runs
interview practice quizzes, all backed by the Gemini API.

Key Features:
- Industry insights regenerated on demand once stale and refreshed weekly
- Retry on rate limiting with skip or placeholder fallbacks for batch and quiz work
- Cover letter generation and management
- Practice quizzes with scored assessments and improvement tips

Architecture:
- FastAPI with async/await support
- SQLAlchemy 2.0 async ORM (SQLite via aiosqlite, PostgreSQL via asyncpg)
- Pydantic for data validation and settings
- httpx for the Gemini REST API
- APScheduler for the weekly refresh

Package Structure:
- api/: REST API endpoints and route handlers
- core/: Core infrastructure (config, security, database, logging, exceptions)
- models/: SQLAlchemy database models and relationships
- repositories/: Database access used by the services
- schemas/: Pydantic schemas for request/response validation
- services/: Business logic and the Gemini integration
- templates/: Prompt builders
- utils/: Text cleanup and document normalization

Usage:
    from careercoach.main import create_app
    from careercoach.core import get_settings
"""

# Package metadata
__version__ = "1.0.0"
__title__ = "AI Career Coach"
__description__ = "AI career coach backend"
