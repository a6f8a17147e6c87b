"""
API v1 router configuration for the AI Career Coach backend.

This module sets up all the API endpoints and their routing configuration.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Request

from careercoach.api.v1 import cover_letters, dashboard, interview, users

# Create the main API v1 router
api_router = APIRouter()

# Include all endpoint routers with their respective prefixes and tags
api_router.include_router(
    dashboard.router,
    prefix="/dashboard",
    tags=["dashboard"],
    responses={
        401: {"description": "Unauthorized"},
        404: {"description": "User not found or not onboarded"},
        503: {"description": "Insight generation failed"}
    }
)

api_router.include_router(
    users.router,
    prefix="/users",
    tags=["users"],
    responses={
        401: {"description": "Unauthorized"},
        422: {"description": "Validation Error"},
        503: {"description": "Insight generation failed"}
    }
)

api_router.include_router(
    cover_letters.router,
    prefix="/cover-letters",
    tags=["cover-letters"],
    responses={
        401: {"description": "Unauthorized"},
        404: {"description": "Cover letter not found"},
        422: {"description": "Validation Error"},
        503: {"description": "Cover letter generation failed"}
    }
)

api_router.include_router(
    interview.router,
    prefix="/interview",
    tags=["interview"],
    responses={
        401: {"description": "Unauthorized"},
        404: {"description": "User not found"},
        422: {"description": "Validation Error"}
    }
)


async def build_health_report(request: Request) -> Dict[str, Any]:
    """Health of the database, the text-generation configuration and the scheduler."""
    state = request.app.state
    settings = state.settings

    database = await state.db_manager.check_health()
    scheduler = getattr(state, "scheduler", None)

    return {
        "status": "healthy" if database["status"] == "healthy" else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.app_version,
        "environment": settings.env,
        "services": {
            "database": database["status"],
            "llm": "configured" if settings.gemini_api_key else "not_configured",
            "scheduler": "running" if scheduler is not None and scheduler.running else "stopped",
        },
    }


@api_router.get("/health", tags=["health"])
async def health_check(request: Request):
    """
    Health check endpoint for monitoring service status.
    """
    return await build_health_report(request)


# Export the main router
__all__ = ["api_router", "build_health_report"]
