"""
API Package for the AI Career Coach backend

API Structure:
- deps.py: service assembly from app state and the request session
- v1/: Version 1 API endpoints
  - dashboard.py: industry insights
  - users.py: profile and onboarding
  - cover_letters.py: cover letter generation and management
  - interview.py: practice quizzes and assessments

Errors are rendered by the application's exception handlers as
``{"error": {"type", "message", "path"}}``.
"""

from fastapi import APIRouter

from careercoach.api.v1 import api_router as v1_router

# Main API router that includes all versions
api_router = APIRouter()

# Include versioned routers
api_router.include_router(v1_router, prefix="/v1")

# API metadata
API_VERSION = "1.0.0"
API_TITLE = "AI Career Coach API"
API_DESCRIPTION = """
## AI Career Coach API

- **Industry insights**: salary ranges, demand, skills and trends per industry, refreshed weekly
- **Onboarding**: professional profile and industry selection
- **Cover letters**: generated from the profile and a job posting
- **Interview practice**: generated quizzes, scored assessments and improvement tips

Authentication: `Authorization: Bearer <JWT>` issued by the identity provider.
"""

# Error response schemas
ERROR_RESPONSES = {
    400: {"description": "Bad Request - Invalid input parameters"},
    401: {"description": "Unauthorized - Authentication required"},
    404: {"description": "Not Found - Resource does not exist"},
    422: {"description": "Validation Error - Invalid request data"},
    429: {"description": "Too Many Requests - Rate limit exceeded"},
    500: {"description": "Internal Server Error - Persistence failure"},
    502: {"description": "Bad Gateway - Text-generation service error"},
    503: {"description": "Service Unavailable - Generation failed"}
}

# Export main router and metadata
__all__ = [
    "api_router",
    "API_VERSION",
    "API_TITLE",
    "API_DESCRIPTION",
    "ERROR_RESPONSES"
]
