"""
SQLAlchemy models package for the AI Career Coach backend.

Models included:
- User: identity subject and professional profile
- IndustryInsight: periodically refreshed industry analysis (one per industry)
- CoverLetter: generated cover letters
- Assessment: interview practice quiz results

All models share ``careercoach.core.database.Base``; importing this package
registers them on its metadata.
"""

from careercoach.core.database import Base

from .industry_insight import IndustryInsight, DemandLevel, MarketOutlook
from .user import User
from .cover_letter import CoverLetter, CoverLetterStatus
from .assessment import Assessment

ALL_MODELS = [User, IndustryInsight, CoverLetter, Assessment]

ALL_ENUMS = [DemandLevel, MarketOutlook, CoverLetterStatus]

__all__ = [
    "Base",
    "User",
    "IndustryInsight",
    "DemandLevel",
    "MarketOutlook",
    "CoverLetter",
    "CoverLetterStatus",
    "Assessment",
    "ALL_MODELS",
    "ALL_ENUMS",
]
