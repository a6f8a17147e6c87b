"""
Repositories package: SQLAlchemy-backed stores used by the services.
"""

from .base import BaseRepository
from .insights import IndustryInsightRepository
from .users import UserRepository
from .documents import CoverLetterRepository, AssessmentRepository

__all__ = [
    "BaseRepository",
    "IndustryInsightRepository",
    "UserRepository",
    "CoverLetterRepository",
    "AssessmentRepository",
]
