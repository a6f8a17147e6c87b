"""
Prompt Templates Package

Builders for the instructions sent to the text-generation service.
"""

from .prompts import (
    # Data structures
    CandidateProfile,
    JobPosting,

    # Prompt builders
    industry_insight_prompt,
    cover_letter_prompt,
    quiz_prompt,
    improvement_tip_prompt,
)

__all__ = [
    "CandidateProfile",
    "JobPosting",
    "industry_insight_prompt",
    "cover_letter_prompt",
    "quiz_prompt",
    "improvement_tip_prompt",
]
