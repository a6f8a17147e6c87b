"""
User Pydantic schemas for request/response validation and serialization.

Handles the professional profile set during onboarding and the onboarding
status check.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from careercoach.schemas.insight import IndustryInsightResponse
from careercoach.utils.validation import normalize_skills


class ProfileUpdate(BaseModel):
    """Schema for onboarding / profile updates."""

    industry: str = Field(..., min_length=1, max_length=200, description="Industry, e.g. 'tech-software-development'")
    experience: Optional[int] = Field(None, ge=0, le=70, description="Years of experience")
    bio: Optional[str] = Field(None, max_length=2000, description="Professional background")
    skills: List[str] = Field(default_factory=list, description="List of user skills")

    @field_validator('industry')
    @classmethod
    def validate_industry(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Industry must not be blank')
        return v

    @field_validator('skills', mode='before')
    @classmethod
    def validate_skills(cls, v):
        skills = normalize_skills(v)
        if len(skills) > 100:
            raise ValueError('Too many skills listed (maximum 100)')
        return skills


class UserResponse(BaseModel):
    """Schema for user profile responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: Optional[str] = None
    name: Optional[str] = None
    image_url: Optional[str] = None
    industry: Optional[str] = None
    experience: Optional[int] = None
    bio: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator('skills', mode='before')
    @classmethod
    def default_skills(cls, v):
        return v or []


class ProfileUpdateResponse(BaseModel):
    """Updated user together with the insight for the chosen industry."""

    user: UserResponse
    industry_insight: IndustryInsightResponse


class OnboardingStatus(BaseModel):
    is_onboarded: bool
