"""
Cover letter Pydantic schemas for request/response validation.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from careercoach.models import CoverLetterStatus


class CoverLetterRequest(BaseModel):
    """Schema for cover letter generation requests."""

    job_title: str = Field(..., min_length=1, max_length=255, description="Target position title")
    company_name: str = Field(..., min_length=1, max_length=255, description="Hiring company")
    job_description: Optional[str] = Field(None, max_length=20000, description="Job posting text")

    @field_validator('job_title', 'company_name')
    @classmethod
    def validate_not_blank(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Field must not be blank')
        return v


class CoverLetterResponse(BaseModel):
    """Schema for stored cover letters."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    content: str
    job_description: Optional[str] = None
    company_name: str
    job_title: str
    status: CoverLetterStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
