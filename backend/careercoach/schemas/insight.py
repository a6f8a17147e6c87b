"""
Industry insight Pydantic schemas.

Generated list fields are passed through as stored; only their presence is
guaranteed by normalization, not the shape of each entry.
"""

from datetime import datetime
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from careercoach.models import DemandLevel, MarketOutlook


class IndustryInsightResponse(BaseModel):
    """Schema for industry insight responses."""

    model_config = ConfigDict(from_attributes=True)

    industry: str
    salary_ranges: List[Any] = Field(default_factory=list, description="[{role, min, max, median, location}]")
    growth_rate: float = 0.0
    demand_level: DemandLevel
    top_skills: List[Any] = Field(default_factory=list)
    market_outlook: MarketOutlook
    key_trends: List[Any] = Field(default_factory=list)
    recommended_skills: List[Any] = Field(default_factory=list)
    last_updated: datetime
    next_update: datetime

    @field_validator('salary_ranges', 'top_skills', 'key_trends', 'recommended_skills', mode='before')
    @classmethod
    def default_lists(cls, v):
        return v or []
