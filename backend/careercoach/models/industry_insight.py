"""
Industry insight model.

One row per industry holding the latest AI-generated market analysis, with the
timestamps that decide when it must be regenerated.
"""

import enum
from datetime import datetime
from typing import Any, Dict

from sqlalchemy import Column, Integer, String, DateTime, Float, JSON, Enum
from sqlalchemy.orm import relationship

from careercoach.core.database import Base
from careercoach.utils import as_utc


class DemandLevel(enum.Enum):
    """Hiring demand for an industry."""
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class MarketOutlook(enum.Enum):
    """Overall market outlook for an industry."""
    POSITIVE = "POSITIVE"
    NEUTRAL = "NEUTRAL"
    NEGATIVE = "NEGATIVE"


class IndustryInsight(Base):
    """
    Latest derived analysis for one industry.

    ``next_update`` is always ``last_updated`` plus the refresh interval; the
    record is stale once the current time reaches ``next_update``.
    """
    __tablename__ = "industry_insights"

    PAYLOAD_FIELDS = (
        "salary_ranges",
        "growth_rate",
        "demand_level",
        "top_skills",
        "market_outlook",
        "key_trends",
        "recommended_skills",
    )

    id = Column(Integer, primary_key=True, index=True)
    industry = Column(String(200), unique=True, index=True, nullable=False)

    # Generated payload
    salary_ranges = Column(JSON, nullable=False, default=list)  # [{role, min, max, median, location}]
    growth_rate = Column(Float, nullable=False, default=0.0)
    demand_level = Column(Enum(DemandLevel), nullable=False, default=DemandLevel.MEDIUM)
    top_skills = Column(JSON, nullable=False, default=list)
    market_outlook = Column(Enum(MarketOutlook), nullable=False, default=MarketOutlook.NEUTRAL)
    key_trends = Column(JSON, nullable=False, default=list)
    recommended_skills = Column(JSON, nullable=False, default=list)

    # Freshness
    last_updated = Column(DateTime(timezone=True), nullable=False)
    next_update = Column(DateTime(timezone=True), nullable=False, index=True)

    users = relationship("User", back_populates="industry_insight")

    def __repr__(self):
        return f"<IndustryInsight(id={self.id}, industry='{self.industry}', next_update={self.next_update})>"

    @staticmethod
    def column_values(payload: Dict[str, Any]) -> Dict[str, Any]:
        """Map a normalized payload onto column values."""
        return {
            "salary_ranges": payload.get("salary_ranges", []),
            "growth_rate": payload.get("growth_rate", 0.0),
            "demand_level": DemandLevel(payload.get("demand_level", DemandLevel.MEDIUM.value)),
            "top_skills": payload.get("top_skills", []),
            "market_outlook": MarketOutlook(payload.get("market_outlook", MarketOutlook.NEUTRAL.value)),
            "key_trends": payload.get("key_trends", []),
            "recommended_skills": payload.get("recommended_skills", []),
        }

    def apply_payload(self, payload: Dict[str, Any]) -> None:
        """Overwrite the generated fields from a normalized payload."""
        for name, value in self.column_values(payload).items():
            setattr(self, name, value)

    @property
    def payload(self) -> Dict[str, Any]:
        """Generated fields with enums rendered as their string values."""
        return {
            "salary_ranges": self.salary_ranges or [],
            "growth_rate": self.growth_rate,
            "demand_level": self.demand_level.value if self.demand_level else None,
            "top_skills": self.top_skills or [],
            "market_outlook": self.market_outlook.value if self.market_outlook else None,
            "key_trends": self.key_trends or [],
            "recommended_skills": self.recommended_skills or [],
        }

    def is_stale(self, now: datetime) -> bool:
        """Check whether the record must be regenerated at ``now``."""
        return as_utc(now) >= as_utc(self.next_update)
