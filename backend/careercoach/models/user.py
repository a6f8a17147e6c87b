"""
User model for the career coach backend.
Holds the identity-provider subject and the professional profile.
"""

from sqlalchemy import Column, Integer, String, DateTime, Text, JSON, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from careercoach.core.database import Base


class User(Base):
    """
    User model keyed by the external identity subject.
    """
    __tablename__ = "users"

    # Primary identifiers
    id = Column(Integer, primary_key=True, index=True)
    auth_subject = Column(String(255), unique=True, index=True, nullable=False)
    email = Column(String(255), nullable=True)

    # Profile information
    name = Column(String(200), nullable=True)
    image_url = Column(String(500), nullable=True)

    # Professional information
    industry = Column(String(200), ForeignKey("industry_insights.industry"), nullable=True, index=True)
    experience = Column(Integer, nullable=True)  # Years of experience
    bio = Column(Text, nullable=True)
    skills = Column(JSON, nullable=True)  # Store as JSON array

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    industry_insight = relationship("IndustryInsight", back_populates="users")
    cover_letters = relationship("CoverLetter", back_populates="user", cascade="all, delete-orphan")
    assessments = relationship("Assessment", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User(id={self.id}, auth_subject='{self.auth_subject}', industry='{self.industry}')>"

    @property
    def is_onboarded(self) -> bool:
        """A user is onboarded once an industry is chosen."""
        return bool(self.industry)

    def to_profile(self) -> dict:
        """Profile fields used to personalize prompts."""
        return {
            "industry": self.industry,
            "experience": self.experience,
            "skills": self.skills or [],
            "bio": self.bio,
        }
