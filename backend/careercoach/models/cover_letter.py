"""
Cover letter model for generated application letters.
"""

import enum

from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, Enum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from careercoach.core.database import Base


class CoverLetterStatus(enum.Enum):
    """Cover letter status enumeration."""
    DRAFT = "draft"
    COMPLETED = "completed"


class CoverLetter(Base):
    """
    Cover letter generated for a specific job posting.
    """
    __tablename__ = "cover_letters"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    content = Column(Text, nullable=False)  # Markdown
    job_description = Column(Text, nullable=True)
    company_name = Column(String(255), nullable=False)
    job_title = Column(String(255), nullable=False)
    status = Column(Enum(CoverLetterStatus), default=CoverLetterStatus.DRAFT, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="cover_letters")

    def __repr__(self):
        return f"<CoverLetter(id={self.id}, job_title='{self.job_title}', company='{self.company_name}')>"
