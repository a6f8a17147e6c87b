"""
Assessment model storing completed interview practice quizzes.
"""

from sqlalchemy import Column, Integer, String, DateTime, Text, JSON, Float, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from careercoach.core.database import Base


class Assessment(Base):
    """
    Result of one practice quiz.

    ``questions`` holds one entry per question:
    ``{question, answer, user_answer, is_correct, explanation}``.
    """
    __tablename__ = "assessments"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    quiz_score = Column(Float, nullable=False)
    questions = Column(JSON, nullable=False, default=list)
    category = Column(String(100), nullable=False, default="Technical")
    improvement_tip = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    user = relationship("User", back_populates="assessments")

    def __repr__(self):
        return f"<Assessment(id={self.id}, user_id={self.user_id}, score={self.quiz_score})>"

    @property
    def wrong_answers(self) -> list:
        return [q for q in (self.questions or []) if not q.get("is_correct")]
