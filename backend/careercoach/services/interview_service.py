"""
Interview practice service.

Quiz generation and the improvement tip use the placeholder failure policy:
the caller always gets a usable result, never an empty one. Saving results
and listing assessments surface persistence errors.
"""

import copy
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as SchemaValidationError

from careercoach.core.exceptions import NotFoundError
from careercoach.core.security import Identity, require_identity
from careercoach.models import Assessment, User
from careercoach.repositories import AssessmentRepository, UserRepository
from careercoach.schemas.interview import QuestionResult, QuizQuestion
from careercoach.services.llm.structured_generator import FailurePolicy, ResilientStructuredGenerator
from careercoach.templates.prompts import CandidateProfile, improvement_tip_prompt, quiz_prompt
from careercoach.utils.validation import DocumentSchema

logger = logging.getLogger(__name__)

ASSESSMENT_CATEGORY = "Technical"

PLACEHOLDER_QUESTION: Dict[str, Any] = {
    "question": "Quiz questions could not be generated right now. Which option should you pick to try again later?",
    "options": ["A", "B", "C", "D"],
    "correct_answer": "A",
    "explanation": "Placeholder question shown while quiz generation is unavailable.",
}

PLACEHOLDER_TIP = "Keep practicing your technical skills to build confidence!"

QUIZ_SCHEMA = DocumentSchema(list_fields=("questions",))


def validate_questions(raw_questions: List[Any]) -> List[Dict[str, Any]]:
    """Keep only well-formed questions, in their canonical shape."""
    questions = []
    for index, raw in enumerate(raw_questions):
        if not isinstance(raw, dict):
            logger.warning(f"Dropping quiz question {index}: not an object")
            continue
        try:
            question = QuizQuestion.model_validate(raw)
        except SchemaValidationError as e:
            logger.warning(f"Dropping quiz question {index}: {e.error_count()} validation errors")
            continue
        questions.append(question.model_dump())
    return questions


def score_answers(questions: List[QuizQuestion], answers: List[Optional[str]]) -> List[QuestionResult]:
    """Per-question results; missing answers count as unanswered."""
    results = []
    for index, question in enumerate(questions):
        user_answer = answers[index] if index < len(answers) else None
        results.append(
            QuestionResult(
                question=question.question,
                answer=question.correct_answer,
                user_answer=user_answer,
                is_correct=user_answer is not None and user_answer == question.correct_answer,
                explanation=question.explanation,
            )
        )
    return results


class InterviewService:
    """Service for practice quizzes and assessments."""

    failure_policy = FailurePolicy.PLACEHOLDER

    def __init__(
        self,
        users: UserRepository,
        assessments: AssessmentRepository,
        structured: ResilientStructuredGenerator,
        question_count: int = 10,
    ):
        self.users = users
        self.assessments = assessments
        self.structured = structured
        self.question_count = question_count

    async def _require_user(self, identity: Optional[Identity]) -> User:
        identity = require_identity(identity)
        user = await self.users.find_by_subject(identity.subject)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def generate_quiz(self, identity: Optional[Identity]) -> List[Dict[str, Any]]:
        """
        Generate multiple-choice questions for the caller's industry.

        Returns exactly one placeholder question when generation fails or no
        generated question is valid.
        """
        user = await self._require_user(identity)
        profile = CandidateProfile.from_dict(user.to_profile())
        await self.users.release()

        document = await self.structured.generate_or_placeholder(
            quiz_prompt(profile, self.question_count),
            placeholder={"questions": [PLACEHOLDER_QUESTION]},
            schema=QUIZ_SCHEMA,
        )
        questions = validate_questions(document.get("questions", []))
        if not questions:
            logger.warning(f"No valid quiz questions for user {user.id}; using placeholder")
            return [copy.deepcopy(PLACEHOLDER_QUESTION)]
        return questions

    async def improvement_tip(self, industry: Optional[str], wrong: List[QuestionResult]) -> str:
        document = await self.structured.generate_or_placeholder(
            improvement_tip_prompt(industry, [result.question for result in wrong]),
            placeholder={"tip": PLACEHOLDER_TIP},
        )
        tip = document.get("tip")
        if not isinstance(tip, str) or not tip.strip():
            return PLACEHOLDER_TIP
        return tip.strip()

    async def save_quiz_result(
        self,
        identity: Optional[Identity],
        questions: List[QuizQuestion],
        answers: List[Optional[str]],
        score: float,
    ) -> Assessment:
        """
        Score and store a completed quiz.

        An improvement tip is requested only when at least one answer is wrong.

        Raises:
            UnauthorizedError: No caller identity
            NotFoundError: Unknown user
            PersistenceFailedError: The assessment could not be stored
        """
        user = await self._require_user(identity)
        results = score_answers(questions, answers)

        wrong = [result for result in results if not result.is_correct]
        await self.users.release()
        tip = await self.improvement_tip(user.industry, wrong) if wrong else None

        async with self.assessments.transaction():
            assessment = await self.assessments.add(
                Assessment(
                    user_id=user.id,
                    quiz_score=score,
                    questions=[result.model_dump() for result in results],
                    category=ASSESSMENT_CATEGORY,
                    improvement_tip=tip,
                )
            )
        logger.info(f"Saved assessment {assessment.id} for user {user.id} ({len(wrong)} wrong)")
        return assessment

    async def get_assessments(self, identity: Optional[Identity]) -> List[Assessment]:
        user = await self._require_user(identity)
        return await self.assessments.list_for_user(user.id)
