from typing import List, Optional

from fastapi import APIRouter, Depends, status

from careercoach.api.deps import get_interview_service
from careercoach.core.security import Identity, get_current_identity
from careercoach.schemas import AssessmentResponse, QuizQuestion, QuizResultRequest
from careercoach.services import InterviewService

router = APIRouter()


@router.post("/quiz", response_model=List[QuizQuestion])
async def generate_quiz(
    identity: Optional[Identity] = Depends(get_current_identity),
    service: InterviewService = Depends(get_interview_service),
):
    """
    Generate a practice quiz for the current user's industry and skills.

    Always returns at least one question.
    """
    return await service.generate_quiz(identity)


@router.post("/assessments", response_model=AssessmentResponse, status_code=status.HTTP_201_CREATED)
async def save_quiz_result(
    result: QuizResultRequest,
    identity: Optional[Identity] = Depends(get_current_identity),
    service: InterviewService = Depends(get_interview_service),
):
    return await service.save_quiz_result(identity, result.questions, result.answers, result.score)


@router.get("/assessments", response_model=List[AssessmentResponse])
async def get_assessments(
    identity: Optional[Identity] = Depends(get_current_identity),
    service: InterviewService = Depends(get_interview_service),
):
    """Current user's assessments, oldest first."""
    return await service.get_assessments(identity)
