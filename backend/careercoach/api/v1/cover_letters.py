from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status

from careercoach.api.deps import get_cover_letter_service
from careercoach.core.security import Identity, get_current_identity
from careercoach.schemas import CoverLetterRequest, CoverLetterResponse
from careercoach.services import CoverLetterService

router = APIRouter()


@router.post("", response_model=CoverLetterResponse, status_code=status.HTTP_201_CREATED)
async def generate_cover_letter(
    request_data: CoverLetterRequest,
    identity: Optional[Identity] = Depends(get_current_identity),
    service: CoverLetterService = Depends(get_cover_letter_service),
):
    """
    Generate a cover letter for a job posting from the current user's profile.
    """
    return await service.generate_cover_letter(identity, request_data)


@router.get("", response_model=List[CoverLetterResponse])
async def list_cover_letters(
    identity: Optional[Identity] = Depends(get_current_identity),
    service: CoverLetterService = Depends(get_cover_letter_service),
):
    """Current user's cover letters, newest first."""
    return await service.list_cover_letters(identity)


@router.get("/{cover_letter_id}", response_model=CoverLetterResponse)
async def get_cover_letter(
    cover_letter_id: int,
    identity: Optional[Identity] = Depends(get_current_identity),
    service: CoverLetterService = Depends(get_cover_letter_service),
):
    return await service.get_cover_letter(identity, cover_letter_id)


@router.delete("/{cover_letter_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_cover_letter(
    cover_letter_id: int,
    identity: Optional[Identity] = Depends(get_current_identity),
    service: CoverLetterService = Depends(get_cover_letter_service),
):
    await service.delete_cover_letter(identity, cover_letter_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
