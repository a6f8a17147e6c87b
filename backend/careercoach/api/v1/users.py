from typing import Optional

from fastapi import APIRouter, Depends

from careercoach.api.deps import get_user_service
from careercoach.core.security import Identity, get_current_identity
from careercoach.schemas import OnboardingStatus, ProfileUpdate, ProfileUpdateResponse
from careercoach.services import UserService

router = APIRouter()


@router.put("/profile", response_model=ProfileUpdateResponse)
async def update_user_profile(
    profile_data: ProfileUpdate,
    identity: Optional[Identity] = Depends(get_current_identity),
    service: UserService = Depends(get_user_service),
):
    """
    Update current user's professional profile.

    Choosing an industry for the first time also generates its insights.
    """
    result = await service.update_profile(identity, profile_data)
    return ProfileUpdateResponse.model_validate(result, from_attributes=True)


@router.get("/onboarding-status", response_model=OnboardingStatus)
async def get_onboarding_status(
    identity: Optional[Identity] = Depends(get_current_identity),
    service: UserService = Depends(get_user_service),
):
    return OnboardingStatus(is_onboarded=await service.get_onboarding_status(identity))
