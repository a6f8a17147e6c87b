from typing import Optional

from fastapi import APIRouter, Depends

from careercoach.api.deps import get_dashboard_service
from careercoach.core.security import Identity, get_current_identity
from careercoach.schemas import IndustryInsightResponse
from careercoach.services import DashboardService

router = APIRouter()


@router.get("/insights", response_model=IndustryInsightResponse)
async def get_industry_insights(
    identity: Optional[Identity] = Depends(get_current_identity),
    service: DashboardService = Depends(get_dashboard_service),
):
    """
    Get the market insights for the current user's industry.

    Insights older than the refresh interval are regenerated first.
    """
    return await service.get_industry_insights(identity)
