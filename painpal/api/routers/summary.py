# painpal/api/routers/summary.py
from fastapi import APIRouter, Depends

from painpal import schemas
from painpal.api.deps import get_companion_service, get_storage
from painpal.core.security import get_current_user
from painpal.services.companion import CompanionService
from painpal.services.dashboard import dashboard_service
from painpal.storage import Storage

router = APIRouter(prefix="/api/summary", tags=["Summaries"])


@router.get("/daily", response_model=schemas.DailySummaryResponse)
def get_daily_summary(
    current_user: schemas.User = Depends(get_current_user),
    companion: CompanionService = Depends(get_companion_service),
):
    """Companion-written summary of the last week."""
    return {"summary": companion.daily_summary(current_user.id)}


@router.get("/patterns", response_model=schemas.PatternInsightsResponse)
def get_patterns(
    current_user: schemas.User = Depends(get_current_user),
    companion: CompanionService = Depends(get_companion_service),
):
    """Companion-written correlations between interventions, pain and mood."""
    return {"insights": companion.pattern_insights(current_user.id)}


@router.get("/stats", response_model=schemas.DashboardStatsResponse)
def get_stats(
    current_user: schemas.User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Day streak, average recent pain and latest mood for the home screen."""
    return dashboard_service.get_stats(storage, user_id=current_user.id)
