"""
Dashboard API routes.

Provides aggregate counters for the overview page.
"""

from fastapi import APIRouter, Depends

from models.dashboard import DashboardStats
from services.auth_service import UserSession, get_current_session
from services.dashboard_service import get_dashboard_service
from utils.responses import handle_error

router = APIRouter(prefix="/api/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=DashboardStats)
async def get_stats(session: UserSession = Depends(get_current_session)):
    """Campaign, contact and response totals for the current user."""
    try:
        return get_dashboard_service().get_stats(session)
    except Exception as e:
        return handle_error(e)
