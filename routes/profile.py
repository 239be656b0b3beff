"""
Profile and college settings API routes.
"""

from fastapi import APIRouter, Depends

from models.profile import ProfileResponse, ProfileUpdate
from services.auth_service import UserSession, get_current_session
from services.profile_service import get_profile_service
from utils.responses import handle_error

router = APIRouter(prefix="/api/profile", tags=["Profile"])


@router.get("", response_model=ProfileResponse)
async def get_profile(session: UserSession = Depends(get_current_session)):
    try:
        return get_profile_service().get(session)
    except Exception as e:
        return handle_error(e)


@router.put("", response_model=ProfileResponse)
async def save_profile(
    data: ProfileUpdate,
    session: UserSession = Depends(get_current_session),
):
    try:
        return get_profile_service().upsert(session, data)
    except Exception as e:
        return handle_error(e)
