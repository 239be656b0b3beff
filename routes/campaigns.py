"""
Campaign API routes.
"""

from fastapi import APIRouter, Depends
import structlog

from models.campaign import (
    CampaignCreate,
    CampaignListResponse,
    CampaignResponse,
    ScriptResponse,
)
from services.auth_service import UserSession, get_current_session
from services.campaign_service import get_campaign_service
from utils.responses import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/campaigns", tags=["Campaigns"])


@router.get("", response_model=CampaignListResponse)
async def list_campaigns(session: UserSession = Depends(get_current_session)):
    """Campaigns of the current user, newest first."""
    try:
        campaigns = get_campaign_service().list_for_user(session)
        return CampaignListResponse(data=campaigns, total=len(campaigns))
    except Exception as e:
        return handle_error(e)


@router.post("", response_model=CampaignResponse, status_code=201)
async def create_campaign(
    data: CampaignCreate,
    session: UserSession = Depends(get_current_session),
):
    """Save a new campaign as a draft."""
    try:
        return get_campaign_service().create(session, data)
    except Exception as e:
        return handle_error(e)


@router.post("/scripts/{kind}", response_model=ScriptResponse)
async def generate_script(
    kind: str,
    session: UserSession = Depends(get_current_session),
):
    """
    Draft a WhatsApp or voice template.

    Raises:
        422: kind is not whatsapp or voice
        500: Generation failed
    """
    try:
        script = get_campaign_service().generate_script(kind)
        return ScriptResponse(kind=kind, script=script)
    except Exception as e:
        return handle_error(e)


@router.get("/{campaign_id}", response_model=CampaignResponse)
async def get_campaign(
    campaign_id: str,
    session: UserSession = Depends(get_current_session),
):
    try:
        return get_campaign_service().get(session, campaign_id)
    except Exception as e:
        return handle_error(e)


@router.post("/{campaign_id}/toggle", response_model=CampaignResponse)
async def toggle_campaign(
    campaign_id: str,
    session: UserSession = Depends(get_current_session),
):
    """Pause an active campaign or resume any other."""
    try:
        return get_campaign_service().toggle_status(session, campaign_id)
    except Exception as e:
        return handle_error(e)


@router.delete("/{campaign_id}")
async def delete_campaign(
    campaign_id: str,
    session: UserSession = Depends(get_current_session),
):
    try:
        get_campaign_service().delete(session, campaign_id)
        return {"success": True, "id": campaign_id}
    except Exception as e:
        return handle_error(e)
