"""
Business logic services.

Each service handles one domain area.
"""

from services.auth_service import (
    AuthService,
    UserSession,
    get_auth_service,
    get_current_session,
)
from services.candidate_service import CandidateService, get_candidate_service
from services.ingestion_service import (
    CandidateIngestion,
    IngestionState,
    IngestionPreview,
    Notification,
    UNASSIGNED_CAMPAIGN_ID,
)
from services.campaign_service import CampaignService, get_campaign_service
from services.chat_service import ChatService, get_chat_service
from services.profile_service import ProfileService, get_profile_service
from services.dashboard_service import DashboardService, get_dashboard_service

__all__ = [
    "AuthService",
    "UserSession",
    "get_auth_service",
    "get_current_session",
    "CandidateService",
    "get_candidate_service",
    "CandidateIngestion",
    "IngestionState",
    "IngestionPreview",
    "Notification",
    "UNASSIGNED_CAMPAIGN_ID",
    "CampaignService",
    "get_campaign_service",
    "ChatService",
    "get_chat_service",
    "ProfileService",
    "get_profile_service",
    "DashboardService",
    "get_dashboard_service",
]
