"""
Pydantic models for validation and serialization.
"""

from models.base import (
    BaseSchema,
    TimestampMixin,
)
from models.candidate import (
    CandidateRecord,
    CandidateResponse,
    CandidateListResponse,
    RejectedRowResponse,
    NotificationResponse,
    CandidatePreviewResponse,
    CandidateUploadResponse,
)
from models.campaign import (
    CampaignType,
    CampaignStatus,
    CampaignCreate,
    CampaignResponse,
    CampaignListResponse,
    ScriptResponse,
)
from models.chat import (
    ChatSessionResponse,
    ChatMessageResponse,
    ChatMessageRequest,
    ChatReplyResponse,
)
from models.profile import ProfileUpdate, ProfileResponse
from models.dashboard import DashboardStats

__all__ = [
    # Base
    "BaseSchema",
    "TimestampMixin",

    # Candidate
    "CandidateRecord",
    "CandidateResponse",
    "CandidateListResponse",
    "RejectedRowResponse",
    "NotificationResponse",
    "CandidatePreviewResponse",
    "CandidateUploadResponse",

    # Campaign
    "CampaignType",
    "CampaignStatus",
    "CampaignCreate",
    "CampaignResponse",
    "CampaignListResponse",
    "ScriptResponse",

    # Chat
    "ChatSessionResponse",
    "ChatMessageResponse",
    "ChatMessageRequest",
    "ChatReplyResponse",

    # Profile
    "ProfileUpdate",
    "ProfileResponse",

    # Dashboard
    "DashboardStats",
]
