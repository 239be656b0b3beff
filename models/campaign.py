"""
Campaign models.

A campaign is a named outreach effort on one or more channels with
message templates. Counters are maintained outside this service.
"""

from typing import Optional, Literal
from datetime import datetime
from enum import Enum
from pydantic import Field

from models.base import BaseSchema, TimestampMixin


class CampaignType(str, Enum):
    """Outreach channel(s) a campaign uses."""
    WHATSAPP = "whatsapp"
    VOICE = "voice"
    BOTH = "both"
    EMAIL = "email"


class CampaignStatus(str, Enum):
    """Campaign lifecycle status."""
    DRAFT = "draft"
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"


ScriptKind = Literal["whatsapp", "voice"]


class CampaignCreate(BaseSchema):
    """Create a new campaign (saved as a draft)."""

    name: str = Field(..., min_length=1, max_length=200, description="Campaign name")
    type: CampaignType = Field(..., description="Outreach channel")
    scheduled_at: Optional[datetime] = Field(None, description="When outreach should start")
    template_whatsapp: Optional[str] = Field(None, description="WhatsApp message template")
    template_voice: Optional[str] = Field(None, description="Voice call script")


class CampaignResponse(BaseSchema, TimestampMixin):
    """Campaign with counters."""

    id: str = Field(..., description="Campaign UUID")
    user_id: str
    name: str
    type: str
    status: str
    scheduled_at: Optional[datetime] = None
    template_whatsapp: Optional[str] = None
    template_voice: Optional[str] = None
    candidates_count: int = 0
    messages_sent: int = 0
    calls_made: int = 0
    responses_received: int = 0


class CampaignListResponse(BaseSchema):
    """All campaigns of the current user."""

    data: list[CampaignResponse]
    total: int


class ScriptResponse(BaseSchema):
    """Generated template for a campaign channel."""

    kind: ScriptKind
    script: str
