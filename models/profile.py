"""
User profile models.
"""

from typing import Optional
from datetime import datetime
from pydantic import Field

from models.base import BaseSchema


class ProfileUpdate(BaseSchema):
    """Editable profile and college settings."""

    full_name: Optional[str] = Field(None, max_length=200)
    email: Optional[str] = Field(None, max_length=320)
    college_name: Optional[str] = Field(None, max_length=200)
    college_address: Optional[str] = Field(None, max_length=500)
    college_website: Optional[str] = Field(None, max_length=300)
    notifications_enabled: bool = True
    email_alerts: bool = True
    sms_alerts: bool = False


class ProfileResponse(ProfileUpdate):
    """Profile row as stored."""

    id: str
    subscription_plan: Optional[str] = None
    subscription_expires_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
