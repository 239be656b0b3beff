"""
AI chat models.
"""

from typing import Optional, Literal
from datetime import datetime
from pydantic import Field

from models.base import BaseSchema


class ChatSessionResponse(BaseSchema):
    """A chat conversation owned by one user."""

    id: str
    user_id: str
    session_name: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class ChatMessageResponse(BaseSchema):
    """A single chat turn."""

    id: str
    session_id: Optional[str] = None
    role: Literal["user", "assistant"]
    content: str
    created_at: datetime


class ChatMessageRequest(BaseSchema):
    """User message, optionally continuing an existing session."""

    content: str = Field(..., min_length=1, description="User message")
    session_id: Optional[str] = Field(None, description="Existing chat session")


class ChatReplyResponse(BaseSchema):
    """Assistant reply plus the session it belongs to."""

    session_id: str
    message: ChatMessageResponse
