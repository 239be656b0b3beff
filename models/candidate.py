"""
Candidate models.

A candidate is a prospective student targeted by an outreach campaign.
Rows come in through CSV uploads and are persisted to the candidates table.
"""

from typing import Optional, Literal
from datetime import datetime
from pydantic import Field

from models.base import BaseSchema


RejectionReason = Literal[
    "missing_name",
    "missing_phone",
    "missing_name_and_phone",
    "column_count_mismatch",
]


class CandidateRecord(BaseSchema):
    """A validated candidate ready for insertion."""

    name: str = Field(..., min_length=1, description="Candidate full name")
    phone: str = Field(..., min_length=1, description="Contact phone number")
    email: Optional[str] = Field(None, description="Email address")
    city: Optional[str] = Field(None, description="City")
    course: Optional[str] = Field(None, description="Course of interest")


class CandidateResponse(BaseSchema):
    """Persisted candidate row."""

    id: str = Field(..., description="Candidate UUID")
    campaign_id: str = Field(..., description="Owning campaign")
    name: str
    phone: str
    email: Optional[str] = None
    city: Optional[str] = None
    course: Optional[str] = None
    status: Optional[str] = None
    response: Optional[str] = None
    last_contacted_at: Optional[datetime] = None
    created_at: datetime


class CandidateListResponse(BaseSchema):
    """Candidates belonging to one campaign."""

    data: list[CandidateResponse]
    total: int


class RejectedRowResponse(BaseSchema):
    """A data row left out of the upload, with the reason."""

    line: int = Field(..., ge=2, description="1-based line number in the file")
    reason: RejectionReason


class NotificationResponse(BaseSchema):
    """User-facing outcome message."""

    title: str
    description: str
    variant: Literal["default", "destructive"] = "default"


class CandidatePreviewResponse(BaseSchema):
    """
    Staged upload shown to the user before confirming.

    Holds at most the preview row limit; `remaining` counts the rest.
    """

    preview_id: str
    filename: Optional[str] = None
    campaign_id: Optional[str] = None
    state: str
    total: int = Field(..., ge=0, description="Valid candidates found")
    remaining: int = Field(..., ge=0, description="Valid candidates not shown")
    message: str
    upload_enabled: bool
    rows: list[CandidateRecord] = Field(default_factory=list)
    rejected_count: int = 0
    rejected: list[RejectedRowResponse] = Field(default_factory=list)
    notifications: list[NotificationResponse] = Field(default_factory=list)
    expires_in_minutes: int = 30


class CandidateUploadResponse(BaseSchema):
    """Result of confirming an upload."""

    success: bool
    inserted: int = Field(..., ge=0)
    campaign_id: str
    message: str
    notification: Optional[NotificationResponse] = None
