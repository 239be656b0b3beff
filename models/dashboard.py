"""
Dashboard counter models.
"""

from pydantic import Field

from models.base import BaseSchema


class DashboardStats(BaseSchema):
    """Aggregate counters over the current user's campaigns."""

    total_campaigns: int = Field(..., ge=0)
    active_campaigns: int = Field(0, ge=0)
    campaigns_by_status: dict[str, int] = Field(default_factory=dict)
    candidates_count: int = Field(0, ge=0)
    messages_sent: int = Field(0, ge=0)
    calls_made: int = Field(0, ge=0)
    responses_received: int = Field(0, ge=0)
    response_rate: float = Field(0.0, ge=0, description="Responses per contact attempt, in percent")
