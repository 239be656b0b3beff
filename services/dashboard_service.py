"""
Dashboard counters.

Sums the per-campaign counters of the current user. The counters
themselves are written by whatever runs the outreach; nothing here sends
messages or places calls.
"""

from collections import Counter
from typing import Optional
import structlog

from config import get_supabase_client
from models.dashboard import DashboardStats
from services.auth_service import UserSession
from exceptions import DatabaseError

logger = structlog.get_logger(__name__)


def calculate_response_rate(responses: int, messages: int, calls: int) -> float:
    """Responses per contact attempt in percent, one decimal; 0 with no contacts."""
    attempts = messages + calls
    if attempts <= 0:
        return 0.0
    return round(responses / attempts * 100, 1)


class DashboardService:
    """Aggregate counters for the dashboard overview."""

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "campaigns"

    def get_stats(self, session: UserSession) -> DashboardStats:
        """
        Totals over all campaigns of the session user.

        Raises:
            DatabaseError: If the query fails
        """
        try:
            result = (
                self.db.table(self.table)
                .select("status, candidates_count, messages_sent, calls_made, responses_received")
                .eq("user_id", session.user_id)
                .execute()
            )
        except Exception as e:
            logger.error("dashboard_stats_failed", user_id=session.user_id, error=str(e))
            raise DatabaseError("select", str(e))

        rows = result.data or []
        by_status = Counter(row.get("status") or "draft" for row in rows)

        def total(column: str) -> int:
            return sum(row.get(column) or 0 for row in rows)

        messages = total("messages_sent")
        calls = total("calls_made")
        responses = total("responses_received")

        stats = DashboardStats(
            total_campaigns=len(rows),
            active_campaigns=by_status.get("active", 0),
            campaigns_by_status=dict(by_status),
            candidates_count=total("candidates_count"),
            messages_sent=messages,
            calls_made=calls,
            responses_received=responses,
            response_rate=calculate_response_rate(responses, messages, calls),
        )

        logger.info(
            "dashboard_stats_computed",
            user_id=session.user_id,
            total_campaigns=stats.total_campaigns,
        )
        return stats


# Singleton instance
_dashboard_service: Optional[DashboardService] = None


def get_dashboard_service() -> DashboardService:
    """Get or create DashboardService instance."""
    global _dashboard_service
    if _dashboard_service is None:
        _dashboard_service = DashboardService()
    return _dashboard_service
