"""
Candidate service: persistence of uploaded candidates.

Bulk inserts go to the candidates table in a single call, so the store
either accepts the whole batch or rejects it.
"""

from typing import Optional
import structlog

from config import get_supabase_client
from models.candidate import CandidateResponse
from parsers.candidate_parser import ParsedCandidate
from services.auth_service import UserSession
from services.campaign_service import get_campaign_service
from exceptions import CandidateInsertError, DatabaseError

logger = structlog.get_logger(__name__)


def store_error_message(error: Exception) -> str:
    """Human-readable message from a Supabase/PostgREST error."""
    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(error) or type(error).__name__


class CandidateService:
    """
    Candidate persistence.

    Satisfies the store interface the upload coordinator expects:
    `bulk_insert(records, campaign_id) -> int`.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "candidates"

    def bulk_insert(self, records: list[ParsedCandidate], campaign_id: str) -> int:
        """
        Insert all records tagged with campaign_id.

        Args:
            records: Validated candidates
            campaign_id: Campaign the candidates belong to

        Returns:
            Number of rows sent to the store

        Raises:
            CandidateInsertError: With the store's own message if the insert fails
        """
        rows = [{**record.to_dict(), "campaign_id": campaign_id} for record in records]

        logger.info("inserting_candidates", count=len(rows), campaign_id=campaign_id)

        try:
            self.db.table(self.table).insert(rows).execute()
        except Exception as e:
            message = store_error_message(e)
            logger.error(
                "insert_candidates_failed",
                campaign_id=campaign_id,
                count=len(rows),
                error=message,
                error_type=type(e).__name__
            )
            raise CandidateInsertError(
                message,
                details={"campaign_id": campaign_id, "count": len(rows)}
            ) from e

        logger.info("candidates_inserted", count=len(rows), campaign_id=campaign_id)
        return len(rows)

    def list_by_campaign(self, session: UserSession, campaign_id: str) -> list[CandidateResponse]:
        """
        Get all candidates of one of the session user's campaigns, oldest first.

        Raises:
            CampaignNotFoundError: If the campaign doesn't exist or belongs to someone else
            DatabaseError: If the query fails
        """
        get_campaign_service().get(session, campaign_id)
        logger.debug("listing_candidates", campaign_id=campaign_id)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("campaign_id", campaign_id)
                .order("created_at")
                .execute()
            )
            return [CandidateResponse(**row) for row in result.data]

        except Exception as e:
            logger.error("list_candidates_failed", campaign_id=campaign_id, error=str(e))
            raise DatabaseError("select", str(e))

    def count_by_campaign(self, session: UserSession, campaign_id: str) -> int:
        """Number of candidates stored for one of the session user's campaigns."""
        get_campaign_service().get(session, campaign_id)
        try:
            result = (
                self.db.table(self.table)
                .select("id", count="exact")
                .eq("campaign_id", campaign_id)
                .execute()
            )
            return result.count or 0

        except Exception as e:
            logger.error("count_candidates_failed", campaign_id=campaign_id, error=str(e))
            raise DatabaseError("select", str(e))


# Singleton instance
_candidate_service: Optional[CandidateService] = None


def get_candidate_service() -> CandidateService:
    """Get or create CandidateService instance."""
    global _candidate_service
    if _candidate_service is None:
        _candidate_service = CandidateService()
    return _candidate_service
