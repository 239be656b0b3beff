"""
Profile service: user and college settings.
"""

from datetime import datetime
from typing import Optional
import structlog

from config import get_supabase_client
from models.profile import ProfileResponse, ProfileUpdate
from services.auth_service import UserSession
from exceptions import DatabaseError

logger = structlog.get_logger(__name__)


class ProfileService:
    """Read and upsert the profiles row keyed by user id."""

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "profiles"

    def get(self, session: UserSession) -> ProfileResponse:
        """
        Profile of the session user; defaults when no row exists yet.

        Raises:
            DatabaseError: If the query fails
        """
        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("id", session.user_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error("get_profile_failed", user_id=session.user_id, error=str(e))
            raise DatabaseError("select", str(e))

        if not result.data:
            logger.debug("profile_not_found_using_defaults", user_id=session.user_id)
            return ProfileResponse(id=session.user_id, email=session.email)

        row = result.data[0]
        return ProfileResponse(
            id=row["id"],
            full_name=row.get("full_name"),
            email=row.get("email") or session.email,
            college_name=row.get("college_name"),
            college_address=row.get("college_address"),
            college_website=row.get("college_website"),
            notifications_enabled=row.get("notifications_enabled") is not False,
            email_alerts=row.get("email_alerts") is not False,
            sms_alerts=bool(row.get("sms_alerts")),
            subscription_plan=row.get("subscription_plan"),
            subscription_expires_at=row.get("subscription_expires_at"),
            updated_at=row.get("updated_at"),
        )

    def upsert(self, session: UserSession, data: ProfileUpdate) -> ProfileResponse:
        """
        Create or update the session user's profile.

        Raises:
            DatabaseError: If the upsert fails
        """
        row = {
            "id": session.user_id,
            **data.model_dump(),
            "updated_at": datetime.utcnow().isoformat(),
        }

        try:
            result = self.db.table(self.table).upsert(row).execute()
        except Exception as e:
            logger.error("save_profile_failed", user_id=session.user_id, error=str(e))
            raise DatabaseError("upsert", str(e))

        logger.info("profile_saved", user_id=session.user_id)
        saved = result.data[0] if result.data else row
        return ProfileResponse(**{**row, **saved})


# Singleton instance
_profile_service: Optional[ProfileService] = None


def get_profile_service() -> ProfileService:
    """Get or create ProfileService instance."""
    global _profile_service
    if _profile_service is None:
        _profile_service = ProfileService()
    return _profile_service
