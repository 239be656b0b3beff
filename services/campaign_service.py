"""
Campaign service for business logic operations.

Campaigns are created as drafts, toggled between active and paused, and
deleted by their owner. Message templates can be drafted by the hosted
model.
"""

from typing import Optional
import structlog

from config import get_supabase_client
from integrations.huggingface import generate_text
from models.campaign import (
    CampaignCreate,
    CampaignResponse,
    CampaignStatus,
)
from services.auth_service import UserSession
from exceptions import (
    CampaignNotFoundError,
    DatabaseError,
    InvalidCampaignTypeError,
)

logger = structlog.get_logger(__name__)


SCRIPT_PROMPTS = {
    "whatsapp": (
        "Generate a professional WhatsApp message template for college admission outreach. "
        "The message should be personalized, engaging, and encourage prospective students "
        "to learn more about our programs. Include placeholders for {name}, {course}, and "
        "{college_name}. Keep it under 160 characters."
    ),
    "voice": (
        "Generate a professional voice call script for college admission outreach. "
        "The script should be conversational, welcoming, and informative. Include "
        "placeholders for {name}, {course}, and {college_name}. The script should be "
        "around 30-45 seconds when spoken."
    ),
}


class CampaignService:
    """
    Campaign business logic.

    Handles CRUD operations for campaigns.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "campaigns"

    # ===================
    # READ OPERATIONS
    # ===================

    def list_for_user(self, session: UserSession) -> list[CampaignResponse]:
        """
        Get the user's campaigns, newest first.

        Raises:
            DatabaseError: If the query fails
        """
        logger.info("getting_campaigns", user_id=session.user_id)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("user_id", session.user_id)
                .order("created_at", desc=True)
                .execute()
            )
            campaigns = [self._row_to_response(row) for row in result.data]
            logger.info("campaigns_retrieved", count=len(campaigns))
            return campaigns

        except Exception as e:
            logger.error("get_campaigns_failed", user_id=session.user_id, error=str(e))
            raise DatabaseError("select", str(e))

    def get(self, session: UserSession, campaign_id: str) -> CampaignResponse:
        """
        Get a single campaign owned by the session user.

        Raises:
            CampaignNotFoundError: If the campaign doesn't exist or belongs to someone else
        """
        logger.debug("getting_campaign", campaign_id=campaign_id, user_id=session.user_id)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("id", campaign_id)
                .eq("user_id", session.user_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error("get_campaign_failed", campaign_id=campaign_id, error=str(e))
            raise DatabaseError("select", str(e))

        if not result.data:
            raise CampaignNotFoundError(campaign_id)

        return self._row_to_response(result.data[0])

    # ===================
    # WRITE OPERATIONS
    # ===================

    def create(self, session: UserSession, data: CampaignCreate) -> CampaignResponse:
        """
        Create a campaign as a draft owned by the session user.

        Raises:
            DatabaseError: If the insert fails
        """
        logger.info("creating_campaign", user_id=session.user_id, name=data.name, type=data.type.value)

        row = {
            "name": data.name,
            "type": data.type.value,
            "scheduled_at": data.scheduled_at.isoformat() if data.scheduled_at else None,
            "template_whatsapp": data.template_whatsapp or None,
            "template_voice": data.template_voice or None,
            "user_id": session.user_id,
            "status": CampaignStatus.DRAFT.value,
        }

        try:
            result = self.db.table(self.table).insert(row).execute()
        except Exception as e:
            logger.error("create_campaign_failed", name=data.name, error=str(e))
            raise DatabaseError("insert", str(e))

        campaign = self._row_to_response(result.data[0])
        logger.info("campaign_created", campaign_id=campaign.id)
        return campaign

    def toggle_status(self, session: UserSession, campaign_id: str) -> CampaignResponse:
        """
        Pause an active campaign; activate anything else.

        Raises:
            CampaignNotFoundError: If the campaign doesn't exist or belongs to someone else
            DatabaseError: If the update fails
        """
        current = self.get(session, campaign_id)
        new_status = (
            CampaignStatus.PAUSED if current.status == CampaignStatus.ACTIVE.value
            else CampaignStatus.ACTIVE
        )

        try:
            result = (
                self.db.table(self.table)
                .update({"status": new_status.value})
                .eq("id", campaign_id)
                .eq("user_id", session.user_id)
                .execute()
            )
        except Exception as e:
            logger.error("toggle_campaign_failed", campaign_id=campaign_id, error=str(e))
            raise DatabaseError("update", str(e))

        logger.info(
            "campaign_status_changed",
            campaign_id=campaign_id,
            old_status=current.status,
            new_status=new_status.value
        )

        if result.data:
            return self._row_to_response(result.data[0])
        return current.model_copy(update={"status": new_status.value})

    def delete(self, session: UserSession, campaign_id: str) -> None:
        """
        Permanently delete a campaign.

        Raises:
            CampaignNotFoundError: If the campaign doesn't exist or belongs to someone else
            DatabaseError: If the delete fails
        """
        self.get(session, campaign_id)

        try:
            (
                self.db.table(self.table)
                .delete()
                .eq("id", campaign_id)
                .eq("user_id", session.user_id)
                .execute()
            )
        except Exception as e:
            logger.error("delete_campaign_failed", campaign_id=campaign_id, error=str(e))
            raise DatabaseError("delete", str(e))

        logger.info("campaign_deleted", campaign_id=campaign_id)

    # ===================
    # SCRIPTS
    # ===================

    def generate_script(self, kind: str) -> str:
        """
        Draft a WhatsApp or voice template with the hosted model.

        Raises:
            InvalidCampaignTypeError: If kind is not whatsapp or voice
            InferenceError: If generation fails
        """
        prompt = SCRIPT_PROMPTS.get(kind)
        if prompt is None:
            raise InvalidCampaignTypeError(kind, sorted(SCRIPT_PROMPTS))

        script = generate_text(prompt)
        logger.info("campaign_script_generated", kind=kind, length=len(script))
        return script

    def _row_to_response(self, row: dict) -> CampaignResponse:
        """Convert database row to CampaignResponse (null counters become 0)."""
        return CampaignResponse(
            id=row["id"],
            user_id=row["user_id"],
            name=row["name"],
            type=row["type"],
            status=row.get("status") or CampaignStatus.DRAFT.value,
            scheduled_at=row.get("scheduled_at"),
            template_whatsapp=row.get("template_whatsapp"),
            template_voice=row.get("template_voice"),
            candidates_count=row.get("candidates_count") or 0,
            messages_sent=row.get("messages_sent") or 0,
            calls_made=row.get("calls_made") or 0,
            responses_received=row.get("responses_received") or 0,
            created_at=row["created_at"],
            updated_at=row.get("updated_at"),
        )


# Singleton instance
_campaign_service: Optional[CampaignService] = None


def get_campaign_service() -> CampaignService:
    """Get or create CampaignService instance."""
    global _campaign_service
    if _campaign_service is None:
        _campaign_service = CampaignService()
    return _campaign_service
