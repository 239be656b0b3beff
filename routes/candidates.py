"""
Candidate upload API routes.

Preview-then-confirm: the upload endpoint parses the CSV and keeps the
staged upload in the preview cache; confirm inserts it, cancel drops it.
A failed insert leaves the preview in place so confirm can be retried.
"""

from typing import Optional
from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
import structlog

from config import settings
from models.candidate import (
    CandidateListResponse,
    CandidatePreviewResponse,
    CandidateRecord,
    CandidateUploadResponse,
    NotificationResponse,
    RejectedRowResponse,
)
from services import preview_cache_service
from services.auth_service import UserSession, get_current_session
from services.campaign_service import get_campaign_service
from services.candidate_service import get_candidate_service
from services.ingestion_service import CandidateIngestion
from exceptions import PreviewNotFoundError
from utils.responses import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/candidates", tags=["Candidates"])


def _preview_response(preview_id: str, ingestion: CandidateIngestion) -> CandidatePreviewResponse:
    preview = ingestion.preview()
    return CandidatePreviewResponse(
        preview_id=preview_id,
        filename=ingestion.filename,
        campaign_id=ingestion.campaign_id,
        state=ingestion.state.value,
        total=preview.total,
        remaining=preview.remaining,
        message=preview.message,
        upload_enabled=preview.upload_enabled,
        rows=[CandidateRecord(**row.to_dict()) for row in preview.rows],
        rejected_count=len(preview.rejected),
        rejected=[
            RejectedRowResponse(line=r.line, reason=r.reason)
            for r in preview.rejected
        ],
        notifications=[NotificationResponse(**n.to_dict()) for n in ingestion.notifications],
        expires_in_minutes=settings.preview_ttl_minutes,
    )


def _get_ingestion(preview_id: str, session: UserSession) -> CandidateIngestion:
    """Cached upload for preview_id, only if it belongs to the session user."""
    ingestion = preview_cache_service.retrieve_preview(preview_id)
    if ingestion is None or ingestion.session.user_id != session.user_id:
        raise PreviewNotFoundError(preview_id)
    return ingestion


# ===================
# ROUTES
# ===================

@router.get("", response_model=CandidateListResponse)
async def list_candidates(
    campaign_id: str = Query(..., description="Campaign to list candidates for"),
    session: UserSession = Depends(get_current_session),
):
    """Candidates stored for a campaign."""
    try:
        candidates = get_candidate_service().list_by_campaign(session, campaign_id)
        return CandidateListResponse(data=candidates, total=len(candidates))
    except Exception as e:
        return handle_error(e)


@router.post("/upload", response_model=CandidatePreviewResponse)
async def upload_candidates(
    file: UploadFile = File(...),
    campaign_id: Optional[str] = Form(None),
    session: UserSession = Depends(get_current_session),
):
    """
    Parse a candidate CSV and stage it for confirmation.

    Required columns: Name, Phone. Optional: Email, City, Course.

    Raises:
        404: campaign_id is not one of the user's campaigns
        422: File is not a readable .csv
    """
    logger.info(
        "candidate_upload_received",
        filename=file.filename,
        content_type=file.content_type,
        user_id=session.user_id,
        campaign_id=campaign_id,
    )

    try:
        if campaign_id:
            get_campaign_service().get(session, campaign_id)

        content = await file.read()

        ingestion = CandidateIngestion(
            session,
            get_candidate_service(),
            campaign_id=campaign_id or None,
            preview_limit=settings.preview_row_limit,
            strict_columns=settings.csv_strict_columns,
        )
        ingestion.load(file.filename or "", content)

        preview_id = preview_cache_service.store_preview(ingestion)

        logger.info(
            "candidate_preview_created",
            preview_id=preview_id,
            candidates=len(ingestion.candidates),
        )
        return _preview_response(preview_id, ingestion)

    except Exception as e:
        return handle_error(e)


@router.get("/preview/{preview_id}", response_model=CandidatePreviewResponse)
async def get_preview(
    preview_id: str,
    session: UserSession = Depends(get_current_session),
):
    """Current state of a staged upload."""
    try:
        return _preview_response(preview_id, _get_ingestion(preview_id, session))
    except Exception as e:
        return handle_error(e)


@router.post("/confirm/{preview_id}", response_model=CandidateUploadResponse)
async def confirm_upload(
    preview_id: str,
    session: UserSession = Depends(get_current_session),
):
    """
    Insert the staged candidates.

    Raises:
        404: Preview expired
        409: Upload already running for this preview
        500: Store rejected the insert (preview kept for retry)
    """
    try:
        ingestion = _get_ingestion(preview_id, session)
        inserted = ingestion.upload()

        preview_cache_service.delete_preview(preview_id)

        notification = ingestion.notifications[-1]
        return CandidateUploadResponse(
            success=True,
            inserted=inserted,
            campaign_id=ingestion.target_campaign_id,
            message=notification.description,
            notification=NotificationResponse(**notification.to_dict()),
        )

    except Exception as e:
        logger.error("candidate_confirm_failed", preview_id=preview_id, error=str(e))
        return handle_error(e)


@router.delete("/preview/{preview_id}")
async def cancel_upload(
    preview_id: str,
    session: UserSession = Depends(get_current_session),
):
    """Discard a staged upload."""
    try:
        ingestion = _get_ingestion(preview_id, session)
        ingestion.cancel()
        preview_cache_service.delete_preview(preview_id)
        return {"success": True, "preview_id": preview_id}
    except Exception as e:
        return handle_error(e)
