"""
Candidate ingestion coordinator.

Drives one upload from file selection to bulk insert:

    idle -> file_selected -> parsed (preview visible) -> uploading -> done
                                         ^                  |
                                         +---- failed <-----+

A failed parse returns to idle. A failed insert passes through failed and
lands back in parsed with the preview kept, so the same upload can be
retried. Nothing is retried automatically; every failure produces exactly
one destructive notification.

The coordinator is handed an explicit UserSession and a candidate store
(anything with `bulk_insert(records, campaign_id)`), so it can run without
a live auth provider or database.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional
import threading
import structlog

from parsers.candidate_parser import (
    CandidateParseResult,
    ParsedCandidate,
    RejectedRow,
    decode_upload,
    parse_candidates_csv,
)
from services.auth_service import UserSession
from services.candidate_service import store_error_message
from exceptions import (
    AuthenticationError,
    CandidateInsertError,
    CandidateParseError,
    InvalidIngestionStateError,
    NothingToUploadError,
    UnsupportedFileTypeError,
    UploadInProgressError,
)

logger = structlog.get_logger(__name__)

# Campaign id used when candidates are uploaded before any campaign exists
UNASSIGNED_CAMPAIGN_ID = "temp"

DEFAULT_PREVIEW_LIMIT = 10


class IngestionState(str, Enum):
    IDLE = "idle"
    FILE_SELECTED = "file_selected"
    PARSED = "parsed"
    UPLOADING = "uploading"
    DONE = "done"
    FAILED = "failed"


@dataclass
class Notification:
    """User-facing outcome of a step."""
    title: str
    description: str
    variant: str = "default"

    def to_dict(self) -> dict:
        return {"title": self.title, "description": self.description, "variant": self.variant}


@dataclass
class IngestionPreview:
    """What the user sees before confirming an upload."""
    rows: list[ParsedCandidate] = field(default_factory=list)
    total: int = 0
    remaining: int = 0
    message: str = "0 candidates found"
    upload_enabled: bool = False
    rejected: list[RejectedRow] = field(default_factory=list)


class CandidateIngestion:
    """
    One candidate upload.

    Usage:
        ingestion = CandidateIngestion(session, get_candidate_service(), campaign_id)
        ingestion.load("students.csv", content)
        preview = ingestion.preview()
        ingestion.upload()
    """

    def __init__(
        self,
        session: UserSession,
        store,
        campaign_id: Optional[str] = None,
        preview_limit: int = DEFAULT_PREVIEW_LIMIT,
        strict_columns: bool = False,
    ):
        self.session = session
        self.store = store
        self.campaign_id = campaign_id
        self.preview_limit = preview_limit
        self.strict_columns = strict_columns

        self.state = IngestionState.IDLE
        self.filename: Optional[str] = None
        self.content: Optional[bytes] = None
        self.result: Optional[CandidateParseResult] = None
        self.last_error: Optional[str] = None
        self.notifications: list[Notification] = []

        self._lock = threading.Lock()
        self._in_flight = False

    # ===================
    # PROPERTIES
    # ===================

    @property
    def candidates(self) -> list[ParsedCandidate]:
        return self.result.candidates if self.result else []

    @property
    def target_campaign_id(self) -> str:
        return self.campaign_id or UNASSIGNED_CAMPAIGN_ID

    @property
    def uploading(self) -> bool:
        return self._in_flight

    # ===================
    # TRANSITIONS
    # ===================

    def select_file(self, filename: str, content: bytes) -> None:
        """
        Stage a file for parsing, replacing any previous file and preview.

        Raises:
            UploadInProgressError: If an insert is running
        """
        with self._lock:
            if self._in_flight:
                raise UploadInProgressError()
            self.filename = filename
            self.content = content
            self.result = None
            self.last_error = None
            self.state = IngestionState.FILE_SELECTED

        logger.info(
            "candidate_file_selected",
            user_id=self.session.user_id if self.session else None,
            filename=filename,
            size=len(content),
        )

    def parse(self) -> CandidateParseResult:
        """
        Parse the selected file into a preview.

        Raises:
            InvalidIngestionStateError: If no file is selected
            CandidateParseError: If the file cannot be read (state resets to idle)
        """
        if self.state != IngestionState.FILE_SELECTED:
            raise InvalidIngestionStateError(self.state.value, "parse")

        try:
            if not (self.filename or "").lower().endswith(".csv"):
                raise UnsupportedFileTypeError(self.filename or "")
            text = decode_upload(self.content or b"")
            result = parse_candidates_csv(text, strict_columns=self.strict_columns)

        except (CandidateParseError, UnsupportedFileTypeError) as e:
            self._fail_parse(e)
            raise
        except Exception as e:
            self._fail_parse(e)
            raise CandidateParseError(details={"original_error": str(e)}) from e

        self.result = result
        self.state = IngestionState.PARSED
        self._notify(
            "File parsed successfully",
            f"Found {result.count} valid candidates",
        )
        return result

    def load(self, filename: str, content: bytes) -> CandidateParseResult:
        """Select and parse in one step."""
        self.select_file(filename, content)
        return self.parse()

    def preview(self) -> IngestionPreview:
        """Up to preview_limit rows plus counts for the staged file."""
        candidates = self.candidates
        total = len(candidates)
        return IngestionPreview(
            rows=candidates[:self.preview_limit],
            total=total,
            remaining=max(total - self.preview_limit, 0),
            message=f"{total} candidates found",
            upload_enabled=(
                self.state == IngestionState.PARSED
                and total > 0
                and not self._in_flight
            ),
            rejected=list(self.result.rejected) if self.result else [],
        )

    def upload(self) -> int:
        """
        Bulk insert the parsed candidates.

        Returns:
            Number of candidates inserted

        Raises:
            AuthenticationError: If there is no session
            UploadInProgressError: If another upload() call is still running
            InvalidIngestionStateError: If nothing has been parsed
            NothingToUploadError: If the preview holds no valid candidates
            CandidateInsertError: If the store rejects the batch (preview kept)
        """
        if self.session is None:
            raise AuthenticationError()

        with self._lock:
            if self._in_flight:
                raise UploadInProgressError()
            if self.state != IngestionState.PARSED:
                raise InvalidIngestionStateError(self.state.value, "upload")
            if not self.candidates:
                raise NothingToUploadError()
            self._in_flight = True
            self.state = IngestionState.UPLOADING

        records = list(self.candidates)
        campaign_id = self.target_campaign_id

        logger.info(
            "candidate_upload_started",
            user_id=self.session.user_id,
            campaign_id=campaign_id,
            count=len(records),
        )

        try:
            self.store.bulk_insert(records, campaign_id)

        except Exception as e:
            message = e.message if isinstance(e, CandidateInsertError) else store_error_message(e)
            # failed -> parsed in one step; a retry must never see FAILED
            with self._lock:
                self.state = IngestionState.FAILED
                self.last_error = message
                self.state = IngestionState.PARSED
                self._in_flight = False
            self._notify("Upload failed", message, variant="destructive")
            logger.error(
                "candidate_upload_failed",
                user_id=self.session.user_id,
                campaign_id=campaign_id,
                error=message,
            )
            if isinstance(e, CandidateInsertError):
                raise
            raise CandidateInsertError(message) from e

        with self._lock:
            self.state = IngestionState.DONE
            self.filename = None
            self.content = None
            self.result = None
            self._in_flight = False

        self._notify(
            "Candidates uploaded successfully",
            f"{len(records)} candidates have been added",
        )
        logger.info(
            "candidate_upload_complete",
            user_id=self.session.user_id,
            campaign_id=campaign_id,
            count=len(records),
        )
        return len(records)

    def cancel(self) -> None:
        """
        Discard the staged file and preview.

        Raises:
            UploadInProgressError: If an insert is running
        """
        with self._lock:
            if self._in_flight:
                raise UploadInProgressError()
            self._reset()
        logger.info("candidate_upload_cancelled")

    # ===================
    # HELPERS
    # ===================

    def _reset(self) -> None:
        self.state = IngestionState.IDLE
        self.filename = None
        self.content = None
        self.result = None

    def _fail_parse(self, error: Exception) -> None:
        logger.warning(
            "candidate_file_parse_failed",
            filename=self.filename,
            error=str(error),
            error_type=type(error).__name__,
        )
        self._reset()
        self._notify(
            "Error parsing file",
            "Please check your file format and try again",
            variant="destructive",
        )

    def _notify(self, title: str, description: str, variant: str = "default") -> None:
        self.notifications.append(Notification(title, description, variant))
