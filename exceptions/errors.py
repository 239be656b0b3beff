"""
Application errors.

Every error carries a stable code, a human-readable message and the
HTTP status the API should answer with.
"""

from typing import Optional, Any
from datetime import datetime


class AppError(Exception):
    """
    Error the API reports to the client as JSON.

    Attributes:
        code: Error code (e.g., "CAMPAIGN_NOT_FOUND")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.utcnow().isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class ConflictError(AppError):
    """Conflict with the current state of a resource (409)."""

    def __init__(
        self,
        message: str,
        code: str = "CONFLICT",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=409,
            details=details
        )


class AuthenticationError(AppError):
    """Missing or invalid credentials (401)."""

    def __init__(
        self,
        message: str = "Not authenticated",
        code: str = "NOT_AUTHENTICATED",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=401,
            details=details
        )


class ExternalServiceError(AppError):
    """External service failure (503)."""

    def __init__(
        self,
        service: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code=f"{service.upper()}_ERROR",
            message=message,
            status_code=503,
            details={"service": service, **(details or {})}
        )


class DatabaseError(AppError):
    """Database operation failed (500)."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="DATABASE_ERROR",
            message=f"Database {operation} failed: {message}",
            status_code=500,
            details={"operation": operation, **(details or {})}
        )


# ===================
# CANDIDATE UPLOAD ERRORS
# ===================

class CandidateParseError(ValidationError):
    """Uploaded file could not be read as candidate CSV text."""

    def __init__(
        self,
        message: str = "Please check your file format and try again",
        details: Optional[dict] = None
    ):
        super().__init__(
            code="CANDIDATE_PARSE_ERROR",
            message=message,
            details=details
        )


class UnsupportedFileTypeError(ValidationError):
    """Only .csv files are accepted."""

    def __init__(self, filename: str):
        super().__init__(
            code="UNSUPPORTED_FILE_TYPE",
            message="Only .csv files are supported",
            details={"filename": filename}
        )


class PreviewNotFoundError(NotFoundError):
    """Upload preview expired or never existed."""

    def __init__(self, preview_id: str):
        super().__init__(
            resource="Preview",
            identifier=preview_id,
            code="PREVIEW_NOT_FOUND"
        )


class UploadInProgressError(ConflictError):
    """A bulk insert for this upload is already running."""

    def __init__(self):
        super().__init__(
            code="UPLOAD_IN_PROGRESS",
            message="An upload is already in progress"
        )


class InvalidIngestionStateError(ConflictError):
    """Ingestion step requested from the wrong state."""

    def __init__(self, current_state: str, action: str):
        super().__init__(
            code="INVALID_INGESTION_STATE",
            message=f"Cannot {action} while {current_state}",
            details={"state": current_state, "action": action}
        )


class NothingToUploadError(ValidationError):
    """Preview holds no valid candidates."""

    def __init__(self):
        super().__init__(
            code="NOTHING_TO_UPLOAD",
            message="No valid candidates to upload"
        )


class CandidateInsertError(AppError):
    """Bulk insert rejected by the data store; message is the store's own."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            code="CANDIDATE_INSERT_FAILED",
            message=message,
            status_code=500,
            details=details
        )


# ===================
# CAMPAIGN ERRORS
# ===================

class CampaignNotFoundError(NotFoundError):
    """Campaign not found."""

    def __init__(self, campaign_id: str):
        super().__init__(
            resource="Campaign",
            identifier=campaign_id,
            code="CAMPAIGN_NOT_FOUND"
        )


class InvalidCampaignTypeError(ValidationError):
    """Unknown campaign or script type."""

    def __init__(self, campaign_type: str, valid: list[str]):
        super().__init__(
            code="INVALID_CAMPAIGN_TYPE",
            message=f"Type must be one of: {', '.join(valid)}",
            details={"provided": campaign_type, "valid": valid}
        )


# ===================
# CHAT ERRORS
# ===================

class ChatSessionNotFoundError(NotFoundError):
    """Chat session not found."""

    def __init__(self, session_id: str):
        super().__init__(
            resource="Chat session",
            identifier=session_id,
            code="CHAT_SESSION_NOT_FOUND"
        )


# ===================
# INFERENCE ERRORS
# ===================

class InferenceError(AppError):
    """Hosted model call failed or returned something unusable."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            code="INFERENCE_ERROR",
            message=message,
            status_code=500,
            details=details
        )


class InferenceNotConfiguredError(ExternalServiceError):
    """No inference API token configured."""

    def __init__(self):
        super().__init__(
            service="inference",
            message="Inference API token is not configured"
        )
