"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    ExternalServiceError,
    DatabaseError,

    # Candidate uploads
    CandidateParseError,
    UnsupportedFileTypeError,
    PreviewNotFoundError,
    UploadInProgressError,
    InvalidIngestionStateError,
    NothingToUploadError,
    CandidateInsertError,

    # Campaigns
    CampaignNotFoundError,
    InvalidCampaignTypeError,

    # Chat
    ChatSessionNotFoundError,

    # Inference
    InferenceError,
    InferenceNotConfiguredError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "AuthenticationError",
    "ExternalServiceError",
    "DatabaseError",

    # Candidate uploads
    "CandidateParseError",
    "UnsupportedFileTypeError",
    "PreviewNotFoundError",
    "UploadInProgressError",
    "InvalidIngestionStateError",
    "NothingToUploadError",
    "CandidateInsertError",

    # Campaigns
    "CampaignNotFoundError",
    "InvalidCampaignTypeError",

    # Chat
    "ChatSessionNotFoundError",

    # Inference
    "InferenceError",
    "InferenceNotConfiguredError",
]
