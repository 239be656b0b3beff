"""
In-memory holding area for staged candidate uploads.

Each entry keeps the live CandidateIngestion between the upload and the
confirm requests. Entries expire after the configured TTL. Single-server
only: a restart drops every pending preview.
"""
import uuid
from datetime import datetime, timedelta
from typing import Any, Optional

import structlog

from config import settings

logger = structlog.get_logger(__name__)

_cache: dict[str, tuple[datetime, Any]] = {}


def store_preview(data: Any, ttl_minutes: Optional[int] = None) -> str:
    """Keep data until it is confirmed, cancelled or expires; return its preview_id."""
    preview_id = str(uuid.uuid4())
    ttl = ttl_minutes if ttl_minutes is not None else settings.preview_ttl_minutes
    _cache[preview_id] = (datetime.now() + timedelta(minutes=ttl), data)
    _cleanup_expired()
    logger.debug("preview_stored", preview_id=preview_id, ttl_minutes=ttl)
    return preview_id


def retrieve_preview(preview_id: str) -> Optional[Any]:
    """Data for preview_id, or None if it expired or never existed."""
    entry = _cache.get(preview_id)
    if entry is None:
        return None
    expires_at, data = entry
    if datetime.now() > expires_at:
        _cache.pop(preview_id, None)
        logger.debug("preview_expired", preview_id=preview_id)
        return None
    return data


def delete_preview(preview_id: str) -> None:
    """Drop a preview after confirm or cancel."""
    _cache.pop(preview_id, None)


def clear_previews() -> None:
    _cache.clear()


def _cleanup_expired() -> None:
    now = datetime.now()
    for key in [k for k, (expires_at, _) in _cache.items() if now > expires_at]:
        del _cache[key]
