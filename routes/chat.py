"""
AI chat API routes.
"""

from fastapi import APIRouter, Depends
import structlog

from models.chat import (
    ChatMessageRequest,
    ChatMessageResponse,
    ChatReplyResponse,
    ChatSessionResponse,
)
from services.auth_service import UserSession, get_current_session
from services.chat_service import get_chat_service
from utils.responses import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/chat", tags=["Chat"])


@router.post("/sessions", response_model=ChatSessionResponse, status_code=201)
async def create_session(session: UserSession = Depends(get_current_session)):
    try:
        return get_chat_service().create_session(session)
    except Exception as e:
        return handle_error(e)


@router.get("/sessions/{session_id}/messages", response_model=list[ChatMessageResponse])
async def get_messages(
    session_id: str,
    session: UserSession = Depends(get_current_session),
):
    """Conversation history, oldest first."""
    try:
        service = get_chat_service()
        service.get_session(session, session_id)
        return service.get_messages(session_id)
    except Exception as e:
        return handle_error(e)


@router.post("/messages", response_model=ChatReplyResponse)
async def send_message(
    request: ChatMessageRequest,
    session: UserSession = Depends(get_current_session),
):
    """
    Send a message and get the assistant's reply.

    Starts a new session when session_id is omitted.
    """
    try:
        return get_chat_service().send_message(session, request.content, request.session_id)
    except Exception as e:
        return handle_error(e)
