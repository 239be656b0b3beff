"""
Admissions chat assistant.

Stores conversations in chat_sessions / chat_messages and answers each
user message with one call to the hosted model, wrapped in an
admissions-outreach context prompt.
"""

from datetime import datetime
from typing import Optional
import structlog

from config import get_supabase_client
from integrations.huggingface import generate_text
from models.chat import ChatMessageResponse, ChatReplyResponse, ChatSessionResponse
from services.auth_service import UserSession
from exceptions import ChatSessionNotFoundError, DatabaseError

logger = structlog.get_logger(__name__)


GREETING = (
    "Hello! I'm your AI assistant for AdmitConnect. I can help you create campaign "
    "scripts, generate personalized messages, analyze candidate data, and provide "
    "strategic advice for your outreach campaigns. How can I assist you today?"
)

CONTEXT_PROMPT = """You are an AI assistant specialized in college admissions and student outreach. The user is using AdmitConnect AI platform for managing admission campaigns.

Context: You help with:
- Creating effective campaign scripts for WhatsApp and voice calls
- Generating personalized messages for prospective students
- Analyzing candidate data and suggesting targeting strategies
- Providing advice on admission outreach best practices
- Writing compelling content for different courses and programs

User message: {message}

Please provide a helpful, professional response focused on college admissions and student outreach."""


def build_prompt(message: str) -> str:
    return CONTEXT_PROMPT.format(message=message)


class ChatService:
    """Chat sessions, message history and assistant replies."""

    def __init__(self):
        self.db = get_supabase_client()
        self.sessions_table = "chat_sessions"
        self.messages_table = "chat_messages"

    def create_session(self, session: UserSession) -> ChatSessionResponse:
        """
        Start a new conversation.

        Raises:
            DatabaseError: If the insert fails
        """
        row = {
            "user_id": session.user_id,
            "session_name": f"Chat {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
        }

        try:
            result = self.db.table(self.sessions_table).insert(row).execute()
        except Exception as e:
            logger.error("create_chat_session_failed", user_id=session.user_id, error=str(e))
            raise DatabaseError("insert", str(e))

        chat_session = ChatSessionResponse(**result.data[0])
        logger.info("chat_session_created", session_id=chat_session.id, user_id=session.user_id)
        return chat_session

    def get_session(self, session: UserSession, session_id: str) -> ChatSessionResponse:
        """
        Raises:
            ChatSessionNotFoundError: If the session doesn't exist for this user
        """
        try:
            result = (
                self.db.table(self.sessions_table)
                .select("*")
                .eq("id", session_id)
                .eq("user_id", session.user_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error("get_chat_session_failed", session_id=session_id, error=str(e))
            raise DatabaseError("select", str(e))

        if not result.data:
            raise ChatSessionNotFoundError(session_id)
        return ChatSessionResponse(**result.data[0])

    def get_messages(self, session_id: str) -> list[ChatMessageResponse]:
        """
        Messages of a session in order; an empty session shows the greeting.
        """
        try:
            result = (
                self.db.table(self.messages_table)
                .select("*")
                .eq("session_id", session_id)
                .order("created_at")
                .execute()
            )
        except Exception as e:
            logger.error("get_chat_messages_failed", session_id=session_id, error=str(e))
            raise DatabaseError("select", str(e))

        messages = [ChatMessageResponse(**row) for row in result.data]
        if not messages:
            return [self.greeting()]
        return messages

    def send_message(
        self,
        session: UserSession,
        content: str,
        session_id: Optional[str] = None,
    ) -> ChatReplyResponse:
        """
        Save the user message, ask the model and save its reply.

        Creates a session when session_id is not given.

        Raises:
            ChatSessionNotFoundError: If session_id is unknown
            InferenceError: If the model call fails (the user message stays saved)
            DatabaseError: If the session cannot be created or the reply saved
        """
        if session_id:
            self.get_session(session, session_id)
        else:
            session_id = self.create_session(session).id

        self._save_message(session_id, "user", content)

        reply = generate_text(build_prompt(content))

        saved = self._save_message(session_id, "assistant", reply)
        if saved is None:
            raise DatabaseError("insert", "assistant message was not saved")

        logger.info("chat_reply_sent", session_id=session_id, length=len(reply))
        return ChatReplyResponse(session_id=session_id, message=saved)

    def greeting(self) -> ChatMessageResponse:
        return ChatMessageResponse(
            id="greeting",
            role="assistant",
            content=GREETING,
            created_at=datetime.utcnow(),
        )

    def _save_message(self, session_id: str, role: str, content: str) -> Optional[ChatMessageResponse]:
        try:
            result = self.db.table(self.messages_table).insert({
                "session_id": session_id,
                "role": role,
                "content": content,
            }).execute()
        except Exception as e:
            logger.error("save_chat_message_failed", session_id=session_id, role=role, error=str(e))
            raise DatabaseError("insert", str(e))

        if not result.data:
            return None
        return ChatMessageResponse(**result.data[0])


# Singleton instance
_chat_service: Optional[ChatService] = None


def get_chat_service() -> ChatService:
    """Get or create ChatService instance."""
    global _chat_service
    if _chat_service is None:
        _chat_service = ChatService()
    return _chat_service
