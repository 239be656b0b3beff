"""
Authentication service.

Wraps the Supabase auth provider and turns its users into explicit
UserSession objects. Services receive the session as an argument instead
of reading a global "current user".

Calls that create or end a session run on a throwaway client from
create_auth_client(); the shared client only resolves bearer tokens, so its
table queries never carry a signed-in user's JWT.
"""

from dataclasses import dataclass
from typing import Optional
import structlog
from fastapi import Header

from config import create_auth_client, get_supabase_client, settings
from exceptions import AuthenticationError, ExternalServiceError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class UserSession:
    """The authenticated user a request acts for."""
    user_id: str
    email: Optional[str] = None
    access_token: Optional[str] = None


def _session_from_auth_response(response, fallback_email: Optional[str] = None) -> UserSession:
    user = getattr(response, "user", None)
    if user is None:
        raise AuthenticationError("Authentication failed", code="AUTH_FAILED")
    session = getattr(response, "session", None)
    return UserSession(
        user_id=user.id,
        email=getattr(user, "email", None) or fallback_email,
        access_token=getattr(session, "access_token", None),
    )


class AuthService:
    """
    Sign-up, sign-in and token resolution against the auth provider.
    """

    def __init__(self):
        self.db = get_supabase_client()

    def sign_up(self, email: str, password: str, full_name: str) -> UserSession:
        """
        Create an account and its profile row.

        A failed profile insert is logged but does not undo the sign-up.

        Raises:
            AuthenticationError: If the provider rejects the sign-up
        """
        logger.info("signing_up", email=email)

        try:
            response = create_auth_client().auth.sign_up({"email": email, "password": password})
        except Exception as e:
            logger.warning("sign_up_failed", email=email, error=str(e))
            raise AuthenticationError(str(e), code="SIGN_UP_FAILED")

        user_session = _session_from_auth_response(response, fallback_email=email)

        try:
            self.db.table("profiles").insert({
                "id": user_session.user_id,
                "full_name": full_name,
                "email": email,
            }).execute()
        except Exception as e:
            logger.error("profile_create_failed", user_id=user_session.user_id, error=str(e))

        logger.info("signed_up", user_id=user_session.user_id)
        return user_session

    def sign_in(self, email: str, password: str) -> UserSession:
        """
        Password sign-in.

        Raises:
            AuthenticationError: On wrong credentials
        """
        try:
            response = create_auth_client().auth.sign_in_with_password({"email": email, "password": password})
        except Exception as e:
            logger.warning("sign_in_failed", email=email, error=str(e))
            raise AuthenticationError(str(e), code="SIGN_IN_FAILED")

        user_session = _session_from_auth_response(response, fallback_email=email)
        logger.info("signed_in", user_id=user_session.user_id)
        return user_session

    def google_sign_in_url(self, redirect_to: Optional[str] = None) -> str:
        """
        URL that starts the Google OAuth flow.

        Raises:
            ExternalServiceError: If the provider cannot build the URL
        """
        options = {
            "query_params": {"access_type": "offline", "prompt": "consent"},
        }
        redirect = redirect_to or settings.oauth_redirect_url
        if redirect:
            options["redirect_to"] = redirect

        try:
            response = create_auth_client().auth.sign_in_with_oauth({"provider": "google", "options": options})
        except Exception as e:
            logger.error("google_sign_in_failed", error=str(e))
            raise ExternalServiceError("auth", f"Failed to sign in with Google: {e}")

        return response.url

    def sign_out(self, session: UserSession) -> None:
        """
        Revoke the refresh tokens behind the session's access token.

        The access token itself stays valid until it expires.

        Raises:
            AuthenticationError: If the session carries no access token
            ExternalServiceError: If the provider rejects the call
        """
        if not session.access_token:
            raise AuthenticationError()

        try:
            create_auth_client().auth.admin.sign_out(session.access_token)
        except Exception as e:
            logger.error("sign_out_failed", user_id=session.user_id, error=str(e))
            raise ExternalServiceError("auth", str(e))
        logger.info("signed_out", user_id=session.user_id)

    def session_from_token(self, token: str) -> UserSession:
        """
        Resolve a bearer token to a session.

        Raises:
            AuthenticationError: If the token is empty, expired or unknown
        """
        if not token:
            raise AuthenticationError()

        try:
            response = self.db.auth.get_user(token)
        except Exception as e:
            logger.info("token_rejected", error=str(e))
            raise AuthenticationError("Session expired or invalid", code="INVALID_SESSION")

        if response is None or getattr(response, "user", None) is None:
            raise AuthenticationError("Session expired or invalid", code="INVALID_SESSION")

        return UserSession(
            user_id=response.user.id,
            email=getattr(response.user, "email", None),
            access_token=token,
        )


# Singleton instance
_auth_service: Optional[AuthService] = None


def get_auth_service() -> AuthService:
    """Get or create AuthService instance."""
    global _auth_service
    if _auth_service is None:
        _auth_service = AuthService()
    return _auth_service


def get_current_session(authorization: Optional[str] = Header(None)) -> UserSession:
    """
    FastAPI dependency: session for the `Authorization: Bearer <token>` header.

    Raises:
        AuthenticationError: 401 when the header is missing or the token invalid
    """
    if not authorization or not authorization.lower().startswith("bearer "):
        raise AuthenticationError()
    token = authorization.split(" ", 1)[1].strip()
    return get_auth_service().session_from_token(token)
