"""
Authentication API routes.

Thin wrappers over the managed auth provider.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query

from models.auth import OAuthUrlResponse, SessionResponse, SignInRequest, SignUpRequest
from services.auth_service import UserSession, get_auth_service, get_current_session
from utils.responses import handle_error

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/signup", response_model=SessionResponse, status_code=201)
async def sign_up(request: SignUpRequest):
    try:
        session = get_auth_service().sign_up(request.email, request.password, request.full_name)
        return SessionResponse(
            user_id=session.user_id,
            email=session.email,
            access_token=session.access_token,
            message="Welcome to AdmitConnect AI. You can now access your dashboard.",
        )
    except Exception as e:
        return handle_error(e)


@router.post("/signin", response_model=SessionResponse)
async def sign_in(request: SignInRequest):
    try:
        session = get_auth_service().sign_in(request.email, request.password)
        return SessionResponse(
            user_id=session.user_id,
            email=session.email,
            access_token=session.access_token,
            message="Successfully signed in to your account.",
        )
    except Exception as e:
        return handle_error(e)


@router.get("/google", response_model=OAuthUrlResponse)
async def google_sign_in(redirect_to: Optional[str] = Query(None)):
    """URL to send the browser to for Google sign-in."""
    try:
        url = get_auth_service().google_sign_in_url(redirect_to)
        return OAuthUrlResponse(provider="google", url=url)
    except Exception as e:
        return handle_error(e)


@router.post("/signout")
async def sign_out(session: UserSession = Depends(get_current_session)):
    try:
        get_auth_service().sign_out(session)
        return {"success": True, "message": "You have been successfully signed out."}
    except Exception as e:
        return handle_error(e)
