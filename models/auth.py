"""
Authentication request/response models.
"""

from typing import Optional
from pydantic import Field

from models.base import BaseSchema


class SignUpRequest(BaseSchema):
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=6)
    full_name: str = Field(..., min_length=1, max_length=200)


class SignInRequest(BaseSchema):
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=1)


class SessionResponse(BaseSchema):
    """Authenticated session handed back to the client."""

    user_id: str
    email: Optional[str] = None
    access_token: Optional[str] = None
    message: str


class OAuthUrlResponse(BaseSchema):
    provider: str
    url: str
