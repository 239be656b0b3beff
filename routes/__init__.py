"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.auth import router as auth_router
from routes.candidates import router as candidates_router
from routes.campaigns import router as campaigns_router
from routes.ai import router as ai_router
from routes.chat import router as chat_router
from routes.profile import router as profile_router
from routes.dashboard import router as dashboard_router

__all__ = [
    "auth_router",
    "candidates_router",
    "campaigns_router",
    "ai_router",
    "chat_router",
    "profile_router",
    "dashboard_router",
]
