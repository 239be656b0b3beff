"""
Text generation proxy.

Forwards one prompt to the hosted model and returns the generated text in
the `{generatedText, task, model}` shape the dashboard expects.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
import structlog

from config import settings
from integrations.huggingface import generate_text
from models.ai import GenerateRequest, GenerateResponse
from services.auth_service import UserSession, get_current_session
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/ai", tags=["AI"])


@router.post("/generate", response_model=GenerateResponse)
async def generate(
    request: GenerateRequest,
    session: UserSession = Depends(get_current_session),
):
    """
    Generate text for a prompt.

    Raises:
        500: Empty prompt or upstream model failure
        503: Inference not configured
    """
    try:
        text = generate_text(request.prompt)
        return GenerateResponse(
            generatedText=text,
            task=request.task,
            model=settings.huggingface_model,
        )

    except Exception as e:
        logger.error("generate_failed", user_id=session.user_id, error=str(e))
        status_code = e.status_code if isinstance(e, AppError) else 500
        message = e.message if isinstance(e, AppError) else str(e)
        return JSONResponse(
            status_code=status_code,
            content={
                "error": message,
                "details": "Check the server logs for more information",
            },
        )
