"""
Text generation models.
"""

from pydantic import BaseModel, Field


class GenerateRequest(BaseModel):
    """Prompt forwarded to the hosted model."""

    prompt: str = Field("", description="Prompt text")
    task: str = Field("text-generation", description="Echoed back to the caller")


class GenerateResponse(BaseModel):
    """Generated text in the shape the dashboard client expects."""

    generatedText: str
    task: str
    model: str
