"""
Hugging Face Inference API integration.

Single proxied text-generation call used for campaign scripts and the
admissions chat assistant.
"""

import json
from typing import Any, Optional
import requests
import structlog

from config import settings
from exceptions import InferenceError, InferenceNotConfiguredError

logger = structlog.get_logger(__name__)


# Fixed generation parameters for the instruction-tuned model
GENERATION_PARAMETERS = {
    "max_new_tokens": 500,
    "temperature": 0.7,
    "do_sample": True,
    "return_full_text": False,
    "repetition_penalty": 1.1,
}


def get_model_url(model: Optional[str] = None) -> str:
    """Endpoint URL for a model on the inference API."""
    base = settings.huggingface_api_url.rstrip("/")
    return f"{base}/{model or settings.huggingface_model}"


def extract_generated_text(data: Any) -> str:
    """
    Pull the generated text out of an inference response.

    Accepts the shapes the API returns: a list of generations, a single
    generation object or a bare string. Anything else is returned as its
    JSON text.
    """
    if isinstance(data, list) and data:
        first = data[0]
        if isinstance(first, dict):
            text = first.get("generated_text") or first.get("translation_text") or ""
        else:
            text = str(first)
    elif isinstance(data, dict) and data.get("generated_text"):
        text = data["generated_text"]
    elif isinstance(data, str):
        text = data
    else:
        logger.warning("inference_unexpected_response", response=json.dumps(data)[:200])
        text = json.dumps(data)

    return text.strip()


def generate_text(prompt: str, model: Optional[str] = None) -> str:
    """
    Generate text for a prompt.

    Args:
        prompt: Prompt text
        model: Model id (defaults to the configured model)

    Returns:
        Generated text, trimmed

    Raises:
        InferenceError: Empty prompt, network failure, non-2xx or non-JSON response
        InferenceNotConfiguredError: No API token configured
    """
    if not prompt or not prompt.strip():
        raise InferenceError("Prompt is required")

    if not settings.inference_configured:
        logger.warning("inference_not_configured")
        raise InferenceNotConfiguredError()

    url = get_model_url(model)
    headers = {
        "Authorization": f"Bearer {settings.huggingface_api_token}",
        "Content-Type": "application/json",
    }
    payload = {"inputs": prompt, "parameters": GENERATION_PARAMETERS}

    logger.info(
        "inference_request",
        model=model or settings.huggingface_model,
        prompt_preview=prompt[:100],
    )

    try:
        response = requests.post(
            url,
            json=payload,
            headers=headers,
            timeout=settings.inference_timeout_seconds,
        )
    except requests.exceptions.RequestException as e:
        logger.error("inference_request_failed", error=str(e), error_type=type(e).__name__)
        raise InferenceError(f"Inference request failed: {e}")

    if not response.ok:
        logger.error(
            "inference_api_error",
            status_code=response.status_code,
            body=response.text[:500],
        )
        raise InferenceError(
            f"Hugging Face API error: {response.text}",
            details={"status_code": response.status_code},
        )

    try:
        data = response.json()
    except ValueError as e:
        logger.error("inference_response_not_json", error=str(e))
        raise InferenceError("Inference API returned a malformed response")

    text = extract_generated_text(data)
    logger.info("inference_complete", length=len(text))
    return text
