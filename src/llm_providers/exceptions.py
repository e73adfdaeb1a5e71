import logging
from openai import APIError, APIStatusError

from src.common.exceptions import (
    KnownException,
    ResourceNotFoundException,
    ResourceType,
    UpstreamServiceException,
)

logger = logging.getLogger(__name__)

MODEL_NOT_FOUND_MARKERS = (
    "Model Not Exists",  # DeepSeek
    "is not found for API version",  # Gemini
)


def handle_openai_client_error(e: APIError, model: str) -> None:
    """Translate an OpenAI SDK error into an application exception."""
    message = e.message or ""
    status_code = e.status_code if isinstance(e, APIStatusError) else None

    if (
        e.code == "model_not_found"
        or status_code == 404
        or any(marker in message for marker in MODEL_NOT_FOUND_MARKERS)
    ):
        raise ResourceNotFoundException(
            ResourceType.MODEL,
            model,
            f"Model '{model}' not found, or you do not have access to it.",
        )

    if status_code in (401, 403):
        raise KnownException("The model provider rejected the configured API key.")

    if status_code == 429:
        raise UpstreamServiceException(
            "Model provider", "rate limit or quota exceeded, try again later"
        )

    logger.error(f"Model '{model}' call failed: {e}")

    raise KnownException(
        "Error calling model. Verify the model exists and you have access to it."
    )
