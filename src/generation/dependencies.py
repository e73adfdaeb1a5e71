from fastapi import Depends
from openai import OpenAI

from src.config import Settings, get_settings
from src.generation.service import GenerationService
from src.llm_providers.client import get_chat_openai_client


def get_generation_service(
    settings: Settings = Depends(get_settings),
    openai_client: OpenAI = Depends(get_chat_openai_client),
) -> GenerationService:
    return GenerationService(
        openai_client=openai_client,
        model=settings.DEFAULT_CHAT_MODEL,
    )
