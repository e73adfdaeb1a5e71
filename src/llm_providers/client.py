from dataclasses import dataclass
from typing import Optional
from fastapi import Depends
from openai import OpenAI
from src.config import Settings, get_settings
from src.llm_providers.constants import (
    DEEPSEEK_BASE_URL,
    GEMINI_OPENAI_BASE_URL,
    ChatProvider,
)


@dataclass
class OpenAIConfig:
    api_key: str
    base_url: Optional[str] = None


def create_client(config: OpenAIConfig) -> OpenAI:
    return OpenAI(api_key=config.api_key, base_url=config.base_url)


def get_openai_config(provider: ChatProvider, settings: Settings) -> OpenAIConfig:
    if provider == ChatProvider.GEMINI:
        if not settings.GEMINI_API_KEY:
            raise ValueError("GEMINI_API_KEY is not set")
        return OpenAIConfig(
            api_key=settings.GEMINI_API_KEY, base_url=GEMINI_OPENAI_BASE_URL
        )

    if provider == ChatProvider.OLLAMA:
        return OpenAIConfig(api_key="ollama", base_url=settings.OLLAMA_BASE_URL)

    if provider == ChatProvider.OPENAI:
        if not settings.OPENAI_API_KEY:
            raise ValueError("OPENAI_API_KEY is not set")
        return OpenAIConfig(api_key=settings.OPENAI_API_KEY)

    if provider == ChatProvider.DEEPSEEK:
        if not settings.DEEPSEEK_API_KEY:
            raise ValueError("DEEPSEEK_API_KEY is not set")
        return OpenAIConfig(api_key=settings.DEEPSEEK_API_KEY, base_url=DEEPSEEK_BASE_URL)

    if provider == ChatProvider.OPENAI_COMPATIBLE:
        if not settings.CHAT_OPENAI_COMPATIBLE_API_KEY:
            raise ValueError("CHAT_OPENAI_COMPATIBLE_API_KEY is not set")
        return OpenAIConfig(
            api_key=settings.CHAT_OPENAI_COMPATIBLE_API_KEY,
            base_url=settings.CHAT_OPENAI_COMPATIBLE_BASE_URL,
        )

    raise ValueError(f"Unknown provider: {provider}")


def get_chat_openai_client(settings: Settings = Depends(get_settings)) -> OpenAI:
    config = get_openai_config(provider=settings.CHAT_PROVIDER, settings=settings)
    return create_client(config)
