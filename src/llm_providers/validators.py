from __future__ import annotations
from typing import TYPE_CHECKING

from src.llm_providers.constants import ChatProvider

if TYPE_CHECKING:
    from src.config import Settings

# Settings that must be non-empty for each chat provider
REQUIRED_PROVIDER_SETTINGS: dict[ChatProvider, tuple[str, ...]] = {
    ChatProvider.GEMINI: ("GEMINI_API_KEY",),
    ChatProvider.OPENAI: ("OPENAI_API_KEY",),
    ChatProvider.OLLAMA: ("OLLAMA_BASE_URL",),
    ChatProvider.DEEPSEEK: ("DEEPSEEK_API_KEY",),
    ChatProvider.OPENAI_COMPATIBLE: (
        "CHAT_OPENAI_COMPATIBLE_BASE_URL",
        "CHAT_OPENAI_COMPATIBLE_API_KEY",
    ),
}


def validate_provider_settings(settings: Settings) -> Settings:
    provider = settings.CHAT_PROVIDER
    missing = [
        name
        for name in REQUIRED_PROVIDER_SETTINGS.get(provider, ())
        if not getattr(settings, name)
    ]

    if missing:
        raise ValueError(
            f"{', '.join(missing)} must be set when CHAT_PROVIDER is '{provider.value}'"
        )

    return settings
