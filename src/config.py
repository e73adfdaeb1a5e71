from functools import lru_cache
from typing import Any, Literal
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.llm_providers.constants import ChatProvider
from src.llm_providers.validators import validate_provider_settings


class Settings(BaseSettings):
    # Application Configuration
    APP_VERSION: str = "v0.1.x"
    API_NAME: str = "I2O Clinical Research Accelerator"
    API_SUMMARY: str = "AI-Driven End-to-End Automation of Clinical Research"

    I2O_API_KEY: str | None = None

    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    USER_AGENT: str = "I2O"

    CORS_ENABLED: bool = False
    CORS_ORIGINS: list[str] = ["*"]

    # Provider Configuration
    CHAT_PROVIDER: ChatProvider = ChatProvider.GEMINI

    GEMINI_API_KEY: str | None = None

    OPENAI_API_KEY: str | None = None

    OLLAMA_BASE_URL: str | None = None

    DEEPSEEK_API_KEY: str | None = None

    CHAT_OPENAI_COMPATIBLE_BASE_URL: str | None = None
    CHAT_OPENAI_COMPATIBLE_API_KEY: str | None = None

    # Model Settings
    DEFAULT_CHAT_MODEL: str = "gemini-2.5-flash"

    # Database Configuration
    REDIS_URL: str = "redis://localhost:6379"

    PROJECT_STORE_BACKEND: Literal["redis", "memory"] = "redis"
    PROJECT_STORE_NAMESPACE: str = "projects"

    # Question Answering Task API
    TASK_API_BASE_URL: str = "https://i20backend.onrender.com"
    TASK_API_CREATE_PATH: str = "/api/create-task"
    TASK_API_RESULT_PATH: str = "/api/get-answer"
    TASK_API_TIMEOUT: float = 30
    TASK_POLL_INTERVAL: float = 20
    TASK_MAX_POLL_ATTEMPTS: int | None = None
    TASK_MAX_POLL_DURATION: float | None = None  # Seconds
    QUESTION_RETENTION_SECONDS: float = 3600

    # OpenTelemetry Settings
    OTEL_ENABLED: bool = False
    OTEL_SERVICE_NAME: str = "i2o"

    @model_validator(mode="after")
    def validate_llm_providers(self):
        return validate_provider_settings(self)

    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: Any):
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("CORS_ORIGINS", mode="before")
    def validate_list_from_string(cls, v: Any):
        if isinstance(v, str):
            return [item.strip() for item in v.split(",")]
        return v

    @field_validator("TASK_POLL_INTERVAL")
    def validate_poll_interval(cls, v: float):
        if v <= 0:
            raise ValueError("TASK_POLL_INTERVAL must be greater than 0")
        return v

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings():
    return Settings()
