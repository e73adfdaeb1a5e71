import secrets
from fastapi import Depends, HTTPException, Security, status
from fastapi.security.api_key import APIKeyHeader

from src.config import Settings, get_settings


api_key_header = APIKeyHeader(
    name="x-api-key",
    auto_error=False,
    description="Required when the server is started with I2O_API_KEY set.",
)


def get_api_key(
    api_key: str | None = Security(api_key_header),
    settings: Settings = Depends(get_settings),
) -> str | None:
    expected = settings.I2O_API_KEY
    if not expected:
        # Open deployment
        return None

    if not api_key or not secrets.compare_digest(api_key, expected):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="API key is missing" if not api_key else "API key is invalid",
        )

    return api_key
