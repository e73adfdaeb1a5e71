from typing import Any
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from src.config import Settings, get_settings
from src.common.redis import RedisClient, check_redis_connection, get_redis_client
from src.questions.dependencies import get_question_registry
from src.questions.registry import QuestionRegistry

router = APIRouter()

HEALTHY_EXAMPLE = {
    "api": {"status": "ok"},
    "redis": {"status": "ok"},
    "task_api": {"status": "ok", "base_url": "http://localhost:8000", "in_flight": 2},
}


@router.get(
    "/healthcheck",
    tags=["Healthcheck"],
    status_code=status.HTTP_200_OK,
    responses={
        200: {
            "description": "Service is healthy",
            "content": {"application/json": {"example": HEALTHY_EXAMPLE}},
        },
        503: {
            "description": "The project store is unreachable",
            "content": {
                "application/json": {
                    "example": {
                        **HEALTHY_EXAMPLE,
                        "redis": {"status": "error", "message": "Connection refused"},
                    }
                }
            },
        },
    },
)
def healthcheck(
    settings: Settings = Depends(get_settings),
    redis_client: RedisClient = Depends(get_redis_client),
    registry: QuestionRegistry = Depends(get_question_registry),
) -> JSONResponse:
    in_flight = sum(1 for tracked in registry.list() if not tracked.handle.done())
    report: dict[str, Any] = {
        "api": {"status": "ok"},
        "task_api": {
            "status": "ok",
            "base_url": settings.TASK_API_BASE_URL,
            "in_flight": in_flight,
        },
    }

    # Redis is only needed by the redis project store
    if settings.PROJECT_STORE_BACKEND != "redis":
        report["redis"] = {
            "status": "skipped",
            "message": f"Project store backend is '{settings.PROJECT_STORE_BACKEND}'.",
        }
        return JSONResponse(status_code=status.HTTP_200_OK, content=report)

    try:
        check_redis_connection(redis_client)
    except Exception as e:
        report["redis"] = {"status": "error", "message": str(e)}
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=report
        )

    report["redis"] = {"status": "ok"}
    return JSONResponse(status_code=status.HTTP_200_OK, content=report)
