from fastapi import Request

from src.async_tasks.client import AsyncTaskClient
from src.async_tasks.transport import AiohttpTaskTransport
from src.config import Settings


def create_task_client(settings: Settings) -> AsyncTaskClient:
    transport = AiohttpTaskTransport(
        base_url=settings.TASK_API_BASE_URL,
        create_path=settings.TASK_API_CREATE_PATH,
        result_path=settings.TASK_API_RESULT_PATH,
        user_agent=settings.USER_AGENT,
        timeout=settings.TASK_API_TIMEOUT,
    )
    return AsyncTaskClient(
        transport=transport,
        poll_interval=settings.TASK_POLL_INTERVAL,
        max_attempts=settings.TASK_MAX_POLL_ATTEMPTS,
        max_duration=settings.TASK_MAX_POLL_DURATION,
    )


def get_task_client(request: Request) -> AsyncTaskClient:
    return request.app.state.task_client
