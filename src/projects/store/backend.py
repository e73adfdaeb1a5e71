from src.common.redis import RedisClient
from src.config import Settings
from src.projects.store.base import ProjectStore
from src.projects.store.memory.store import InMemoryProjectStore
from src.projects.store.redis.store import RedisProjectStore


def get_project_store_backend(
    redis_client: RedisClient,
    settings: Settings,
) -> ProjectStore:
    if settings.PROJECT_STORE_BACKEND == "redis":
        return RedisProjectStore(
            redis_client=redis_client,
            key_prefix=settings.PROJECT_STORE_NAMESPACE,
        )
    elif settings.PROJECT_STORE_BACKEND == "memory":
        return InMemoryProjectStore()
    else:
        raise ValueError(
            f"Unsupported project store backend: {settings.PROJECT_STORE_BACKEND}"
        )
