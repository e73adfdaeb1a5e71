from fastapi import Request
from redis import Redis
from typing import TYPE_CHECKING


RedisClient = Redis
if TYPE_CHECKING:
    RedisClient = Redis[str]  # type: ignore


def create_redis_client(redis_url: str) -> RedisClient:
    try:
        return Redis.from_url(redis_url, decode_responses=True)
    except Exception as e:
        raise RuntimeError("Failed to create Redis client") from e


def get_redis_client(request: Request) -> RedisClient:
    return request.app.state.redis_client


def check_redis_connection(redis_client: RedisClient) -> None:
    if not redis_client.ping():
        raise ConnectionError("Redis did not respond to ping")
