import asyncio
import json
import logging
from abc import ABC, abstractmethod
from types import TracebackType
from typing import Any, Mapping, Type

from aiohttp import ClientError, ClientSession, ClientTimeout

from src.async_tasks.exceptions import TaskTransportError
from src.async_tasks.schemas import TaskInput

logger = logging.getLogger(__name__)


class TaskTransport(ABC):
    @abstractmethod
    async def create_task(self, task_input: TaskInput) -> Any:
        """Submit work and return the decoded response body."""

    @abstractmethod
    async def fetch_result(self, task_id: str) -> Any:
        """Fetch the current result for a task and return the decoded body."""

    async def close(self) -> None:
        return None


class AiohttpTaskTransport(TaskTransport):
    def __init__(
        self,
        *,
        base_url: str,
        create_path: str,
        result_path: str,
        user_agent: str,
        timeout: float,
    ):
        self.create_url = f"{base_url.rstrip('/')}{create_path}"
        self.result_url = f"{base_url.rstrip('/')}{result_path}"
        self.session: ClientSession = ClientSession(
            headers={
                "Accept": "application/json",
                "User-Agent": user_agent,
            },
            timeout=ClientTimeout(total=timeout),
        )

    async def __aenter__(self):
        return self

    async def __aexit__(
        self, exc_type: Type[Exception], exc: Exception, tb: TracebackType
    ):
        await self.close()

    async def close(self) -> None:
        if not self.session.closed:
            await self.session.close()

    def _build_payload(self, task_input: TaskInput) -> dict[str, Any]:
        if isinstance(task_input, Mapping):
            return dict(task_input)
        return {"question": task_input}

    async def _request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, str] | None = None,
        json_body: dict[str, Any] | None = None,
    ) -> Any:
        try:
            async with self.session.request(
                method, url, params=params, json=json_body
            ) as response:
                if response.status >= 400:
                    raise TaskTransportError(
                        f"{method} {url} returned HTTP {response.status}",
                        status=response.status,
                    )
                text = await response.text()
        except TaskTransportError:
            raise
        except asyncio.TimeoutError as e:
            raise TaskTransportError(f"{method} {url} timed out") from e
        except UnicodeDecodeError as e:
            raise TaskTransportError(
                f"{method} {url} returned a body that could not be decoded: {e}"
            ) from e
        except ClientError as e:
            raise TaskTransportError(f"{method} {url} failed: {e}") from e

        try:
            return json.loads(text)
        except json.JSONDecodeError:
            logger.warning(f"Non-JSON response from {url}")
            return text

    async def create_task(self, task_input: TaskInput) -> Any:
        logger.info(f"Submitting task to {self.create_url}")
        return await self._request(
            "POST", self.create_url, json_body=self._build_payload(task_input)
        )

    async def fetch_result(self, task_id: str) -> Any:
        return await self._request(
            "GET", self.result_url, params={"task_id": task_id}
        )
