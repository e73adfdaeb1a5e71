import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from src.async_tasks.client import TaskHandle
from src.common.current_datetime import get_current_datetime

logger = logging.getLogger(__name__)


@dataclass
class TrackedQuestion:
    handle: TaskHandle
    question: str
    project_id: str | None
    submitted_at: datetime
    completed_at: datetime | None = None


class QuestionRegistry:
    """Holds the handles of questions submitted through this process.

    Finished questions are kept for ``retention`` after completion so
    callers can read the answer, then dropped.
    """

    def __init__(self, retention: timedelta = timedelta(hours=1)) -> None:
        self.retention = retention
        self._questions: dict[str, TrackedQuestion] = {}

    def _evict_expired(self) -> None:
        cutoff = get_current_datetime() - self.retention
        expired = [
            task_id
            for task_id, tracked in self._questions.items()
            if tracked.completed_at is not None and tracked.completed_at <= cutoff
        ]
        for task_id in expired:
            del self._questions[task_id]

        if expired:
            logger.debug(f"Evicted {len(expired)} finished questions")

    def add(self, tracked: TrackedQuestion) -> None:
        self._evict_expired()
        self._questions[tracked.handle.id] = tracked

    def get(self, task_id: str) -> TrackedQuestion | None:
        return self._questions.get(task_id)

    def list(self) -> list[TrackedQuestion]:
        self._evict_expired()
        return sorted(self._questions.values(), key=lambda q: q.submitted_at)

    async def shutdown(self) -> None:
        pollers = []
        for tracked in self._questions.values():
            tracked.handle.cancel()
            if tracked.handle.poller:
                pollers.append(tracked.handle.poller)

        if pollers:
            logger.info(f"Waiting for {len(pollers)} question pollers to stop")
            await asyncio.gather(*pollers, return_exceptions=True)
