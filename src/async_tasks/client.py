import asyncio
import logging
from typing import Any, Callable, Mapping

from src.async_tasks.classifier import classify_poll_response
from src.async_tasks.exceptions import (
    InvalidTaskTransition,
    PollTransportError,
    SubmissionError,
    TaskTransportError,
    TimeoutExceeded,
    UnrecognizedResponse,
    ValidationError,
)
from src.async_tasks.schemas import (
    PollPending,
    PollSucceeded,
    Task,
    TaskCancelled,
    TaskFailed,
    TaskInput,
    TaskOutcome,
    TaskStatus,
    TaskSucceeded,
)
from src.async_tasks.transport import TaskTransport

logger = logging.getLogger(__name__)

OutcomeCallback = Callable[[Task, TaskOutcome], None]


class CancellationToken:
    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    async def wait(self, timeout: float) -> bool:
        """Sleep for ``timeout`` seconds, returning early with True if cancelled."""
        if self.cancelled:
            return True
        try:
            await asyncio.wait_for(self._event.wait(), timeout=timeout)
        except asyncio.TimeoutError:
            return False
        return True


class TaskHandle:
    """Caller-owned view of a submitted task and its poll loop."""

    def __init__(
        self,
        task: Task,
        *,
        on_outcome: OutcomeCallback | None = None,
    ) -> None:
        self.task = task
        self.token = CancellationToken()
        self.poller: asyncio.Task[None] | None = None
        self._outcome: asyncio.Future[TaskOutcome] = (
            asyncio.get_running_loop().create_future()
        )
        self._on_outcome = on_outcome

    @property
    def id(self) -> str:
        if self.task.id is None:
            raise InvalidTaskTransition("Task has not been assigned an id")
        return self.task.id

    @property
    def status(self) -> TaskStatus:
        return self.task.status

    def done(self) -> bool:
        return self._outcome.done()

    async def wait(self) -> TaskOutcome:
        return await asyncio.shield(self._outcome)

    def cancel(self) -> None:
        if self.task.status.is_terminal:
            return
        self.token.cancel()
        self.finish(TaskCancelled())

    def finish(self, outcome: TaskOutcome) -> bool:
        """Apply a terminal outcome once. Returns False if already terminal."""
        if self.task.status.is_terminal:
            logger.debug(
                f"Ignoring {type(outcome).__name__} for task '{self.task.id}' "
                f"already {self.task.status.value}"
            )
            return False

        self.task.apply(outcome)
        self._outcome.set_result(outcome)

        if self._on_outcome:
            try:
                self._on_outcome(self.task, outcome)
            except Exception:
                logger.exception(f"Outcome callback failed for task '{self.task.id}'")

        return True


def _is_blank(task_input: Any) -> bool:
    if task_input is None:
        return True
    if isinstance(task_input, str):
        return not task_input.strip()
    if isinstance(task_input, Mapping):
        return all(_is_blank(value) for value in task_input.values())
    return False


class AsyncTaskClient:
    def __init__(
        self,
        *,
        transport: TaskTransport,
        poll_interval: float,
        max_attempts: int | None = None,
        max_duration: float | None = None,
    ):
        if poll_interval < 0:
            raise ValueError("poll_interval must not be negative")
        self.transport = transport
        self.poll_interval = poll_interval
        self.max_attempts = max_attempts
        self.max_duration = max_duration

    async def submit(
        self, task_input: TaskInput, on_outcome: OutcomeCallback | None = None
    ) -> TaskHandle:
        if _is_blank(task_input):
            raise ValidationError("Task input must not be empty")

        task = Task(input=task_input)

        try:
            body = await self.transport.create_task(task_input)
        except TaskTransportError as e:
            raise SubmissionError(f"Failed to submit task: {e}") from e

        task_id = body.get("task_id") if isinstance(body, Mapping) else None
        if not task_id or not isinstance(task_id, (str, int)):
            raise SubmissionError(
                "Failed to submit task: response did not include a 'task_id'"
            )

        task.mark_pending(str(task_id))
        logger.info(f"Task '{task.id}' submitted")

        handle = TaskHandle(task, on_outcome=on_outcome)
        handle.poller = asyncio.create_task(self._poll(handle))
        return handle

    def cancel(self, handle: TaskHandle) -> None:
        handle.cancel()

    async def run(self, task_input: TaskInput) -> TaskOutcome:
        handle = await self.submit(task_input)
        return await handle.wait()

    async def _poll(self, handle: TaskHandle) -> None:
        loop = asyncio.get_running_loop()
        started_at = loop.time()
        task_id = handle.id
        attempts = 0

        try:
            while True:
                if await handle.token.wait(self.poll_interval):
                    return

                if (
                    self.max_duration is not None
                    and loop.time() - started_at >= self.max_duration
                ):
                    handle.finish(
                        TaskFailed(
                            TimeoutExceeded(
                                task_id,
                                f"no result after {self.max_duration} seconds",
                            )
                        )
                    )
                    return

                attempts += 1
                try:
                    body = await self.transport.fetch_result(task_id)
                except TaskTransportError as e:
                    if handle.token.cancelled:
                        return
                    logger.error(f"Poll {attempts} for task '{task_id}' failed: {e}")
                    handle.finish(TaskFailed(PollTransportError(task_id, str(e))))
                    return

                if handle.token.cancelled:
                    logger.warning(
                        f"Discarding poll response for cancelled task '{task_id}'"
                    )
                    return

                response = classify_poll_response(body)

                if isinstance(response, PollSucceeded):
                    logger.info(f"Task '{task_id}' succeeded after {attempts} polls")
                    handle.finish(TaskSucceeded(response.result))
                    return

                if not isinstance(response, PollPending):
                    logger.error(
                        f"Task '{task_id}' returned an unrecognized response: {response.detail}"
                    )
                    handle.finish(
                        TaskFailed(UnrecognizedResponse(task_id, response.detail))
                    )
                    return

                if self.max_attempts is not None and attempts >= self.max_attempts:
                    handle.finish(
                        TaskFailed(
                            TimeoutExceeded(
                                task_id, f"still pending after {attempts} polls"
                            )
                        )
                    )
                    return
        except asyncio.CancelledError:
            handle.token.cancel()
            handle.finish(TaskCancelled())
            raise
        except Exception as e:
            logger.exception(f"Poll loop for task '{task_id}' failed")
            handle.finish(TaskFailed(PollTransportError(task_id, str(e))))
