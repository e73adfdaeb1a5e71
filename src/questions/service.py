import logging

from src.async_tasks.client import AsyncTaskClient
from src.async_tasks.exceptions import SubmissionError, ValidationError
from src.async_tasks.schemas import Task, TaskFailed, TaskOutcome, TaskSucceeded
from src.common.current_datetime import get_current_datetime
from src.common.exceptions import (
    KnownException,
    ResourceNotFoundException,
    ResourceType,
    UpstreamServiceException,
)
from src.projects.store.base import ProjectStore
from src.questions.registry import QuestionRegistry, TrackedQuestion
from src.questions.schemas import CreateQuestionRequest, QuestionTask

logger = logging.getLogger(__name__)


class QuestionService:
    def __init__(
        self,
        *,
        task_client: AsyncTaskClient,
        registry: QuestionRegistry,
        project_store: ProjectStore,
    ):
        self.task_client = task_client
        self.registry = registry
        self.project_store = project_store

    def _to_view(self, tracked: TrackedQuestion) -> QuestionTask:
        task = tracked.handle.task
        return QuestionTask(
            id=tracked.handle.id,
            question=tracked.question,
            project_id=tracked.project_id,
            status=task.status,
            answer=task.result,
            error=str(task.failure_reason) if task.failure_reason else None,
            submitted_at=tracked.submitted_at,
            completed_at=tracked.completed_at,
        )

    def _get_tracked(self, task_id: str) -> TrackedQuestion:
        tracked = self.registry.get(task_id)
        if not tracked:
            raise ResourceNotFoundException(ResourceType.TASK, task_id)
        return tracked

    def _record_outcome(self, task: Task, outcome: TaskOutcome) -> None:
        if isinstance(outcome, TaskSucceeded):
            logger.info(f"Question task '{task.id}' answered")
        elif isinstance(outcome, TaskFailed):
            logger.warning(f"Question task '{task.id}' failed: {outcome.reason}")

        # Registered right after submit returns, before the poller first runs
        tracked = self.registry.get(task.id) if task.id else None
        if tracked:
            tracked.completed_at = get_current_datetime()

    async def ask(self, question_input: CreateQuestionRequest) -> QuestionTask:
        if question_input.project_id and not self.project_store.project_exists(
            question_input.project_id
        ):
            raise ResourceNotFoundException(
                ResourceType.PROJECT, question_input.project_id
            )

        submitted_at = get_current_datetime()

        try:
            handle = await self.task_client.submit(
                question_input.question.strip(), on_outcome=self._record_outcome
            )
        except ValidationError as e:
            raise KnownException("Question cannot be empty.") from e
        except SubmissionError as e:
            raise UpstreamServiceException("Task API", str(e)) from e

        tracked = TrackedQuestion(
            handle=handle,
            question=question_input.question.strip(),
            project_id=question_input.project_id,
            submitted_at=submitted_at,
        )
        self.registry.add(tracked)

        return self._to_view(tracked)

    def get_question(self, task_id: str) -> QuestionTask:
        return self._to_view(self._get_tracked(task_id))

    def list_questions(self, project_id: str | None = None) -> list[QuestionTask]:
        return [
            self._to_view(tracked)
            for tracked in self.registry.list()
            if project_id is None or tracked.project_id == project_id
        ]

    def cancel_question(self, task_id: str) -> QuestionTask:
        tracked = self._get_tracked(task_id)
        self.task_client.cancel(tracked.handle)
        return self._to_view(tracked)
