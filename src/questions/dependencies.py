from fastapi import Depends, Request

from src.async_tasks.client import AsyncTaskClient
from src.async_tasks.dependencies import get_task_client
from src.projects.store.base import ProjectStore
from src.projects.store.dependencies import get_project_store
from src.questions.registry import QuestionRegistry
from src.questions.service import QuestionService


def get_question_registry(request: Request) -> QuestionRegistry:
    return request.app.state.question_registry


def get_question_service(
    task_client: AsyncTaskClient = Depends(get_task_client),
    registry: QuestionRegistry = Depends(get_question_registry),
    project_store: ProjectStore = Depends(get_project_store),
) -> QuestionService:
    return QuestionService(
        task_client=task_client,
        registry=registry,
        project_store=project_store,
    )
