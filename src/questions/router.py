from fastapi import APIRouter, Depends, status

from src.common.exceptions import (
    ResourceType,
    resource_not_found_response,
    upstream_service_response,
)
from src.questions.dependencies import get_question_service
from src.questions.schemas import CreateQuestionRequest, QuestionTask
from src.questions.service import QuestionService
from src.users.dependencies import get_current_user


router = APIRouter(
    prefix="/questions",
    tags=["Questions"],
    dependencies=[Depends(get_current_user)],
)


@router.post(
    "",
    status_code=status.HTTP_202_ACCEPTED,
    responses={
        **resource_not_found_response(ResourceType.PROJECT),
        **upstream_service_response,
    },
)
async def ask_question(
    question_input: CreateQuestionRequest,
    question_service: QuestionService = Depends(get_question_service),
) -> QuestionTask:
    return await question_service.ask(question_input)


@router.get("")
async def list_questions(
    project_id: str | None = None,
    question_service: QuestionService = Depends(get_question_service),
) -> list[QuestionTask]:
    return question_service.list_questions(project_id)


@router.get("/{task_id}", responses={**resource_not_found_response(ResourceType.TASK)})
async def get_question(
    task_id: str, question_service: QuestionService = Depends(get_question_service)
) -> QuestionTask:
    return question_service.get_question(task_id)


@router.post(
    "/{task_id}/cancel",
    status_code=status.HTTP_202_ACCEPTED,
    responses={**resource_not_found_response(ResourceType.TASK)},
)
async def cancel_question(
    task_id: str, question_service: QuestionService = Depends(get_question_service)
) -> QuestionTask:
    return question_service.cancel_question(task_id)
