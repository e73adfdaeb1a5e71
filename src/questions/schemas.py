from datetime import datetime
from typing import Any
from pydantic import BaseModel

from src.async_tasks.schemas import TaskStatus


class CreateQuestionRequest(BaseModel):
    question: str
    project_id: str | None = None


class QuestionTask(BaseModel):
    id: str
    question: str
    project_id: str | None = None
    status: TaskStatus
    answer: Any = None
    error: str | None = None
    submitted_at: datetime
    completed_at: datetime | None = None
