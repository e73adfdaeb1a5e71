from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Union

from src.async_tasks.exceptions import InvalidTaskTransition

TaskInput = Union[str, Mapping[str, Any]]


class TaskStatus(str, Enum):
    UNSUBMITTED = "unsubmitted"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (TaskStatus.SUCCEEDED, TaskStatus.FAILED, TaskStatus.CANCELLED)


# Outcomes delivered to the caller, exactly one per task
@dataclass(frozen=True)
class TaskSucceeded:
    result: Any


@dataclass(frozen=True)
class TaskFailed:
    reason: Exception


@dataclass(frozen=True)
class TaskCancelled:
    pass


TaskOutcome = Union[TaskSucceeded, TaskFailed, TaskCancelled]


# Classification of a single poll response body
@dataclass(frozen=True)
class PollPending:
    pass


@dataclass(frozen=True)
class PollSucceeded:
    result: Any


@dataclass(frozen=True)
class PollUnrecognized:
    detail: str


PollResponse = Union[PollPending, PollSucceeded, PollUnrecognized]


@dataclass
class Task:
    input: TaskInput
    id: str | None = None
    status: TaskStatus = TaskStatus.UNSUBMITTED
    result: Any = None
    failure_reason: Exception | None = field(default=None, repr=False)

    def mark_pending(self, task_id: str) -> None:
        if self.status != TaskStatus.UNSUBMITTED or self.id is not None:
            raise InvalidTaskTransition(
                f"Cannot submit task in status '{self.status.value}'"
            )
        self.id = task_id
        self.status = TaskStatus.PENDING

    def apply(self, outcome: TaskOutcome) -> None:
        if self.status != TaskStatus.PENDING:
            raise InvalidTaskTransition(
                f"Task '{self.id}' is '{self.status.value}', cannot apply {type(outcome).__name__}"
            )

        if isinstance(outcome, TaskSucceeded):
            self.result = outcome.result
            self.status = TaskStatus.SUCCEEDED
        elif isinstance(outcome, TaskFailed):
            self.failure_reason = outcome.reason
            self.status = TaskStatus.FAILED
        else:
            self.status = TaskStatus.CANCELLED
