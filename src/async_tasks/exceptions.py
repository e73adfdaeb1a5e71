class AsyncTaskException(Exception):
    pass


class ValidationError(AsyncTaskException):
    """Task input failed local checks. Raised before any network call."""


class SubmissionError(AsyncTaskException):
    """The remote system did not accept the task."""


class PollTransportError(AsyncTaskException):
    """A poll fetch failed at the transport level."""

    def __init__(self, task_id: str, message: str):
        self.task_id = task_id
        super().__init__(f"Failed to fetch result for task '{task_id}': {message}")


class UnrecognizedResponse(AsyncTaskException):
    """A poll fetch returned a body that is neither pending nor a result."""

    def __init__(self, task_id: str, detail: str):
        self.task_id = task_id
        self.detail = detail
        super().__init__(f"Unrecognized response for task '{task_id}': {detail}")


class TimeoutExceeded(AsyncTaskException):
    def __init__(self, task_id: str, message: str):
        self.task_id = task_id
        super().__init__(f"Task '{task_id}' timed out: {message}")


class InvalidTaskTransition(AsyncTaskException):
    pass


class TaskTransportError(AsyncTaskException):
    """Raised by transports for connection errors, timeouts and non-2xx responses."""

    def __init__(self, message: str, status: int | None = None):
        self.status = status
        super().__init__(message)
