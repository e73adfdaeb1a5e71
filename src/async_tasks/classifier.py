from typing import Any, Mapping

from src.async_tasks.schemas import (
    PollPending,
    PollResponse,
    PollSucceeded,
    PollUnrecognized,
)

PENDING_STATUSES = frozenset(
    {"pending or not found", "pending", "queued", "running", "in progress"}
)


def _has_value(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, dict)):
        return bool(value)
    return True


def classify_poll_response(body: Any, *, result_field: str = "answer") -> PollResponse:
    """Classify a result endpoint body as pending, succeeded or unrecognized.

    A non-empty result field wins over any status marker. Pending is only
    reported for an explicit pending status; every other shape, including
    a remote "failed" status or a "completed" status with no result, is
    unrecognized.
    """
    if not isinstance(body, Mapping):
        return PollUnrecognized(f"expected a JSON object, got {type(body).__name__}")

    result = body.get(result_field)
    if _has_value(result):
        return PollSucceeded(result)

    status = body.get("status")
    if isinstance(status, str) and status.strip().lower() in PENDING_STATUSES:
        return PollPending()

    if status is None:
        return PollUnrecognized(f"no '{result_field}' or 'status' field in response")

    error = body.get("error")
    if error:
        return PollUnrecognized(f"status '{status}' with error: {error}")

    return PollUnrecognized(f"status '{status}' without '{result_field}'")
