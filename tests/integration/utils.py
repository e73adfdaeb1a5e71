import time
from typing import Any
from fastapi.testclient import TestClient
from openai.types.chat import ChatCompletion, ChatCompletionMessage
from openai.types.chat.chat_completion import Choice

HCP = {"x-user-id": "user_hcp_1"}
RESEARCHER = {"x-user-id": "user_researcher_1"}
STATISTICIAN = {"x-user-id": "user_statistician_1"}
DATA_ENGINEER = {"x-user-id": "user_data_engineer_1"}


def make_chat_completion(content: str) -> ChatCompletion:
    return ChatCompletion(
        id="test-id",
        choices=[
            Choice(
                finish_reason="stop",
                index=0,
                message=ChatCompletionMessage(content=content, role="assistant"),
            )
        ],
        created=1234567890,
        model="gemini-2.5-flash",
        object="chat.completion",
    )


def wait_for_question_status(
    client: TestClient,
    task_id: str,
    target_status: str | list[str],
    timeout: float = 5.0,
    poll_interval: float = 0.05,
) -> dict[str, Any]:
    """Helper to poll a question until target status or timeout."""

    start_time = time.time()
    target_statuses = (
        [target_status] if isinstance(target_status, str) else target_status
    )

    while time.time() - start_time < timeout:
        response = client.get(f"/questions/{task_id}", headers=HCP)
        if response.status_code != 200:
            time.sleep(poll_interval)
            continue

        data = response.json()
        if data["status"] in target_statuses:
            return data

        time.sleep(poll_interval)

    raise TimeoutError(
        f"Question {task_id} did not reach status {target_status} within {timeout} seconds"
    )
