from typing import Generator
from unittest.mock import Mock
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pytest_mock import MockerFixture

from src.async_tasks.client import AsyncTaskClient
from src.async_tasks.transport import TaskTransport
from src.config import Settings, get_settings
from src.main import app as main_app
from tests.integration.utils import make_chat_completion


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        GEMINI_API_KEY="test-key",
        I2O_API_KEY=None,
        OTEL_ENABLED=False,
        PROJECT_STORE_BACKEND="memory",
        TASK_POLL_INTERVAL=0.05,
    )


@pytest.fixture
def mock_transport(mocker: MockerFixture) -> Mock:
    transport = mocker.Mock(spec=TaskTransport)
    transport.create_task = mocker.AsyncMock(return_value={"task_id": "task-1"})
    transport.fetch_result = mocker.AsyncMock(
        return_value={"status": "pending or not found"}
    )
    transport.close = mocker.AsyncMock()
    return transport


@pytest.fixture
def mock_openai_chat(mocker: MockerFixture) -> Mock:
    return mocker.patch(
        "openai.resources.chat.completions.Completions.create",
        return_value=make_chat_completion("Test response"),
    )


@pytest.fixture(autouse=True)
def patch_settings(
    test_settings: Settings, mock_transport: Mock, mocker: MockerFixture
) -> None:
    mocker.patch("src.main.settings", test_settings)
    mocker.patch(
        "src.main.create_task_client",
        lambda settings: AsyncTaskClient(
            transport=mock_transport, poll_interval=settings.TASK_POLL_INTERVAL
        ),
    )


@pytest.fixture
def test_app(test_settings: Settings, mock_openai_chat: Mock) -> FastAPI:
    def get_test_settings() -> Settings:
        return test_settings

    main_app.dependency_overrides[get_settings] = get_test_settings
    return main_app


@pytest.fixture
def test_client(test_app: FastAPI) -> Generator[TestClient, None, None]:
    with TestClient(test_app) as client:
        yield client
    test_app.dependency_overrides.clear()
