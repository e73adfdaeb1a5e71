from datetime import datetime, timezone
import pytest
from pytest_mock import MockerFixture

from src.common.exceptions import (
    ResourceAlreadyExistsException,
    ResourceNotFoundException,
)
from src.common.redis import RedisClient
from src.projects.schemas import ResearchProject
from src.projects.store.memory.store import InMemoryProjectStore
from src.projects.store.redis.store import RedisProjectStore


def make_project(id: str, day: int = 1) -> ResearchProject:
    timestamp = datetime(2024, 1, day, tzinfo=timezone.utc)
    return ResearchProject(
        id=id,
        title=f"Project {id}",
        hcp_id="user_hcp_1",
        created_at=timestamp,
        updated_at=timestamp,
    )


@pytest.fixture
def mock_redis_client(mocker: MockerFixture) -> RedisClient:
    return mocker.Mock(spec=RedisClient)


@pytest.fixture
def redis_store(mock_redis_client: RedisClient) -> RedisProjectStore:
    return RedisProjectStore(redis_client=mock_redis_client, key_prefix="projects")


def test_redis_project_exists(
    redis_store: RedisProjectStore, mocker: MockerFixture
) -> None:
    mock_exists = mocker.patch.object(redis_store.client, "exists", return_value=1)

    assert redis_store.project_exists("p-1") is True
    mock_exists.assert_called_once_with("projects:p-1")


def test_redis_create_project(
    redis_store: RedisProjectStore, mocker: MockerFixture
) -> None:
    project = make_project("p-1")
    mocker.patch.object(redis_store.client, "exists", return_value=0)
    mock_set = mocker.patch.object(redis_store.client, "set")

    assert redis_store.create_project(project) == project
    mock_set.assert_called_once_with("projects:p-1", project.model_dump_json())


def test_redis_create_existing_project(
    redis_store: RedisProjectStore, mocker: MockerFixture
) -> None:
    mocker.patch.object(redis_store.client, "exists", return_value=1)

    with pytest.raises(ResourceAlreadyExistsException):
        redis_store.create_project(make_project("p-1"))


def test_redis_get_project(
    redis_store: RedisProjectStore, mocker: MockerFixture
) -> None:
    project = make_project("p-1")
    mocker.patch.object(redis_store.client, "exists", return_value=1)
    mocker.patch.object(
        redis_store.client, "get", return_value=project.model_dump_json()
    )

    assert redis_store.get_project("p-1") == project


def test_redis_get_missing_project(
    redis_store: RedisProjectStore, mocker: MockerFixture
) -> None:
    mocker.patch.object(redis_store.client, "exists", return_value=0)

    with pytest.raises(ResourceNotFoundException) as exc_info:
        redis_store.get_project("missing")

    assert str(exc_info.value) == "Project 'missing' not found"


def test_redis_save_missing_project(
    redis_store: RedisProjectStore, mocker: MockerFixture
) -> None:
    mocker.patch.object(redis_store.client, "exists", return_value=0)
    mock_set = mocker.patch.object(redis_store.client, "set")

    with pytest.raises(ResourceNotFoundException):
        redis_store.save_project(make_project("p-1"))

    mock_set.assert_not_called()


def test_redis_delete_project(
    redis_store: RedisProjectStore, mocker: MockerFixture
) -> None:
    mocker.patch.object(redis_store.client, "exists", return_value=1)
    mock_delete = mocker.patch.object(redis_store.client, "delete")

    redis_store.delete_project("p-1")

    mock_delete.assert_called_once_with("projects:p-1")


def test_redis_list_projects_sorted(
    redis_store: RedisProjectStore, mocker: MockerFixture
) -> None:
    newer = make_project("p-2", day=2)
    older = make_project("p-1", day=1)
    stored = {
        "projects:p-2": newer.model_dump_json(),
        "projects:p-1": older.model_dump_json(),
    }
    mock_scan = mocker.patch.object(
        redis_store.client, "scan_iter", return_value=iter(stored.keys())
    )
    mocker.patch.object(redis_store.client, "get", side_effect=stored.get)

    assert redis_store.list_projects() == [older, newer]
    mock_scan.assert_called_once_with("projects:*")


def test_memory_store_round_trip() -> None:
    store = InMemoryProjectStore()
    project = make_project("p-1")

    store.create_project(project)

    assert store.project_exists("p-1")
    assert store.get_project("p-1") == project

    with pytest.raises(ResourceAlreadyExistsException):
        store.create_project(project)

    store.delete_project("p-1")

    assert not store.project_exists("p-1")
    with pytest.raises(ResourceNotFoundException):
        store.get_project("p-1")


def test_memory_store_returns_copies() -> None:
    store = InMemoryProjectStore()
    store.create_project(make_project("p-1"))

    fetched = store.get_project("p-1")
    fetched.title = "Changed"

    assert store.get_project("p-1").title == "Project p-1"


def test_memory_store_list_sorted() -> None:
    store = InMemoryProjectStore()
    store.create_project(make_project("p-2", day=3))
    store.create_project(make_project("p-1", day=1))

    assert [p.id for p in store.list_projects()] == ["p-1", "p-2"]


def test_memory_store_save_missing() -> None:
    store = InMemoryProjectStore()

    with pytest.raises(ResourceNotFoundException):
        store.save_project(make_project("p-1"))
