from src.common.exceptions import (
    ResourceAlreadyExistsException,
    ResourceNotFoundException,
    ResourceType,
)
from src.common.redis import RedisClient
from src.projects.schemas import ResearchProject
from src.projects.store.base import ProjectStore


class RedisProjectStore(ProjectStore):
    def __init__(self, *, redis_client: RedisClient, key_prefix: str):
        self.client = redis_client
        self.key_prefix = key_prefix

    def _get_project_key(self, project_id: str, should_exist: bool = True) -> str:
        key_name = f"{self.key_prefix}:{project_id}"

        project_exists = self.client.exists(key_name)

        if should_exist and not project_exists:
            raise ResourceNotFoundException(ResourceType.PROJECT, project_id)

        if not should_exist and project_exists:
            raise ResourceAlreadyExistsException(ResourceType.PROJECT, project_id)

        return key_name

    def project_exists(self, project_id: str) -> bool:
        return self.client.exists(f"{self.key_prefix}:{project_id}") == 1

    def create_project(self, project: ResearchProject) -> ResearchProject:
        project_key = self._get_project_key(project.id, should_exist=False)
        self.client.set(project_key, project.model_dump_json())
        return project

    def get_project(self, project_id: str) -> ResearchProject:
        project_key = self._get_project_key(project_id)
        project_json = self.client.get(project_key)
        if not project_json:
            raise ResourceNotFoundException(ResourceType.PROJECT, project_id)
        return ResearchProject.model_validate_json(project_json)

    def save_project(self, project: ResearchProject) -> ResearchProject:
        project_key = self._get_project_key(project.id)
        self.client.set(project_key, project.model_dump_json())
        return project

    def delete_project(self, project_id: str) -> None:
        project_key = self._get_project_key(project_id)
        self.client.delete(project_key)

    def list_projects(self) -> list[ResearchProject]:
        projects: list[ResearchProject] = []
        for key in self.client.scan_iter(f"{self.key_prefix}:*"):
            project_json = self.client.get(key)
            if project_json:
                projects.append(ResearchProject.model_validate_json(project_json))
        return sorted(projects, key=lambda project: project.created_at)
