from src.common.exceptions import (
    ResourceAlreadyExistsException,
    ResourceNotFoundException,
    ResourceType,
)
from src.projects.schemas import ResearchProject
from src.projects.store.base import ProjectStore


class InMemoryProjectStore(ProjectStore):
    """Process-local store. Projects are lost on restart."""

    def __init__(self) -> None:
        self._projects: dict[str, ResearchProject] = {}

    def project_exists(self, project_id: str) -> bool:
        return project_id in self._projects

    def create_project(self, project: ResearchProject) -> ResearchProject:
        if project.id in self._projects:
            raise ResourceAlreadyExistsException(ResourceType.PROJECT, project.id)
        self._projects[project.id] = project.model_copy(deep=True)
        return project

    def get_project(self, project_id: str) -> ResearchProject:
        if project_id not in self._projects:
            raise ResourceNotFoundException(ResourceType.PROJECT, project_id)
        return self._projects[project_id].model_copy(deep=True)

    def save_project(self, project: ResearchProject) -> ResearchProject:
        if project.id not in self._projects:
            raise ResourceNotFoundException(ResourceType.PROJECT, project.id)
        self._projects[project.id] = project.model_copy(deep=True)
        return project

    def delete_project(self, project_id: str) -> None:
        if project_id not in self._projects:
            raise ResourceNotFoundException(ResourceType.PROJECT, project_id)
        del self._projects[project_id]

    def list_projects(self) -> list[ResearchProject]:
        return sorted(
            (project.model_copy(deep=True) for project in self._projects.values()),
            key=lambda project: project.created_at,
        )
