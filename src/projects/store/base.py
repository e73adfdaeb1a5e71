from abc import ABC, abstractmethod

from src.projects.schemas import ResearchProject


class ProjectStore(ABC):
    @abstractmethod
    def project_exists(self, project_id: str) -> bool:
        pass

    @abstractmethod
    def create_project(self, project: ResearchProject) -> ResearchProject:
        pass

    @abstractmethod
    def get_project(self, project_id: str) -> ResearchProject:
        pass

    @abstractmethod
    def save_project(self, project: ResearchProject) -> ResearchProject:
        pass

    @abstractmethod
    def delete_project(self, project_id: str) -> None:
        pass

    @abstractmethod
    def list_projects(self) -> list[ResearchProject]:
        pass
