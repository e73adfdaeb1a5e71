from fastapi import Depends

from src.projects.service import ProjectService
from src.projects.store.base import ProjectStore
from src.projects.store.dependencies import get_project_store


def get_project_service(
    project_store: ProjectStore = Depends(get_project_store),
) -> ProjectService:
    return ProjectService(project_store=project_store)
