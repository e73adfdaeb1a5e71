from fastapi import Depends

from src.generation.dependencies import get_generation_service
from src.generation.service import GenerationService
from src.manuscripts.service import ManuscriptService
from src.projects.dependencies import get_project_service
from src.projects.service import ProjectService


def get_manuscript_service(
    project_service: ProjectService = Depends(get_project_service),
    generation_service: GenerationService = Depends(get_generation_service),
) -> ManuscriptService:
    return ManuscriptService(
        project_service=project_service,
        generation_service=generation_service,
    )
