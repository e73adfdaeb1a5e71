from fastapi import Depends

from src.generation.dependencies import get_generation_service
from src.generation.service import GenerationService
from src.projects.dependencies import get_project_service
from src.projects.service import ProjectService
from src.proposals.service import ProposalService


def get_proposal_service(
    project_service: ProjectService = Depends(get_project_service),
    generation_service: GenerationService = Depends(get_generation_service),
) -> ProposalService:
    return ProposalService(
        project_service=project_service,
        generation_service=generation_service,
    )
