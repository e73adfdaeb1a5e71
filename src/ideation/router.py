from fastapi import APIRouter, Depends

from src.common.exceptions import (
    ResourceType,
    resource_not_found_response,
    stage_gate_response,
)
from src.ideation.dependencies import get_ideation_service
from src.ideation.schemas import AutonomousIdea, GenerateReportRequest
from src.ideation.service import IdeationService
from src.projects.dependencies import get_project_service
from src.projects.schemas import IdeaUpdate, ResearchProject
from src.projects.service import ProjectService
from src.users.dependencies import require_roles
from src.users.schemas import UserRole


router = APIRouter(
    prefix="/projects/{project_id}/idea",
    tags=["Idea"],
    dependencies=[Depends(require_roles(UserRole.HCP))],
    responses={**resource_not_found_response(ResourceType.PROJECT)},
)


@router.put("")
def save_idea(
    project_id: str,
    idea_input: IdeaUpdate,
    project_service: ProjectService = Depends(get_project_service),
) -> ResearchProject:
    return project_service.update_idea(project_id, idea_input)


@router.post("/report", responses={**resource_not_found_response(ResourceType.MODEL)})
def generate_report(
    project_id: str,
    report_input: GenerateReportRequest | None = None,
    ideation_service: IdeationService = Depends(get_ideation_service),
) -> ResearchProject:
    return ideation_service.generate_report(
        project_id, report_input.idea if report_input else None
    )


@router.post("/autonomous-ideas")
def generate_autonomous_ideas(
    project_id: str,
    ideation_service: IdeationService = Depends(get_ideation_service),
) -> list[AutonomousIdea]:
    return ideation_service.generate_autonomous_ideas(project_id)


@router.post("/select")
def select_autonomous_idea(
    project_id: str,
    idea: AutonomousIdea,
    ideation_service: IdeationService = Depends(get_ideation_service),
) -> ResearchProject:
    return ideation_service.select_autonomous_idea(project_id, idea)


@router.post(
    "/proceed",
    responses={
        **stage_gate_response(
            "Please generate and review the AI Analysis Report for your selected idea before proceeding."
        )
    },
)
def proceed_to_proposal(
    project_id: str,
    ideation_service: IdeationService = Depends(get_ideation_service),
) -> ResearchProject:
    return ideation_service.proceed_to_proposal(project_id)
