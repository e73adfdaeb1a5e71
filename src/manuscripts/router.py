from fastapi import APIRouter, Depends

from src.common.exceptions import (
    ResourceType,
    resource_not_found_response,
    stage_gate_response,
)
from src.manuscripts.dependencies import get_manuscript_service
from src.manuscripts.schemas import JournalSuggestion, SectionAssistRequest
from src.manuscripts.service import ManuscriptService
from src.projects.schemas import Manuscript, ManuscriptUpdate, ResearchProject
from src.users.dependencies import get_current_user, require_roles
from src.users.schemas import UserRole

can_edit = Depends(require_roles(UserRole.HCP, UserRole.RESEARCHER))

router = APIRouter(
    prefix="/projects/{project_id}/manuscript",
    tags=["Manuscript"],
    dependencies=[Depends(get_current_user)],
    responses={
        **resource_not_found_response(ResourceType.PROJECT),
        **stage_gate_response(
            "Validated statistical analysis is required to begin manuscript writing."
        ),
    },
)


@router.get("")
def get_manuscript(
    project_id: str,
    manuscript_service: ManuscriptService = Depends(get_manuscript_service),
) -> Manuscript:
    return manuscript_service.get_manuscript(project_id)


@router.put("", dependencies=[can_edit])
def save_manuscript(
    project_id: str,
    manuscript_input: ManuscriptUpdate,
    manuscript_service: ManuscriptService = Depends(get_manuscript_service),
) -> ResearchProject:
    return manuscript_service.save_manuscript(project_id, manuscript_input)


@router.post("/sections/{section_id}/assist", dependencies=[can_edit])
def assist_section(
    project_id: str,
    section_id: str,
    assist_input: SectionAssistRequest,
    manuscript_service: ManuscriptService = Depends(get_manuscript_service),
) -> ResearchProject:
    return manuscript_service.assist_section(project_id, section_id, assist_input)


@router.post("/journals")
def suggest_journals(
    project_id: str,
    manuscript_service: ManuscriptService = Depends(get_manuscript_service),
) -> list[JournalSuggestion]:
    return manuscript_service.suggest_journals(project_id)


@router.post("/ready", dependencies=[can_edit])
def mark_ready(
    project_id: str,
    manuscript_service: ManuscriptService = Depends(get_manuscript_service),
) -> ResearchProject:
    return manuscript_service.mark_ready(project_id)
