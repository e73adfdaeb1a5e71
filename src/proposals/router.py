from fastapi import APIRouter, Depends

from src.common.exceptions import (
    ResourceType,
    resource_not_found_response,
    stage_gate_response,
)
from src.projects.schemas import Proposal, ProposalUpdate, ResearchProject
from src.proposals.dependencies import get_proposal_service
from src.proposals.schemas import EthicsFeedbackRequest
from src.proposals.service import ProposalService
from src.users.dependencies import get_current_user, require_roles
from src.users.schemas import UserRole

can_edit = Depends(require_roles(UserRole.HCP, UserRole.RESEARCHER))

router = APIRouter(
    prefix="/projects/{project_id}/proposal",
    tags=["Proposal"],
    dependencies=[Depends(get_current_user)],
    responses={
        **resource_not_found_response(ResourceType.PROJECT),
        **stage_gate_response(
            "Please complete the idea stage first. A validated research idea is required."
        ),
    },
)


@router.get("")
def get_proposal(
    project_id: str,
    proposal_service: ProposalService = Depends(get_proposal_service),
) -> Proposal:
    return proposal_service.get_proposal(project_id)


@router.put("", dependencies=[can_edit])
def save_proposal(
    project_id: str,
    proposal_input: ProposalUpdate,
    proposal_service: ProposalService = Depends(get_proposal_service),
) -> ResearchProject:
    return proposal_service.save_proposal(project_id, proposal_input)


@router.post("/sections/{section_id}/suggestions", dependencies=[can_edit])
def suggest_section(
    project_id: str,
    section_id: str,
    proposal_service: ProposalService = Depends(get_proposal_service),
) -> ResearchProject:
    return proposal_service.suggest_section(project_id, section_id)


@router.post("/ethics/submit", dependencies=[can_edit])
def submit_to_ethics(
    project_id: str,
    proposal_service: ProposalService = Depends(get_proposal_service),
) -> ResearchProject:
    return proposal_service.submit_to_ethics(project_id)


@router.post("/ethics/feedback")
def record_ethics_feedback(
    project_id: str,
    feedback_input: EthicsFeedbackRequest | None = None,
    proposal_service: ProposalService = Depends(get_proposal_service),
) -> ResearchProject:
    return proposal_service.record_ethics_feedback(
        project_id, feedback_input.feedback if feedback_input else None
    )


@router.post("/ethics/approve")
def approve_proposal(
    project_id: str,
    proposal_service: ProposalService = Depends(get_proposal_service),
) -> ResearchProject:
    return proposal_service.approve(project_id)


@router.post(
    "/proceed",
    dependencies=[can_edit],
    responses={
        **stage_gate_response(
            "Proposal must be approved by Ethics Committee before proceeding."
        )
    },
)
def proceed_to_data(
    project_id: str,
    proposal_service: ProposalService = Depends(get_proposal_service),
) -> ResearchProject:
    return proposal_service.proceed_to_data(project_id)
