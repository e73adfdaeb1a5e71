import logging

from src.common.current_datetime import get_current_datetime
from src.common.exceptions import KnownException, StageGateException
from src.generation.service import GenerationService
from src.projects import mutations
from src.projects.gates import require_stage
from src.projects.schemas import (
    EthicsStatus,
    ExpertRole,
    ModuleStage,
    Proposal,
    ProposalUpdate,
    ResearchProject,
)
from src.projects.service import ProjectService
from src.proposals.prompts import (
    AI_SUGGESTIONS_SEPARATOR,
    PROPOSAL_SECTIONS,
    get_section_context,
    get_section_prompt,
    get_section_system_instruction,
)
from src.users.constants import find_user_by_role
from src.users.schemas import UserRole

logger = logging.getLogger(__name__)

DEFAULT_ETHICS_FEEDBACK = (
    "The Ethics Committee has reviewed your proposal. Please clarify the patient "
    "recruitment strategy (Section: Methodology) and provide more details on data "
    "anonymization (Section: Ethics). Resubmission required."
)
APPROVAL_FEEDBACK = "Congratulations! Your proposal has been approved."


def draft_proposal(project: ResearchProject) -> Proposal:
    """Return the stored proposal, or a first draft seeded from the idea."""
    if project.proposal:
        return project.proposal

    idea = project.idea
    if not idea or not idea.concept:
        return Proposal()

    return Proposal(
        title=project.title or "Research Proposal",
        sections={
            "background": idea.background or "",
            "objectives": idea.objective or "",
            "methodology": idea.methodology or "",
        },
    )


class ProposalService:
    def __init__(
        self,
        *,
        project_service: ProjectService,
        generation_service: GenerationService,
    ):
        self.project_service = project_service
        self.generation_service = generation_service

    def _get_project(self, project_id: str) -> ResearchProject:
        project = self.project_service.get_project(project_id)
        require_stage(
            project,
            ModuleStage.PROPOSAL_DEVELOPMENT,
            "Please complete the idea stage first. A validated research idea is required.",
        )
        return project

    def _apply(
        self, project: ResearchProject, updates: ProposalUpdate
    ) -> ResearchProject:
        timestamp = get_current_datetime()
        if not project.proposal:
            project = project.model_copy(update={"proposal": draft_proposal(project)})
        return self.project_service.save_project(
            mutations.update_proposal(project, updates, timestamp)
        )

    def get_proposal(self, project_id: str) -> Proposal:
        return draft_proposal(self._get_project(project_id))

    def save_proposal(
        self, project_id: str, updates: ProposalUpdate
    ) -> ResearchProject:
        return self._apply(self._get_project(project_id), updates)

    def suggest_section(self, project_id: str, section_id: str) -> ResearchProject:
        project = self._get_project(project_id)
        if section_id not in PROPOSAL_SECTIONS:
            raise KnownException(f"Unknown proposal section '{section_id}'")

        section_name = PROPOSAL_SECTIONS[section_id]
        current_content = draft_proposal(project).sections.get(section_id, "")

        suggestions = self.generation_service.generate_text_with_context(
            get_section_prompt(project, section_name, current_content),
            get_section_context(section_id),
            get_section_system_instruction(section_name),
        )

        logger.info(
            f"Added AI suggestions to section '{section_id}' of project '{project_id}'"
        )
        return self._apply(
            project,
            ProposalUpdate(
                sections={
                    section_id: f"{current_content}{AI_SUGGESTIONS_SEPARATOR}{suggestions}"
                }
            ),
        )

    def submit_to_ethics(self, project_id: str) -> ResearchProject:
        project = self._get_project(project_id)
        ethics_status = draft_proposal(project).ethics_status

        if ethics_status not in (
            EthicsStatus.NOT_SUBMITTED,
            EthicsStatus.FEEDBACK_RECEIVED,
        ):
            raise StageGateException(
                f"A proposal with ethics status '{ethics_status.value}' cannot be submitted."
            )

        logger.info(f"Proposal for project '{project_id}' submitted to ethics")
        return self._apply(project, ProposalUpdate(ethics_status=EthicsStatus.SUBMITTED))

    def record_ethics_feedback(
        self, project_id: str, feedback: str | None = None
    ) -> ResearchProject:
        project = self._get_project(project_id)
        if draft_proposal(project).ethics_status != EthicsStatus.SUBMITTED:
            raise StageGateException(
                "Ethics feedback can only be recorded for a submitted proposal."
            )

        return self._apply(
            project,
            ProposalUpdate(
                ethics_status=EthicsStatus.FEEDBACK_RECEIVED,
                ethics_feedback=(feedback or "").strip() or DEFAULT_ETHICS_FEEDBACK,
            ),
        )

    def approve(self, project_id: str) -> ResearchProject:
        project = self._get_project(project_id)
        if draft_proposal(project).ethics_status != EthicsStatus.SUBMITTED:
            raise StageGateException("Only a submitted proposal can be approved.")

        statistician = find_user_by_role(UserRole.STATISTICIAN)
        project = self._apply(
            project,
            ProposalUpdate(
                ethics_status=EthicsStatus.APPROVED,
                ethics_feedback=APPROVAL_FEEDBACK,
                statistician_assigned=statistician is not None,
            ),
        )

        if statistician:
            project = self.project_service.save_project(
                mutations.assign_expert(
                    project,
                    ExpertRole.STATISTICIAN,
                    statistician.id,
                    get_current_datetime(),
                )
            )
            logger.info(
                f"Proposal for project '{project_id}' approved, statistician '{statistician.id}' assigned"
            )

        return project

    def proceed_to_data(self, project_id: str) -> ResearchProject:
        project = self._get_project(project_id)
        if not project.proposal or project.proposal.ethics_status != EthicsStatus.APPROVED:
            raise StageGateException(
                "Proposal must be approved by Ethics Committee before proceeding."
            )

        if project.current_stage != ModuleStage.PROPOSAL_DEVELOPMENT:
            return project

        return self.project_service.save_project(
            mutations.set_stage(
                project, ModuleStage.DATA_COLLECTION_ANALYSIS, get_current_datetime()
            )
        )
