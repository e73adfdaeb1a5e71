import logging

from src.common.current_datetime import get_current_datetime
from src.common.exceptions import KnownException, StageGateException
from src.generation.service import GenerationService
from src.ideation.prompts import (
    AUTONOMOUS_IDEAS_PROMPT,
    AUTONOMOUS_IDEAS_SYSTEM_INSTRUCTION,
    IDEA_KNOWLEDGE_BASE_CONTEXT,
    IDEA_REPORT_SYSTEM_INSTRUCTION,
    get_idea_report_prompt,
)
from src.ideation.schemas import AutonomousIdea, GeneratedIdeaReport
from src.projects import mutations
from src.projects.schemas import (
    AIReport,
    IdeaUpdate,
    IdeationMode,
    ModuleStage,
    ResearchIdea,
    ResearchProject,
)
from src.projects.service import ProjectService

logger = logging.getLogger(__name__)


class IdeationService:
    def __init__(
        self,
        *,
        project_service: ProjectService,
        generation_service: GenerationService,
    ):
        self.project_service = project_service
        self.generation_service = generation_service

    def generate_report(
        self, project_id: str, idea_input: IdeaUpdate | None = None
    ) -> ResearchProject:
        project = self.project_service.get_project(project_id)
        timestamp = get_current_datetime()

        if idea_input:
            project = mutations.update_idea(project, idea_input, timestamp)

        idea = project.idea or ResearchIdea()
        mode = idea.ideation_mode or IdeationMode.CLINICIAN_LED
        if mode == IdeationMode.CLINICIAN_LED and not idea.concept.strip():
            raise KnownException(
                "Please provide an initial research concept for Clinician-Led Ideation."
            )

        report = self.generation_service.generate_json(
            f"{IDEA_KNOWLEDGE_BASE_CONTEXT}\n\n{get_idea_report_prompt(idea)}",
            IDEA_REPORT_SYSTEM_INSTRUCTION,
            GeneratedIdeaReport,
        )

        project = mutations.update_idea(
            project,
            IdeaUpdate(
                ai_report=AIReport(
                    literature_summary=report.literature_summary,
                    research_gaps=report.research_gaps,
                    feasibility_assessment=report.feasibility_assessment,
                    ai_suggestions=report.ai_suggestions,
                ),
                novelty_score=report.novelty_score,
                similarity_score=report.similarity_score,
            ),
            timestamp,
        )
        logger.info(f"Generated idea report for project '{project_id}'")
        return self.project_service.save_project(project)

    def generate_autonomous_ideas(self, project_id: str) -> list[AutonomousIdea]:
        # Ideas are only reviewed in the context of an existing project
        self.project_service.get_project(project_id)

        return self.generation_service.generate_json(
            AUTONOMOUS_IDEAS_PROMPT,
            AUTONOMOUS_IDEAS_SYSTEM_INSTRUCTION,
            list[AutonomousIdea],
        )

    def select_autonomous_idea(
        self, project_id: str, idea: AutonomousIdea
    ) -> ResearchProject:
        return self.project_service.update_idea(
            project_id,
            IdeaUpdate(
                concept=idea.question,
                background=idea.rationale,
                ideation_mode=IdeationMode.AUTONOMOUS_AI,
                ai_report=None,
                novelty_score=None,
                similarity_score=None,
            ),
        )

    def proceed_to_proposal(self, project_id: str) -> ResearchProject:
        project = self.project_service.get_project(project_id)
        idea = project.idea

        if not idea or not idea.concept.strip():
            raise StageGateException(
                "Please develop a research idea before proceeding to the proposal."
            )

        if not idea.ai_report and idea.ideation_mode != IdeationMode.AI_CO_CREATION:
            raise StageGateException(
                "Please generate and review the AI Analysis Report for your selected idea before proceeding."
            )

        if project.current_stage != ModuleStage.IDEA_GENERATION:
            return project

        project = mutations.set_stage(
            project, ModuleStage.PROPOSAL_DEVELOPMENT, get_current_datetime()
        )
        return self.project_service.save_project(project)
