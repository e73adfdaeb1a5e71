import logging

from src.common.current_datetime import get_current_datetime
from src.common.exceptions import KnownException, StageGateException
from src.generation.service import GenerationService
from src.manuscripts.prompts import (
    JOURNAL_SYSTEM_INSTRUCTION,
    MANUSCRIPT_SECTIONS,
    get_journal_prompt,
    get_section_prompt,
    get_section_system_instruction,
)
from src.manuscripts.schemas import JournalSuggestion, SectionAssistRequest
from src.projects import mutations
from src.projects.gates import require_stage
from src.projects.schemas import (
    Manuscript,
    ManuscriptStatus,
    ManuscriptUpdate,
    ModuleStage,
    ResearchProject,
)
from src.projects.service import ProjectService

logger = logging.getLogger(__name__)


def draft_manuscript(project: ResearchProject) -> Manuscript:
    """Return the stored manuscript, or a first draft seeded from earlier stages."""
    if project.manuscript:
        return project.manuscript

    analysis = project.analysis
    if not analysis or not analysis.results:
        return Manuscript()

    proposal_sections = project.proposal.sections if project.proposal else {}
    return Manuscript(
        title=f"Manuscript: {project.title}" if project.title else "Research Manuscript",
        sections={
            "introduction": proposal_sections.get("background", ""),
            "methods": f"{proposal_sections.get('methodology', '')}\n\nAnalysis Plan:\n{analysis.plan}",
            "results": analysis.results,
        },
    )


class ManuscriptService:
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
        message = "Validated statistical analysis is required to begin manuscript writing."
        require_stage(project, ModuleStage.MANUSCRIPT_WRITING, message)
        if not project.analysis or not project.analysis.is_validated:
            raise StageGateException(message)
        return project

    def _apply(
        self, project: ResearchProject, updates: ManuscriptUpdate
    ) -> ResearchProject:
        if not project.manuscript:
            project = project.model_copy(
                update={"manuscript": draft_manuscript(project)}
            )
        return self.project_service.save_project(
            mutations.update_manuscript(project, updates, get_current_datetime())
        )

    def get_manuscript(self, project_id: str) -> Manuscript:
        return draft_manuscript(self._get_project(project_id))

    def save_manuscript(
        self, project_id: str, updates: ManuscriptUpdate
    ) -> ResearchProject:
        return self._apply(self._get_project(project_id), updates)

    def assist_section(
        self, project_id: str, section_id: str, assist_input: SectionAssistRequest
    ) -> ResearchProject:
        project = self._get_project(project_id)
        if section_id not in MANUSCRIPT_SECTIONS:
            raise KnownException(f"Unknown manuscript section '{section_id}'")

        manuscript = draft_manuscript(project)
        section_name = MANUSCRIPT_SECTIONS[section_id]
        target_journal = assist_input.target_journal or manuscript.target_journal

        text = self.generation_service.generate_text(
            get_section_prompt(
                project,
                assist_input.help_type,
                section_name,
                manuscript.sections.get(section_id, ""),
                target_journal,
            ),
            get_section_system_instruction(assist_input.help_type, section_name),
        )

        logger.info(
            f"Applied {assist_input.help_type.value} assistance to section '{section_id}' of project '{project_id}'"
        )
        return self._apply(project, ManuscriptUpdate(sections={section_id: text}))

    def suggest_journals(self, project_id: str) -> list[JournalSuggestion]:
        project = self._get_project(project_id)
        if not project.analysis or not project.analysis.results:
            raise StageGateException("Need study results to suggest journals.")

        manuscript = draft_manuscript(project)
        concept = project.idea.concept if project.idea else ""
        abstract = (
            manuscript.sections.get("abstract")
            or manuscript.sections.get("introduction")
            or concept
            or "Abstract not yet written."
        )

        return self.generation_service.generate_json(
            get_journal_prompt(abstract, concept),
            JOURNAL_SYSTEM_INSTRUCTION,
            list[JournalSuggestion],
        )

    def mark_ready(self, project_id: str) -> ResearchProject:
        project = self._get_project(project_id)
        logger.info(f"Manuscript for project '{project_id}' ready for submission")
        return self._apply(
            project, ManuscriptUpdate(status=ManuscriptStatus.READY_FOR_SUBMISSION)
        )
