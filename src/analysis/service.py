import logging

from src.analysis.extraction import simulate_extraction
from src.analysis.prompts import (
    ANALYSIS_SYSTEM_INSTRUCTION,
    SQL_SYSTEM_INSTRUCTION,
    get_analysis_prompt,
    get_sql_prompt,
)
from src.common.current_datetime import get_current_datetime
from src.common.exceptions import KnownException, StageGateException
from src.generation.service import GenerationService, strip_code_fences
from src.projects import mutations
from src.projects.gates import require_stage
from src.projects.schemas import (
    AnalysisUpdate,
    DataCollectionPathway,
    DataSetUpdate,
    EthicsStatus,
    ModuleStage,
    ResearchProject,
)
from src.projects.service import ProjectService

logger = logging.getLogger(__name__)

ANALYSIS_TABLES_NOTE = "See results section for Markdown tables."
ANALYSIS_FIGURES_NOTE = (
    "Bar chart of group values (see visualization). Histogram of HBa1c."
)
DEFAULT_INTERPRETATION = "Validated by Statistician."


class AnalysisService:
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
        message = "An approved research proposal is required to begin data collection and analysis."
        require_stage(project, ModuleStage.DATA_COLLECTION_ANALYSIS, message)
        if not project.proposal or project.proposal.ethics_status != EthicsStatus.APPROVED:
            raise StageGateException(message)
        return project

    def _save(self, project: ResearchProject) -> ResearchProject:
        return self.project_service.save_project(project)

    def save_analysis(
        self, project_id: str, updates: AnalysisUpdate
    ) -> ResearchProject:
        project = self._get_project(project_id)
        return self._save(
            mutations.update_analysis(project, updates, get_current_datetime())
        )

    def generate_query(self, project_id: str, query: str) -> ResearchProject:
        project = self._get_project(project_id)
        if not query.strip():
            raise KnownException(
                "Please provide a natural language query for data extraction."
            )

        sql = strip_code_fences(
            self.generation_service.generate_text(
                get_sql_prompt(query.strip()), SQL_SYSTEM_INSTRUCTION
            )
        )

        logger.info(f"Generated extraction query for project '{project_id}'")
        return self._save(
            mutations.update_data_set(
                project,
                DataSetUpdate(
                    name="Extracted Dataset",
                    description=f"Data from query: {query.strip()}",
                    source_query=sql,
                    collection_pathway=DataCollectionPathway.PATHWAY_A,
                    data_engineer_reviewed=False,
                    data_engineer_approved=False,
                ),
                get_current_datetime(),
            )
        )

    def extract_data(self, project_id: str) -> ResearchProject:
        project = self._get_project(project_id)
        if not project.data_set or not project.data_set.source_query:
            raise StageGateException("No SQL query to execute.")

        return self._save(
            mutations.update_data_set(
                project,
                DataSetUpdate(simulated_data=simulate_extraction()),
                get_current_datetime(),
            )
        )

    def review_data(self, project_id: str, approved: bool) -> ResearchProject:
        project = self._get_project(project_id)
        if not project.data_set or not project.data_set.source_query:
            raise StageGateException("There is no data query to review.")

        logger.info(
            f"Data query for project '{project_id}' {'approved' if approved else 'rejected'} by data engineer"
        )
        return self._save(
            mutations.update_data_set(
                project,
                DataSetUpdate(
                    data_engineer_reviewed=True, data_engineer_approved=approved
                ),
                get_current_datetime(),
            )
        )

    def run_analysis(self, project_id: str, plan: str | None = None) -> ResearchProject:
        project = self._get_project(project_id)
        plan = (plan or (project.analysis.plan if project.analysis else "")).strip()
        data = project.data_set.simulated_data if project.data_set else None

        if not plan or not data:
            raise StageGateException(
                "Please define an analysis plan and ensure data is 'extracted'."
            )

        results = self.generation_service.generate_text(
            get_analysis_prompt(plan, data), ANALYSIS_SYSTEM_INSTRUCTION
        )

        logger.info(f"Statistical analysis completed for project '{project_id}'")
        return self._save(
            mutations.update_analysis(
                project,
                AnalysisUpdate(
                    plan=plan,
                    results=results,
                    tables=ANALYSIS_TABLES_NOTE,
                    figures=ANALYSIS_FIGURES_NOTE,
                    is_validated=False,
                ),
                get_current_datetime(),
            )
        )

    def validate_analysis(
        self, project_id: str, interpretation: str | None = None
    ) -> ResearchProject:
        project = self._get_project(project_id)
        if not project.analysis or not project.analysis.results:
            raise StageGateException("There are no analysis results to validate.")

        interpretation = (
            (interpretation or "").strip()
            or project.analysis.statistician_interpretation
            or DEFAULT_INTERPRETATION
        )
        return self._save(
            mutations.update_analysis(
                project,
                AnalysisUpdate(
                    is_validated=True, statistician_interpretation=interpretation
                ),
                get_current_datetime(),
            )
        )

    def proceed_to_manuscript(self, project_id: str) -> ResearchProject:
        project = self._get_project(project_id)
        if not project.analysis or not project.analysis.is_validated:
            raise StageGateException(
                "Statistical analysis must be validated by a Statistician before proceeding."
            )

        if project.current_stage != ModuleStage.DATA_COLLECTION_ANALYSIS:
            return project

        return self._save(
            mutations.set_stage(
                project, ModuleStage.MANUSCRIPT_WRITING, get_current_datetime()
            )
        )
