import pytest
from typing import Any, Callable
from unittest.mock import Mock
from pytest_mock import MockerFixture

from src.generation.service import GenerationService
from src.projects.schemas import (
    AIReport,
    CreateProjectRequest,
    DataSet,
    EthicsStatus,
    ModuleStage,
    Proposal,
    ResearchIdea,
    ResearchProject,
    StatisticalAnalysis,
)
from src.projects.service import ProjectService
from src.projects.store.memory.store import InMemoryProjectStore
from src.users.constants import find_user

ProjectFactory = Callable[..., ResearchProject]

SAMPLE_DATA: list[dict[str, Any]] = [
    {"name": "Group A", "value": 400, "hba1c": "6.1"},
    {"name": "Group B", "value": 300, "hba1c": "7.4"},
]


@pytest.fixture
def project_service() -> ProjectService:
    return ProjectService(project_store=InMemoryProjectStore())


@pytest.fixture
def mock_generation_service(mocker: MockerFixture) -> Mock:
    return mocker.Mock(spec=GenerationService)


@pytest.fixture
def make_project(project_service: ProjectService) -> ProjectFactory:
    """Create a stored project advanced to the given stage with valid prior work."""

    def factory(stage: ModuleStage = ModuleStage.IDEA_GENERATION, **updates: Any):
        user = find_user("user_hcp_1")
        assert user is not None
        project = project_service.create_project(
            CreateProjectRequest(title="Telehealth for T2D"), user
        )

        changes: dict[str, Any] = {"current_stage": stage}
        if stage != ModuleStage.IDEA_GENERATION:
            changes["idea"] = ResearchIdea(
                concept="Remote HbA1c monitoring",
                background="Rising prevalence",
                objective="Reduce HbA1c",
                methodology="RCT",
                ai_report=AIReport(
                    literature_summary="LS",
                    research_gaps="RG",
                    feasibility_assessment="FA",
                ),
            )
        if stage in (
            ModuleStage.DATA_COLLECTION_ANALYSIS,
            ModuleStage.MANUSCRIPT_WRITING,
        ):
            changes["proposal"] = Proposal(
                title="Telehealth for T2D",
                sections={"background": "Proposal background", "methodology": "RCT"},
                ethics_status=EthicsStatus.APPROVED,
            )
        if stage == ModuleStage.MANUSCRIPT_WRITING:
            changes["data_set"] = DataSet(
                name="Extracted Dataset",
                source_query="SELECT 1;",
                simulated_data=SAMPLE_DATA,
            )
            changes["analysis"] = StatisticalAnalysis(
                plan="Paired t-test",
                results="HbA1c fell by 0.8%",
                is_validated=True,
            )

        changes.update(updates)
        return project_service.save_project(project.model_copy(update=changes))

    return factory
