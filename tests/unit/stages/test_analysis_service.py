from typing import Callable
import random
import pytest
from unittest.mock import Mock

from src.analysis.extraction import MOCK_DATA_SAMPLE, simulate_extraction
from src.analysis.service import (
    ANALYSIS_TABLES_NOTE,
    DEFAULT_INTERPRETATION,
    AnalysisService,
)
from src.common.exceptions import KnownException, StageGateException
from src.projects.schemas import (
    AnalysisUpdate,
    DataCollectionPathway,
    EthicsStatus,
    ModuleStage,
    Proposal,
    ResearchProject,
)
from src.projects.service import ProjectService

ProjectFactory = Callable[..., ResearchProject]


@pytest.fixture
def analysis_service(
    project_service: ProjectService, mock_generation_service: Mock
) -> AnalysisService:
    return AnalysisService(
        project_service=project_service,
        generation_service=mock_generation_service,
    )


def test_requires_approved_proposal(
    analysis_service: AnalysisService, make_project: ProjectFactory
) -> None:
    early = make_project(ModuleStage.PROPOSAL_DEVELOPMENT)
    unapproved = make_project(
        ModuleStage.DATA_COLLECTION_ANALYSIS,
        proposal=Proposal(ethics_status=EthicsStatus.SUBMITTED),
    )

    for project in (early, unapproved):
        with pytest.raises(StageGateException, match="approved research proposal"):
            analysis_service.extract_data(project.id)


def test_generate_query(
    analysis_service: AnalysisService,
    mock_generation_service: Mock,
    make_project: ProjectFactory,
) -> None:
    mock_generation_service.generate_text.return_value = (
        "```sql\nSELECT age FROM patients;\n```"
    )
    project = make_project(ModuleStage.DATA_COLLECTION_ANALYSIS)

    updated = analysis_service.generate_query(project.id, " T2D patients ")

    assert updated.data_set is not None
    assert updated.data_set.source_query == "SELECT age FROM patients;"
    assert updated.data_set.name == "Extracted Dataset"
    assert updated.data_set.description == "Data from query: T2D patients"
    assert updated.data_set.collection_pathway == DataCollectionPathway.PATHWAY_A


def test_generate_query_blank(
    analysis_service: AnalysisService, make_project: ProjectFactory
) -> None:
    project = make_project(ModuleStage.DATA_COLLECTION_ANALYSIS)

    with pytest.raises(KnownException):
        analysis_service.generate_query(project.id, "  ")


def test_extract_requires_query(
    analysis_service: AnalysisService, make_project: ProjectFactory
) -> None:
    project = make_project(ModuleStage.DATA_COLLECTION_ANALYSIS)

    with pytest.raises(StageGateException, match="No SQL query"):
        analysis_service.extract_data(project.id)


def test_extract_and_review(
    analysis_service: AnalysisService,
    mock_generation_service: Mock,
    make_project: ProjectFactory,
) -> None:
    mock_generation_service.generate_text.return_value = "SELECT 1;"
    project = make_project(ModuleStage.DATA_COLLECTION_ANALYSIS)
    analysis_service.generate_query(project.id, "everything")

    extracted = analysis_service.extract_data(project.id)
    reviewed = analysis_service.review_data(project.id, approved=True)

    assert extracted.data_set is not None
    assert extracted.data_set.simulated_data is not None
    assert len(extracted.data_set.simulated_data) == len(MOCK_DATA_SAMPLE)
    assert reviewed.data_set is not None
    assert reviewed.data_set.data_engineer_reviewed is True
    assert reviewed.data_set.data_engineer_approved is True


def test_simulate_extraction() -> None:
    rows = simulate_extraction(random.Random(7))

    assert [row["name"] for row in rows] == [row["name"] for row in MOCK_DATA_SAMPLE]
    for row in rows:
        assert len(row["id"]) == 6
        assert row["diagnosis_code"].startswith("ICD10-")
        assert 5 <= float(row["hba1c"]) <= 10


def test_run_analysis_requires_plan_and_data(
    analysis_service: AnalysisService, make_project: ProjectFactory
) -> None:
    project = make_project(ModuleStage.DATA_COLLECTION_ANALYSIS)

    with pytest.raises(StageGateException, match="analysis plan"):
        analysis_service.run_analysis(project.id, "t-test")


def test_run_validate_and_proceed(
    analysis_service: AnalysisService,
    mock_generation_service: Mock,
    make_project: ProjectFactory,
) -> None:
    mock_generation_service.generate_text.side_effect = ["SELECT 1;", "Mean 7.1"]
    project = make_project(ModuleStage.DATA_COLLECTION_ANALYSIS)
    analysis_service.generate_query(project.id, "everything")
    analysis_service.extract_data(project.id)
    analysis_service.save_analysis(project.id, AnalysisUpdate(plan="t-test"))

    analysed = analysis_service.run_analysis(project.id)

    assert analysed.analysis is not None
    assert analysed.analysis.plan == "t-test"
    assert analysed.analysis.results == "Mean 7.1"
    assert analysed.analysis.tables == ANALYSIS_TABLES_NOTE
    assert analysed.analysis.is_validated is False
    prompt = mock_generation_service.generate_text.call_args.args[0]
    assert "Data Sample (first 3 rows)" in prompt

    with pytest.raises(StageGateException, match="validated by a Statistician"):
        analysis_service.proceed_to_manuscript(project.id)

    validated = analysis_service.validate_analysis(project.id)
    assert validated.analysis is not None
    assert validated.analysis.is_validated is True
    assert validated.analysis.statistician_interpretation == DEFAULT_INTERPRETATION

    updated = analysis_service.proceed_to_manuscript(project.id)
    assert updated.current_stage == ModuleStage.MANUSCRIPT_WRITING


def test_validate_without_results(
    analysis_service: AnalysisService, make_project: ProjectFactory
) -> None:
    project = make_project(ModuleStage.DATA_COLLECTION_ANALYSIS)

    with pytest.raises(StageGateException):
        analysis_service.validate_analysis(project.id, "Looks right")
