from typing import Callable
import pytest
from unittest.mock import Mock

from src.common.exceptions import KnownException, StageGateException
from src.ideation.schemas import AutonomousIdea, GeneratedIdeaReport
from src.ideation.service import IdeationService
from src.projects.schemas import (
    IdeaUpdate,
    IdeationMode,
    ModuleStage,
    ResearchIdea,
    ResearchProject,
)
from src.projects.service import ProjectService

ProjectFactory = Callable[..., ResearchProject]

SAMPLE_REPORT = GeneratedIdeaReport(
    literature_summary="Few trials",
    research_gaps="Long term outcomes",
    novelty_score=82,
    similarity_score=20,
    feasibility_assessment="Feasible",
    ai_suggestions="Narrow the population",
)


@pytest.fixture
def ideation_service(
    project_service: ProjectService, mock_generation_service: Mock
) -> IdeationService:
    return IdeationService(
        project_service=project_service,
        generation_service=mock_generation_service,
    )


def test_generate_report_requires_concept(
    ideation_service: IdeationService,
    mock_generation_service: Mock,
    make_project: ProjectFactory,
) -> None:
    project = make_project()

    with pytest.raises(KnownException, match="initial research concept"):
        ideation_service.generate_report(project.id)

    mock_generation_service.generate_json.assert_not_called()


def test_generate_report_stores_report(
    ideation_service: IdeationService,
    mock_generation_service: Mock,
    make_project: ProjectFactory,
) -> None:
    mock_generation_service.generate_json.return_value = SAMPLE_REPORT
    project = make_project()

    updated = ideation_service.generate_report(
        project.id, IdeaUpdate(concept="Remote HbA1c monitoring", objective="Lower HbA1c")
    )

    assert updated.idea is not None
    assert updated.idea.concept == "Remote HbA1c monitoring"
    assert updated.idea.ai_report is not None
    assert updated.idea.ai_report.research_gaps == "Long term outcomes"
    assert updated.idea.novelty_score == 82
    assert updated.idea.similarity_score == 20

    prompt = mock_generation_service.generate_json.call_args.args[0]
    assert "Core Concept: Remote HbA1c monitoring" in prompt
    assert "Objective/Hypothesis: Lower HbA1c" in prompt
    assert "Background: Not provided" in prompt


def test_report_schema_accepts_camel_case() -> None:
    report = GeneratedIdeaReport.model_validate(
        {
            "literatureSummary": "LS",
            "researchGaps": "RG",
            "noveltyScore": 50,
            "similarityScore": 10,
            "feasibilityAssessment": "FA",
        }
    )

    assert report.literature_summary == "LS"
    assert report.ai_suggestions is None


def test_generate_autonomous_ideas(
    ideation_service: IdeationService,
    mock_generation_service: Mock,
    make_project: ProjectFactory,
) -> None:
    ideas = [AutonomousIdea(id="idea_1", question="Q1", rationale="R1")]
    mock_generation_service.generate_json.return_value = ideas
    project = make_project()

    assert ideation_service.generate_autonomous_ideas(project.id) == ideas


def test_select_autonomous_idea_clears_report(
    ideation_service: IdeationService,
    mock_generation_service: Mock,
    make_project: ProjectFactory,
) -> None:
    mock_generation_service.generate_json.return_value = SAMPLE_REPORT
    project = make_project(idea=ResearchIdea(concept="Old concept"))
    ideation_service.generate_report(project.id)

    updated = ideation_service.select_autonomous_idea(
        project.id, AutonomousIdea(id="idea_2", question="New Q", rationale="Because")
    )

    assert updated.idea is not None
    assert updated.idea.concept == "New Q"
    assert updated.idea.background == "Because"
    assert updated.idea.ideation_mode == IdeationMode.AUTONOMOUS_AI
    assert updated.idea.ai_report is None
    assert updated.idea.novelty_score is None


def test_proceed_requires_report(
    ideation_service: IdeationService, make_project: ProjectFactory
) -> None:
    project = make_project(idea=ResearchIdea(concept="C"))

    with pytest.raises(StageGateException, match="AI Analysis Report"):
        ideation_service.proceed_to_proposal(project.id)


def test_proceed_without_idea(
    ideation_service: IdeationService, make_project: ProjectFactory
) -> None:
    project = make_project()

    with pytest.raises(StageGateException):
        ideation_service.proceed_to_proposal(project.id)


def test_proceed_co_creation_without_report(
    ideation_service: IdeationService, make_project: ProjectFactory
) -> None:
    project = make_project(
        idea=ResearchIdea(concept="C", ideation_mode=IdeationMode.AI_CO_CREATION)
    )

    updated = ideation_service.proceed_to_proposal(project.id)

    assert updated.current_stage == ModuleStage.PROPOSAL_DEVELOPMENT


def test_proceed_with_report(
    ideation_service: IdeationService,
    mock_generation_service: Mock,
    make_project: ProjectFactory,
) -> None:
    mock_generation_service.generate_json.return_value = SAMPLE_REPORT
    project = make_project(idea=ResearchIdea(concept="C"))
    ideation_service.generate_report(project.id)

    updated = ideation_service.proceed_to_proposal(project.id)

    assert updated.current_stage == ModuleStage.PROPOSAL_DEVELOPMENT
