from datetime import datetime, timezone
import pytest

from src.projects import mutations
from src.projects.schemas import (
    AnalysisUpdate,
    EthicsStatus,
    ExpertRole,
    IdeaUpdate,
    IdeationMode,
    ManuscriptUpdate,
    ModuleStage,
    Proposal,
    ProposalUpdate,
    ResearchProject,
)

CREATED_AT = datetime(2024, 1, 1, tzinfo=timezone.utc)
UPDATED_AT = datetime(2024, 1, 2, tzinfo=timezone.utc)


@pytest.fixture
def project() -> ResearchProject:
    return mutations.new_project(
        id="p-1",
        title="  Telehealth follow-up  ",
        hcp_id="user_hcp_1",
        ideation_mode=IdeationMode.CLINICIAN_LED,
        timestamp=CREATED_AT,
    )


def test_new_project(project: ResearchProject) -> None:
    assert project.title == "Telehealth follow-up"
    assert project.current_stage == ModuleStage.IDEA_GENERATION
    assert project.idea is not None
    assert project.idea.concept == ""
    assert project.idea.ideation_mode == IdeationMode.CLINICIAN_LED
    assert project.created_at == project.updated_at == CREATED_AT


def test_update_idea_applies_only_set_fields(project: ResearchProject) -> None:
    updated = mutations.update_idea(
        project, IdeaUpdate(concept="Remote HbA1c monitoring"), UPDATED_AT
    )
    updated = mutations.update_idea(
        updated, IdeaUpdate(background="Rising T2D prevalence"), UPDATED_AT
    )

    assert updated.idea is not None
    assert updated.idea.concept == "Remote HbA1c monitoring"
    assert updated.idea.background == "Rising T2D prevalence"
    assert updated.idea.ideation_mode == IdeationMode.CLINICIAN_LED
    assert updated.updated_at == UPDATED_AT


def test_update_idea_can_clear_fields(project: ResearchProject) -> None:
    updated = mutations.update_idea(
        project, IdeaUpdate(concept="C", novelty_score=80), UPDATED_AT
    )
    cleared = mutations.update_idea(updated, IdeaUpdate(novelty_score=None), UPDATED_AT)

    assert cleared.idea is not None
    assert cleared.idea.novelty_score is None
    assert cleared.idea.concept == "C"


def test_mutations_do_not_modify_argument(project: ResearchProject) -> None:
    before = project.model_dump()

    mutations.update_idea(project, IdeaUpdate(concept="Changed"), UPDATED_AT)
    mutations.set_stage(project, ModuleStage.MANUSCRIPT_WRITING, UPDATED_AT)
    mutations.assign_expert(project, ExpertRole.RESEARCHER, "user_researcher_1", UPDATED_AT)

    assert project.model_dump() == before


def test_update_proposal_merges_sections(project: ResearchProject) -> None:
    project = project.model_copy(
        update={"proposal": Proposal(sections={"background": "B", "objectives": "O"})}
    )

    updated = mutations.update_proposal(
        project,
        ProposalUpdate(
            sections={"objectives": "New O", "budget": "10k"},
            ethics_status=EthicsStatus.SUBMITTED,
        ),
        UPDATED_AT,
    )

    assert updated.proposal is not None
    assert updated.proposal.sections == {
        "background": "B",
        "objectives": "New O",
        "budget": "10k",
    }
    assert updated.proposal.ethics_status == EthicsStatus.SUBMITTED


def test_update_proposal_without_existing(project: ResearchProject) -> None:
    updated = mutations.update_proposal(
        project, ProposalUpdate(title="Proposal"), UPDATED_AT
    )

    assert updated.proposal is not None
    assert updated.proposal.title == "Proposal"
    assert updated.proposal.ethics_status == EthicsStatus.NOT_SUBMITTED


def test_update_analysis_and_manuscript(project: ResearchProject) -> None:
    updated = mutations.update_analysis(
        project, AnalysisUpdate(plan="t-test", is_validated=False), UPDATED_AT
    )
    updated = mutations.update_manuscript(
        updated, ManuscriptUpdate(sections={"abstract": "A"}), UPDATED_AT
    )
    updated = mutations.update_manuscript(
        updated, ManuscriptUpdate(sections={"results": "R"}), UPDATED_AT
    )

    assert updated.analysis is not None
    assert updated.analysis.plan == "t-test"
    assert updated.manuscript is not None
    assert updated.manuscript.sections == {"abstract": "A", "results": "R"}


@pytest.mark.parametrize(
    "role, field",
    [
        (ExpertRole.RESEARCHER, "assigned_researcher"),
        (ExpertRole.STATISTICIAN, "assigned_statistician"),
        (ExpertRole.DATA_ENGINEER, "assigned_data_engineer"),
    ],
)
def test_assign_expert(project: ResearchProject, role: ExpertRole, field: str) -> None:
    updated = mutations.assign_expert(project, role, "user-x", UPDATED_AT)

    assert getattr(updated, field) == "user-x"
    assert updated.updated_at == UPDATED_AT


def test_set_stage(project: ResearchProject) -> None:
    updated = mutations.set_stage(project, ModuleStage.PROPOSAL_DEVELOPMENT, UPDATED_AT)

    assert updated.current_stage == ModuleStage.PROPOSAL_DEVELOPMENT
    assert project.current_stage == ModuleStage.IDEA_GENERATION
