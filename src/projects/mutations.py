"""Named mutations of a research project.

Each function takes the current project and an input, and returns a new
project. Arguments are never modified.
"""

from datetime import datetime
from typing import TypeVar
from pydantic import BaseModel

from src.projects.schemas import (
    AnalysisUpdate,
    DataSet,
    DataSetUpdate,
    ExpertRole,
    IdeaUpdate,
    IdeationMode,
    Manuscript,
    ManuscriptUpdate,
    ModuleStage,
    Proposal,
    ProposalUpdate,
    ResearchIdea,
    ResearchProject,
    StatisticalAnalysis,
)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _merge(current: ModelT, updates: BaseModel, *, merge_dicts: tuple[str, ...] = ()) -> ModelT:
    merged = current.model_dump()
    changes = updates.model_dump(exclude_unset=True)

    for key in merge_dicts:
        if changes.get(key) is not None:
            changes[key] = {**merged.get(key, {}), **changes[key]}

    merged.update(changes)
    return type(current).model_validate(merged)


def _touch(project: ResearchProject, timestamp: datetime, **changes: object) -> ResearchProject:
    return project.model_copy(update={**changes, "updated_at": timestamp}, deep=True)


def new_project(
    *,
    id: str,
    title: str,
    hcp_id: str,
    ideation_mode: IdeationMode,
    timestamp: datetime,
) -> ResearchProject:
    return ResearchProject(
        id=id,
        title=title.strip(),
        hcp_id=hcp_id,
        current_stage=ModuleStage.IDEA_GENERATION,
        idea=ResearchIdea(concept="", ideation_mode=ideation_mode),
        created_at=timestamp,
        updated_at=timestamp,
    )


def update_idea(
    project: ResearchProject, updates: IdeaUpdate, timestamp: datetime
) -> ResearchProject:
    idea = _merge(project.idea or ResearchIdea(), updates)
    return _touch(project, timestamp, idea=idea)


def update_proposal(
    project: ResearchProject, updates: ProposalUpdate, timestamp: datetime
) -> ResearchProject:
    proposal = _merge(project.proposal or Proposal(), updates, merge_dicts=("sections",))
    return _touch(project, timestamp, proposal=proposal)


def update_data_set(
    project: ResearchProject, updates: DataSetUpdate, timestamp: datetime
) -> ResearchProject:
    data_set = _merge(project.data_set or DataSet(), updates)
    return _touch(project, timestamp, data_set=data_set)


def update_analysis(
    project: ResearchProject, updates: AnalysisUpdate, timestamp: datetime
) -> ResearchProject:
    analysis = _merge(project.analysis or StatisticalAnalysis(), updates)
    return _touch(project, timestamp, analysis=analysis)


def update_manuscript(
    project: ResearchProject, updates: ManuscriptUpdate, timestamp: datetime
) -> ResearchProject:
    manuscript = _merge(
        project.manuscript or Manuscript(), updates, merge_dicts=("sections",)
    )
    return _touch(project, timestamp, manuscript=manuscript)


def assign_expert(
    project: ResearchProject, role: ExpertRole, user_id: str, timestamp: datetime
) -> ResearchProject:
    if role == ExpertRole.RESEARCHER:
        return _touch(project, timestamp, assigned_researcher=user_id)
    if role == ExpertRole.STATISTICIAN:
        return _touch(project, timestamp, assigned_statistician=user_id)
    return _touch(project, timestamp, assigned_data_engineer=user_id)


def set_stage(
    project: ResearchProject, stage: ModuleStage, timestamp: datetime
) -> ResearchProject:
    return _touch(project, timestamp, current_stage=stage)
