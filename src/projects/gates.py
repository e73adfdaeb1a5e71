from src.common.exceptions import StageGateException
from src.projects.schemas import MODULE_STAGES_ORDERED, ModuleStage, ResearchProject


def stage_reached(project: ResearchProject, stage: ModuleStage) -> bool:
    return MODULE_STAGES_ORDERED.index(
        project.current_stage
    ) >= MODULE_STAGES_ORDERED.index(stage)


def require_stage(project: ResearchProject, stage: ModuleStage, message: str) -> None:
    if not stage_reached(project, stage):
        raise StageGateException(message)
