import logging
from uuid import uuid4

from src.common.current_datetime import get_current_datetime
from src.common.exceptions import KnownException, ResourceNotFoundException, ResourceType
from src.projects import mutations
from src.projects.schemas import (
    AnalysisUpdate,
    AssignExpertRequest,
    CreateProjectRequest,
    DataSetUpdate,
    ExpertRole,
    IdeaUpdate,
    ManuscriptUpdate,
    ProposalUpdate,
    ResearchProject,
)
from src.projects.store.base import ProjectStore
from src.users.constants import find_user
from src.users.schemas import User, UserRole

logger = logging.getLogger(__name__)

EXPERT_ROLES: dict[ExpertRole, UserRole] = {
    ExpertRole.RESEARCHER: UserRole.RESEARCHER,
    ExpertRole.STATISTICIAN: UserRole.STATISTICIAN,
    ExpertRole.DATA_ENGINEER: UserRole.DATA_ENGINEER,
}


class ProjectService:
    def __init__(self, project_store: ProjectStore):
        self.project_store = project_store

    def list_projects(self) -> list[ResearchProject]:
        return self.project_store.list_projects()

    def create_project(
        self, project_input: CreateProjectRequest, user: User
    ) -> ResearchProject:
        if not project_input.title.strip():
            raise KnownException("Project title cannot be empty.")

        project = mutations.new_project(
            id=str(uuid4()),
            title=project_input.title,
            hcp_id=user.id,
            ideation_mode=project_input.ideation_mode,
            timestamp=get_current_datetime(),
        )
        logger.info(f"Starting project '{project.id}' for user '{user.id}'")
        return self.project_store.create_project(project)

    def get_project(self, project_id: str) -> ResearchProject:
        return self.project_store.get_project(project_id)

    def save_project(self, project: ResearchProject) -> ResearchProject:
        return self.project_store.save_project(project)

    def delete_project(self, project_id: str) -> None:
        self.project_store.delete_project(project_id)

    def assign_expert(
        self, project_id: str, assignment: AssignExpertRequest
    ) -> ResearchProject:
        expert = find_user(assignment.user_id)
        if not expert:
            raise ResourceNotFoundException(ResourceType.USER, assignment.user_id)

        if expert.role != EXPERT_ROLES[assignment.role]:
            raise KnownException(
                f"User '{expert.id}' is not a {EXPERT_ROLES[assignment.role].value}"
            )

        project = self.project_store.get_project(project_id)
        project = mutations.assign_expert(
            project, assignment.role, expert.id, get_current_datetime()
        )
        logger.info(
            f"Assigned {assignment.role.value} '{expert.id}' to project '{project_id}'"
        )
        return self.project_store.save_project(project)

    def update_idea(self, project_id: str, updates: IdeaUpdate) -> ResearchProject:
        project = self.project_store.get_project(project_id)
        return self.project_store.save_project(
            mutations.update_idea(project, updates, get_current_datetime())
        )

    def update_proposal(
        self, project_id: str, updates: ProposalUpdate
    ) -> ResearchProject:
        project = self.project_store.get_project(project_id)
        return self.project_store.save_project(
            mutations.update_proposal(project, updates, get_current_datetime())
        )

    def update_data_set(
        self, project_id: str, updates: DataSetUpdate
    ) -> ResearchProject:
        project = self.project_store.get_project(project_id)
        return self.project_store.save_project(
            mutations.update_data_set(project, updates, get_current_datetime())
        )

    def update_analysis(
        self, project_id: str, updates: AnalysisUpdate
    ) -> ResearchProject:
        project = self.project_store.get_project(project_id)
        return self.project_store.save_project(
            mutations.update_analysis(project, updates, get_current_datetime())
        )

    def update_manuscript(
        self, project_id: str, updates: ManuscriptUpdate
    ) -> ResearchProject:
        project = self.project_store.get_project(project_id)
        return self.project_store.save_project(
            mutations.update_manuscript(project, updates, get_current_datetime())
        )
