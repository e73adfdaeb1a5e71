from fastapi import APIRouter, Depends, status

from src.common.exceptions import ResourceType, resource_not_found_response
from src.projects.dependencies import get_project_service
from src.projects.schemas import (
    AssignExpertRequest,
    CreateProjectRequest,
    ResearchProject,
)
from src.projects.service import ProjectService
from src.users.dependencies import get_current_user, require_roles
from src.users.schemas import User, UserRole


router = APIRouter(
    prefix="/projects",
    tags=["Projects"],
    dependencies=[Depends(get_current_user)],
)


@router.get("")
def list_projects(
    project_service: ProjectService = Depends(get_project_service),
) -> list[ResearchProject]:
    return project_service.list_projects()


@router.post("", status_code=status.HTTP_201_CREATED)
def create_project(
    project_input: CreateProjectRequest,
    user: User = Depends(require_roles(UserRole.HCP)),
    project_service: ProjectService = Depends(get_project_service),
) -> ResearchProject:
    return project_service.create_project(project_input, user)


@router.get(
    "/{project_id}", responses={**resource_not_found_response(ResourceType.PROJECT)}
)
def get_project(
    project_id: str, project_service: ProjectService = Depends(get_project_service)
) -> ResearchProject:
    return project_service.get_project(project_id)


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_roles(UserRole.HCP))],
    responses={**resource_not_found_response(ResourceType.PROJECT)},
)
def delete_project(
    project_id: str, project_service: ProjectService = Depends(get_project_service)
):
    project_service.delete_project(project_id)


@router.post(
    "/{project_id}/experts",
    dependencies=[Depends(require_roles(UserRole.HCP))],
    responses={**resource_not_found_response(ResourceType.PROJECT)},
)
def assign_expert(
    project_id: str,
    assignment: AssignExpertRequest,
    project_service: ProjectService = Depends(get_project_service),
) -> ResearchProject:
    return project_service.assign_expert(project_id, assignment)
