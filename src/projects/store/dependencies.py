from fastapi import Request

from src.projects.store.base import ProjectStore


def get_project_store(request: Request) -> ProjectStore:
    return request.app.state.project_store
