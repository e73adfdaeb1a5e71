from enum import Enum
import logging
from typing import Any, Callable
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from redis.exceptions import ConnectionError

logger = logging.getLogger(__name__)


class ResourceType(str, Enum):
    PROJECT = "Project"
    TASK = "Task"
    MODEL = "Model"
    USER = "User"


# Exceptions
class ResourceNotFoundException(Exception):
    def __init__(
        self, resource_type: ResourceType, identifier: str, message: str | None = None
    ):
        self.resource_type = resource_type.value
        self.identifier = identifier
        if message:
            super().__init__(message)
        else:
            super().__init__(f"{self.resource_type} '{identifier}' not found")


class ResourceAlreadyExistsException(Exception):
    def __init__(self, resource_type: ResourceType, identifier: str):
        self.resource_type = resource_type.value
        self.identifier = identifier
        super().__init__(f"{self.resource_type} '{identifier}' already exists")


class KnownException(Exception):
    def __init__(self, message: str):
        super().__init__(message)


class StageGateException(Exception):
    """A workflow precondition for the requested operation is not met."""

    def __init__(self, message: str):
        super().__init__(message)


class UpstreamServiceException(Exception):
    def __init__(self, service: str, message: str):
        self.service = service
        super().__init__(f"{service}: {message}")


# Exception handlers
ExceptionHandler = Callable[[Request, Exception], JSONResponse]


def detail_handler(status_code: int, log_level: int = logging.ERROR) -> ExceptionHandler:
    """Build a handler that logs the exception and returns it as the detail."""

    def handler(request: Request, exc: Exception) -> JSONResponse:
        logger.log(log_level, exc)
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    return handler


resource_not_found_handler = detail_handler(status.HTTP_404_NOT_FOUND)
resource_already_exists_handler = detail_handler(status.HTTP_409_CONFLICT)
known_exception_handler = detail_handler(status.HTTP_400_BAD_REQUEST)
stage_gate_exception_handler = detail_handler(
    status.HTTP_409_CONFLICT, log_level=logging.WARNING
)
upstream_service_exception_handler = detail_handler(status.HTTP_502_BAD_GATEWAY)


def unexpected_exception_handler(request: Request, exc: Exception):
    logger.error(exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An unexpected error occurred"},
    )


def redis_connection_exception_handler(request: Request, exc: ConnectionError):
    logger.error(f"Failed to connect to Redis: {exc}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Service unavailable"},
    )


def validation_exception_handler(request: Request, exc: RequestValidationError):
    def loc_to_dot_sep(loc: tuple[Any, ...]) -> str:
        """Convert a tuple of location parts to a dot-separated string"""
        path = ""
        for i, x in enumerate(loc):
            if isinstance(x, str):
                if i > 0:
                    path += "."
                path += x
            elif isinstance(x, int):
                path += f"[{x}]"
            else:
                raise TypeError("Unexpected type")
        return path

    def process_error(error: dict[str, Any]) -> dict[str, Any]:
        error["loc"] = loc_to_dot_sep(error["loc"])
        error.pop("ctx", None)
        error.pop("url", None)
        return error

    errors = [process_error(error) for error in exc.errors()]

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": "Validation error", "errors": errors},
    )


# Response definitions for OpenAPI documentation
ResponseDict = dict[int | str, dict[str, Any]]


def resource_not_found_response(
    resource_type: ResourceType,
) -> ResponseDict:
    return {
        404: {
            "description": f"{resource_type.value} not found",
            "content": {
                "application/json": {
                    "example": {"detail": f"{resource_type.value} 'example' not found"}
                }
            },
        }
    }


def stage_gate_response(example: str) -> ResponseDict:
    return {
        409: {
            "description": "Workflow precondition not met",
            "content": {"application/json": {"example": {"detail": example}}},
        }
    }


upstream_service_response: ResponseDict = {
    502: {
        "description": "Upstream service error",
        "content": {
            "application/json": {
                "example": {"detail": "Task API: Failed to submit task"}
            }
        },
    }
}

service_unavailable_response: ResponseDict = {
    503: {
        "description": "Service unavailable",
        "content": {"application/json": {"example": {"detail": "Service unavailable"}}},
    }
}

internal_error_response: ResponseDict = {
    500: {
        "description": "Internal server error",
        "content": {
            "application/json": {"example": {"detail": "An unexpected error occurred"}}
        },
    }
}

validation_error_response: ResponseDict = {
    422: {
        "description": "Validation error",
        "content": {
            "application/json": {
                "example": {
                    "detail": "Validation error",
                    "errors": [
                        {
                            "type": "type",
                            "loc": "field.sub_field",
                            "msg": "error message",
                            "input": "input value",
                        }
                    ],
                }
            }
        },
    }
}
