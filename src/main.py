import logging
from contextlib import asynccontextmanager
from datetime import timedelta
from fastapi import FastAPI, Depends
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from redis.exceptions import ConnectionError

from src.common.api_key import get_api_key
from src.common.exceptions import (
    KnownException,
    ResourceAlreadyExistsException,
    ResourceNotFoundException,
    StageGateException,
    UpstreamServiceException,
    known_exception_handler,
    resource_already_exists_handler,
    resource_not_found_handler,
    stage_gate_exception_handler,
    upstream_service_exception_handler,
    unexpected_exception_handler,
    redis_connection_exception_handler,
    validation_exception_handler,
    service_unavailable_response,
    internal_error_response,
    validation_error_response,
)
from src.common.opentelemetry import setup_opentelemetry
from src.common.redis import create_redis_client
from src.config import get_settings
from src.async_tasks.dependencies import create_task_client
from src.generation.exceptions import GenerationException, generation_exception_handler
from src.projects.store.backend import get_project_store_backend
from src.questions.registry import QuestionRegistry
from src.healthcheck.router import router as health_router
from src.users.router import router as users_router
from src.projects.router import router as projects_router
from src.questions.router import router as questions_router
from src.ideation.router import router as ideation_router
from src.proposals.router import router as proposals_router
from src.analysis.router import router as analysis_router
from src.manuscripts.router import router as manuscripts_router

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.redis_client = create_redis_client(settings.REDIS_URL)
    app.state.project_store = get_project_store_backend(
        app.state.redis_client, settings
    )
    app.state.task_client = create_task_client(settings)
    app.state.question_registry = QuestionRegistry(
        retention=timedelta(seconds=settings.QUESTION_RETENTION_SECONDS)
    )
    yield
    await app.state.question_registry.shutdown()
    await app.state.task_client.transport.close()
    app.state.redis_client.close()


app = FastAPI(
    title=settings.API_NAME,
    summary=settings.API_SUMMARY,
    dependencies=[Depends(get_api_key)],
    lifespan=lifespan,
    responses={
        **service_unavailable_response,
        **internal_error_response,
        **validation_error_response,
    },
    version=settings.APP_VERSION,
)

if settings.OTEL_ENABLED:
    setup_opentelemetry(settings, app)

if settings.CORS_ENABLED:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.exception_handler(RequestValidationError)(validation_exception_handler)
app.exception_handler(ResourceNotFoundException)(resource_not_found_handler)
app.exception_handler(ResourceAlreadyExistsException)(resource_already_exists_handler)
app.exception_handler(KnownException)(known_exception_handler)
app.exception_handler(StageGateException)(stage_gate_exception_handler)
app.exception_handler(UpstreamServiceException)(upstream_service_exception_handler)
app.exception_handler(GenerationException)(generation_exception_handler)
app.exception_handler(ConnectionError)(redis_connection_exception_handler)
app.exception_handler(Exception)(unexpected_exception_handler)


app.include_router(health_router)
app.include_router(users_router)
app.include_router(projects_router)
app.include_router(questions_router)
app.include_router(ideation_router)
app.include_router(proposals_router)
app.include_router(analysis_router)
app.include_router(manuscripts_router)
