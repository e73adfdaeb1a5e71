import logging
from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.sdk.resources import Resource, SERVICE_NAME, SERVICE_VERSION
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.aiohttp_client import AioHttpClientInstrumentor  # type: ignore
from opentelemetry.instrumentation.openai import OpenAIInstrumentor  # type: ignore
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor  # type: ignore

from src.config import Settings

logger = logging.getLogger(__name__)


def setup_opentelemetry(settings: Settings, app: FastAPI) -> None:
    """Export traces over OTLP/HTTP for the API, model calls and Task API polling.

    The exporter endpoint is taken from the standard OTEL_EXPORTER_OTLP_*
    environment variables.
    """
    resource = Resource(
        attributes={
            SERVICE_NAME: settings.OTEL_SERVICE_NAME,
            SERVICE_VERSION: settings.APP_VERSION,
        }
    )
    trace_provider = TracerProvider(resource=resource)
    trace_provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter()))
    trace.set_tracer_provider(trace_provider)

    FastAPIInstrumentor.instrument_app(app)  # type: ignore
    OpenAIInstrumentor().instrument()
    AioHttpClientInstrumentor().instrument()

    logger.info(
        f"Tracing enabled for service '{settings.OTEL_SERVICE_NAME}' "
        "(FastAPI, OpenAI, aiohttp client)"
    )
