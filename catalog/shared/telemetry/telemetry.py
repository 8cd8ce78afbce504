"""OpenTelemetry tracing for the catalog coordinator.

Builds a tracer provider from Settings and instruments the clients the
coordinator talks to: redis, the SQLAlchemy engine, and logging (trace
ids in log records). Everything instrumented here is uninstrumented on
shutdown, so open_coordinator() can be entered more than once per process.
"""

import logging
from typing import Any

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.instrumentor import BaseInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.instrumentation.redis import RedisInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased
from sqlalchemy.ext.asyncio import AsyncEngine

from catalog.core.config import Settings

logger = logging.getLogger(__name__)


def build_span_exporter(
    exporter_type: str, otlp_endpoint: str | None = None
) -> SpanExporter | None:
    """Return the span exporter for TELEMETRY_EXPORTER, or None for "none".

    "otlp" without an endpoint, and unknown types, fall back to console.
    """
    if exporter_type == "none":
        return None
    if exporter_type == "otlp" and otlp_endpoint:
        return OTLPSpanExporter(
            endpoint=otlp_endpoint,
            insecure=otlp_endpoint.startswith("http://"),
        )
    if exporter_type != "console":
        logger.warning(
            "Exporter %r unusable (endpoint=%r), using console", exporter_type, otlp_endpoint
        )
    return ConsoleSpanExporter()


class TelemetryConfig:
    """Tracer provider plus the instrumentors enabled for one coordinator lifetime."""

    def __init__(
        self,
        service_name: str,
        service_version: str,
        environment: str = "development",
    ) -> None:
        self.service_name = service_name
        self.service_version = service_version
        self.environment = environment
        self.tracer_provider: TracerProvider | None = None
        self._instrumentors: list[BaseInstrumentor] = []

    @classmethod
    def from_settings(cls, settings: Settings) -> "TelemetryConfig":
        return cls(
            service_name=settings.app_name,
            service_version=settings.app_version,
            environment=settings.telemetry_environment,
        )

    def setup_telemetry(
        self,
        exporter_type: str = "console",
        otlp_endpoint: str | None = None,
        sample_rate: float = 1.0,
    ) -> TracerProvider:
        """Create the tracer provider and install it as the global provider.

        Args:
            exporter_type: "console", "otlp", or "none" (spans are sampled
                but not exported).
            otlp_endpoint: OTLP gRPC endpoint (e.g. http://localhost:4317).
            sample_rate: Root sampling ratio 0.0-1.0; child spans follow the parent.
        """
        resource = Resource.create(
            {
                SERVICE_NAME: self.service_name,
                SERVICE_VERSION: self.service_version,
                "deployment.environment": self.environment,
            }
        )
        provider = TracerProvider(
            resource=resource, sampler=ParentBased(TraceIdRatioBased(sample_rate))
        )
        exporter = build_span_exporter(exporter_type, otlp_endpoint)
        if exporter is not None:
            provider.add_span_processor(BatchSpanProcessor(exporter))
        trace.set_tracer_provider(provider)
        self.tracer_provider = provider
        logger.info(
            "OpenTelemetry initialized: service=%s, version=%s, exporter=%s",
            self.service_name,
            self.service_version,
            exporter_type,
        )
        return provider

    def _instrument(self, instrumentor: BaseInstrumentor, label: str, **kwargs: Any) -> None:
        if self.tracer_provider is None or instrumentor.is_instrumented_by_opentelemetry:
            return
        try:
            instrumentor.instrument(tracer_provider=self.tracer_provider, **kwargs)
        except Exception as e:
            logger.exception("Failed to instrument %s: %s", label, e)
            return
        self._instrumentors.append(instrumentor)
        logger.info("%s instrumentation enabled", label)

    def instrument_clients(self) -> None:
        """Instrument redis commands and inject trace context into log records."""
        self._instrument(RedisInstrumentor(), "Redis")
        self._instrument(LoggingInstrumentor(), "logging", set_logging_format=True)

    def instrument_sqlalchemy(self, engine: AsyncEngine) -> None:
        """Instrument queries on the store engine."""
        self._instrument(SQLAlchemyInstrumentor(), "SQLAlchemy", engine=engine.sync_engine)

    def shutdown(self) -> None:
        """Undo instrumentation, then flush and close the tracer provider."""
        while self._instrumentors:
            self._instrumentors.pop().uninstrument()
        if self.tracer_provider is not None:
            self.tracer_provider.shutdown()
            self.tracer_provider = None
            logger.info("Telemetry shutdown complete")
