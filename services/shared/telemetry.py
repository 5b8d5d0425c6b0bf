"""OpenTelemetry setup shared by both services.

Builds one tracer provider, one meter provider and the W3C propagator per
process and hands them out as a ``Telemetry`` object. Nothing is installed
globally; handlers receive the object explicitly.
"""

import os
from dataclasses import dataclass, field

from opentelemetry import trace, metrics
from opentelemetry.baggage.propagation import W3CBaggagePropagator
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.propagators.composite import CompositePropagator
from opentelemetry.propagators.textmap import TextMapPropagator
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource, SERVICE_NAME, SERVICE_NAMESPACE
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

from shared.logging_config import configure_logging


def create_propagator() -> TextMapPropagator:
    """W3C Trace Context + W3C Baggage."""
    return CompositePropagator([TraceContextTextMapPropagator(), W3CBaggagePropagator()])


@dataclass
class Telemetry:
    """Tracer/meter/propagator bundle owned by one service process."""

    service_name: str
    tracer_provider: TracerProvider
    meter_provider: MeterProvider
    propagator: TextMapPropagator = field(default_factory=create_propagator)

    @property
    def tracer(self) -> trace.Tracer:
        return self.tracer_provider.get_tracer(self.service_name)

    @property
    def meter(self) -> metrics.Meter:
        return self.meter_provider.get_meter(self.service_name)

    def shutdown(self):
        """Flush pending spans and metrics. Call once at process exit."""
        self.tracer_provider.shutdown()
        self.meter_provider.shutdown()


def _create_resource(service_name: str, namespace: str) -> Resource:
    attrs = {
        SERVICE_NAME: service_name,
        SERVICE_NAMESPACE: namespace,
        "service.version": os.getenv("SERVICE_VERSION", "0.1.0"),
        "service.instance.id": os.getenv("HOSTNAME", f"{service_name}-local"),
        "deployment.environment": os.getenv("ENVIRONMENT", "dev"),
    }
    return Resource.create(attrs)


def setup_telemetry(service_name: str, namespace: str = "") -> Telemetry:
    """Initialize OpenTelemetry exporters and JSON logging for a service."""
    namespace = namespace or os.getenv("SERVICE_NAMESPACE", "weather")
    resource = _create_resource(service_name, namespace)

    otlp_endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4317")

    # Tracing
    tracer_provider = TracerProvider(resource=resource)
    tracer_provider.add_span_processor(
        BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True))
    )

    # Metrics
    metric_reader = PeriodicExportingMetricReader(
        OTLPMetricExporter(endpoint=otlp_endpoint, insecure=True),
        export_interval_millis=30000
    )
    meter_provider = MeterProvider(resource=resource, metric_readers=[metric_reader])

    configure_logging(service_name, namespace, level=os.getenv("LOG_LEVEL", "INFO"))

    return Telemetry(service_name, tracer_provider, meter_provider)
