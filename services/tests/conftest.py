"""Shared fixtures: in-memory telemetry, stubbed upstreams, wired apps."""

import httpx
import pytest
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from shared.telemetry import Telemetry
from ingress.config import IngressSettings
from ingress.main import create_app as create_ingress_app
from orchestrator.config import OrchestratorSettings
from orchestrator.main import create_app as create_orchestrator_app

VIACEP_URL = "http://viacep.test/ws"
WEATHER_URL = "http://weather.test/v1"
ORCHESTRATOR_URL = "http://orchestrator.test/"


def make_telemetry(service_name: str):
    """Telemetry whose spans land in an in-memory exporter."""
    exporter = InMemorySpanExporter()
    tracer_provider = TracerProvider()
    tracer_provider.add_span_processor(SimpleSpanProcessor(exporter))
    return Telemetry(service_name, tracer_provider, MeterProvider()), exporter


def spans_by_name(exporter: InMemorySpanExporter) -> dict:
    return {span.name: span for span in exporter.get_finished_spans()}


class FakeUpstreams:
    """Stands in for the postal-code directory and the weather provider."""

    def __init__(self):
        self.city = "São Paulo"
        self.temp_c = 28.5
        self.viacep_status = 200
        self.weather_status = 200
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.url.host == "viacep.test":
            if self.viacep_status != 200:
                return httpx.Response(self.viacep_status, text="upstream error")
            if self.city is None:
                return httpx.Response(200, json={"erro": "true"})
            return httpx.Response(200, json={"cep": "01001-000", "localidade": self.city, "uf": "SP"})

        if request.url.host == "weather.test":
            if self.weather_status != 200:
                return httpx.Response(self.weather_status, json={"error": {"code": 2006}})
            return httpx.Response(
                200,
                json={"location": {"name": self.city}, "current": {"temp_c": self.temp_c, "temp_f": 0}},
            )

        raise httpx.ConnectError(f"unknown host {request.url.host}", request=request)

    def hosts(self) -> list:
        return [request.url.host for request in self.requests]


@pytest.fixture
def upstreams():
    return FakeUpstreams()


@pytest.fixture
def orchestrator_telemetry():
    return make_telemetry("orchestrator")


@pytest.fixture
def ingress_telemetry():
    return make_telemetry("ingress")


@pytest.fixture
def orchestrator_settings():
    return OrchestratorSettings(
        weather_api_key="test-key",
        viacep_base_url=VIACEP_URL,
        weather_api_base_url=WEATHER_URL,
    )


@pytest.fixture
def orchestrator_app(upstreams, orchestrator_telemetry, orchestrator_settings):
    telemetry, _ = orchestrator_telemetry
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(upstreams))
    return create_orchestrator_app(orchestrator_settings, telemetry, http_client)


@pytest.fixture
def ingress_app(orchestrator_app, ingress_telemetry):
    telemetry, _ = ingress_telemetry
    # The orchestrator app is reached in-process, across a real HTTP exchange
    http_client = httpx.AsyncClient(transport=httpx.ASGITransport(app=orchestrator_app))
    return create_ingress_app(IngressSettings(orchestrator_url=ORCHESTRATOR_URL), telemetry, http_client)


@pytest.fixture
async def orchestrator_client(orchestrator_app):
    transport = httpx.ASGITransport(app=orchestrator_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://orchestrator.test") as client:
        yield client


@pytest.fixture
async def ingress_client(ingress_app):
    transport = httpx.ASGITransport(app=ingress_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://ingress.test") as client:
        yield client
