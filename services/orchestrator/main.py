"""Orchestrator API - resolves a CEP to city and temperature (service B)."""

from contextlib import asynccontextmanager
from typing import Optional

import httpx
import uvicorn
from fastapi import FastAPI

from shared.lookup_client import LookupClient
from shared.metrics import RequestMetrics
from shared.telemetry import Telemetry, setup_telemetry
from shared.tracing import TraceContextMiddleware
from orchestrator.config import OrchestratorSettings
from orchestrator.pipeline import TemperaturePipeline
from orchestrator.resolvers import CityResolver, WeatherResolver
from orchestrator.routes import router
from orchestrator.tracing import TracedCityResolver, TracedPipeline, TracedWeatherResolver

SERVICE_NAME = "orchestrator"


def build_pipeline(settings: OrchestratorSettings, http_client: httpx.AsyncClient, tracer=None):
    """Assemble the pipeline, wrapped in tracing decorators when a tracer is given."""
    lookup = LookupClient(http_client)
    city_resolver = CityResolver(lookup, settings.viacep_base_url)
    weather_resolver = WeatherResolver(lookup, settings.weather_api_key, settings.weather_api_base_url)

    if tracer is None:
        return TemperaturePipeline(city_resolver, weather_resolver)

    return TracedPipeline(
        TemperaturePipeline(
            TracedCityResolver(city_resolver, tracer),
            TracedWeatherResolver(weather_resolver, tracer),
        ),
        tracer,
    )


def create_app(
    settings: Optional[OrchestratorSettings] = None,
    telemetry: Optional[Telemetry] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> FastAPI:
    settings = settings or OrchestratorSettings.from_env()
    telemetry = telemetry or setup_telemetry(SERVICE_NAME)
    # No client timeout: only the inbound request's cancellation bounds a lookup
    http_client = http_client or httpx.AsyncClient(timeout=httpx.Timeout(None))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await http_client.aclose()
        telemetry.shutdown()

    app = FastAPI(title="Orchestrator API", lifespan=lifespan)
    app.add_middleware(TraceContextMiddleware, propagator=telemetry.propagator)

    app.state.settings = settings
    app.state.telemetry = telemetry
    app.state.pipeline = build_pipeline(settings, http_client, telemetry.tracer)
    app.state.metrics = RequestMetrics(telemetry.meter, "weather_orchestrator")

    app.include_router(router)
    return app


def main():
    settings = OrchestratorSettings.from_env()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
