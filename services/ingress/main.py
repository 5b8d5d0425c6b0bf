"""Ingress API - validates a CEP and forwards it to the orchestrator (service A)."""

from contextlib import asynccontextmanager
from typing import Optional

import httpx
import uvicorn
from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.metrics import RequestMetrics
from shared.telemetry import Telemetry, setup_telemetry
from shared.tracing import TraceContextMiddleware
from ingress.client import OrchestratorClient
from ingress.config import IngressSettings
from ingress.gateway import ZipCodeGateway
from ingress.routes import method_not_allowed_handler, router
from ingress.tracing import TracedGateway, TracedOrchestratorClient

SERVICE_NAME = "ingress"


def build_gateway(settings: IngressSettings, http_client: httpx.AsyncClient, telemetry: Optional[Telemetry] = None):
    """Assemble the gateway, wrapped in tracing decorators when telemetry is given."""
    client = OrchestratorClient(http_client, settings.orchestrator_url)
    if telemetry is None:
        return ZipCodeGateway(client)

    traced_client = TracedOrchestratorClient(client, telemetry.tracer, telemetry.propagator)
    return TracedGateway(ZipCodeGateway(traced_client), telemetry.tracer)


def create_app(
    settings: Optional[IngressSettings] = None,
    telemetry: Optional[Telemetry] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> FastAPI:
    settings = settings or IngressSettings.from_env()
    telemetry = telemetry or setup_telemetry(SERVICE_NAME)
    # No client timeout: only the inbound request's cancellation bounds the forward
    http_client = http_client or httpx.AsyncClient(timeout=httpx.Timeout(None))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await http_client.aclose()
        telemetry.shutdown()

    app = FastAPI(title="Ingress API", lifespan=lifespan)
    app.add_middleware(TraceContextMiddleware, propagator=telemetry.propagator)
    app.add_exception_handler(StarletteHTTPException, method_not_allowed_handler)

    app.state.settings = settings
    app.state.telemetry = telemetry
    app.state.gateway = build_gateway(settings, http_client, telemetry)
    app.state.metrics = RequestMetrics(telemetry.meter, "weather_ingress")

    app.include_router(router)
    return app


def main():
    settings = IngressSettings.from_env()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
