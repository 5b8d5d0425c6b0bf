"""FastAPI routes for the orchestrator - GET /?cep=... plus probes."""

import logging
import time

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from shared.cancellation import bind_to_request
from shared.errors import MissingCredentialError, RequestCancelled
from shared.responses import client_closed_response, render_outcome

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health():
    """Liveness probe - returns 200 if event loop is responsive."""
    return {"status": "healthy", "service": "orchestrator"}


@router.get("/ready")
async def ready(request: Request):
    """Readiness probe - the weather lookup cannot succeed without an API key."""
    if not request.app.state.settings.weather_api_key:
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "message": MissingCredentialError.default_message},
        )
    return {"status": "ready", "service": "orchestrator"}


@router.get("/")
async def handle_request(request: Request):
    """
    Resolve a CEP to its city and current temperature.

    Query:
        cep: 8-digit postal code

    Returns:
        200 with {city, temp_C, temp_F, temp_K}, or {message} with the
        status of the step that failed (422, 404, 400, 500 or upstream's).
    """
    start_time = time.time()
    state = request.app.state
    cep = request.query_params.get("cep", "")

    try:
        outcome = await bind_to_request(request.receive, state.pipeline.run(cep))
    except RequestCancelled:
        logger.warning("client disconnected, lookups aborted", extra={"log_attributes": {"cep": cep}})
        state.metrics.record("cancelled", start_time)
        return client_closed_response()

    if outcome.error is not None:
        logger.warning(
            "lookup failed: %s", outcome.error.message,
            extra={"log_attributes": {"cep": cep, "http.status_code": outcome.status}},
        )
        state.metrics.record("error", start_time)
    else:
        logger.info("resolved %s to %s", cep, outcome.value.city)
        state.metrics.record("success", start_time)

    return render_outcome(outcome)
