"""FastAPI routes for the ingress - POST / plus probes."""

import logging
import time

from fastapi import APIRouter, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.cancellation import bind_to_request
from shared.errors import RequestCancelled
from shared.responses import client_closed_response, render_outcome

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health():
    """Liveness probe - returns 200 if event loop is responsive."""
    return {"status": "healthy", "service": "ingress"}


@router.get("/ready")
async def ready():
    """Readiness probe - returns 200 if ready for traffic."""
    return {"status": "ready", "service": "ingress"}


@router.post("/")
async def handle_request(request: Request):
    """
    Validate a CEP and forward it to the orchestrator.

    Body:
        {"cep": "<8 digits>"}

    Returns:
        The orchestrator's report or {message} with its status, 422 for a
        malformed CEP and plain-text 400 for an undecodable body. Other
        methods get a plain-text 405 from method_not_allowed_handler.

        When the orchestrator fails without a {message} body, the relayed
        message is the HTTP reason phrase of its status (e.g. "Bad Gateway").
    """
    start_time = time.time()
    state = request.app.state
    body = await request.body()

    try:
        outcome = await bind_to_request(request.receive, state.gateway.submit(body))
    except RequestCancelled:
        logger.warning("client disconnected, forward aborted")
        state.metrics.record("cancelled", start_time)
        return client_closed_response()

    if outcome.error is not None:
        logger.warning(
            "request failed: %s", outcome.error.message,
            extra={"log_attributes": {"http.status_code": outcome.status}},
        )
        state.metrics.record("error", start_time)
    else:
        logger.info("temperature for %s relayed", outcome.value.city)
        state.metrics.record("success", start_time)

    return render_outcome(outcome)


async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    """Plain-text 405 for any method a route does not accept; other errors keep FastAPI's JSON."""
    if exc.status_code == 405:
        return PlainTextResponse("Method Not Allowed", status_code=405, headers=exc.headers)
    return await http_exception_handler(request, exc)
