"""Turn an ``Outcome`` into the HTTP response both services answer with."""

from fastapi.responses import JSONResponse, PlainTextResponse, Response

from shared.errors import MalformedRequestError
from shared.models import ErrorEnvelope
from shared.outcome import Outcome

# nginx's "client closed request"; nobody reads it, it only shows in access logs
CLIENT_CLOSED_REQUEST = 499


def render_outcome(outcome: Outcome) -> Response:
    if outcome.error is None:
        return JSONResponse(content=outcome.value.to_payload(), status_code=200)

    if isinstance(outcome.error, MalformedRequestError):
        return PlainTextResponse(outcome.error.message, status_code=outcome.status)

    return JSONResponse(
        content=ErrorEnvelope(message=outcome.error.message).model_dump(),
        status_code=outcome.status,
    )


def client_closed_response() -> Response:
    return Response(status_code=CLIENT_CLOSED_REQUEST)
