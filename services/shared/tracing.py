"""Span helpers and the inbound trace-context middleware."""

from contextlib import contextmanager

from opentelemetry import context, trace
from opentelemetry.propagators.textmap import TextMapPropagator
from opentelemetry.trace import Status, StatusCode

from shared.outcome import Outcome


class TraceContextMiddleware:
    """ASGI middleware attaching the caller's trace context and baggage.

    Spans started while the request is handled become children of the
    remote parent carried in ``traceparent``/``baggage``, if any.
    """

    def __init__(self, app, propagator: TextMapPropagator):
        self.app = app
        self.propagator = propagator

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        carrier = {
            name.decode("latin-1"): value.decode("latin-1")
            for name, value in scope.get("headers", [])
        }
        token = context.attach(self.propagator.extract(carrier))
        try:
            await self.app(scope, receive, send)
        finally:
            context.detach(token)


@contextmanager
def create_span(tracer, name: str, attributes: dict = None, kind=trace.SpanKind.INTERNAL):
    """Create a custom span with attributes."""
    with tracer.start_as_current_span(name, kind=kind) as span:
        if attributes:
            for key, value in attributes.items():
                span.set_attribute(key, value)
        yield span


def record_outcome(span: trace.Span, outcome: Outcome, record_error: bool = False):
    """Mark *span* with the result of a pipeline step."""
    if outcome.error is not None:
        if record_error:
            span.record_exception(outcome.error)
        span.set_attribute("error.message", outcome.error.message)
        span.set_attribute("http.status_code", outcome.status)
        span.set_status(Status(StatusCode.ERROR, outcome.error.message))
    else:
        span.set_status(Status(StatusCode.OK))
