"""Tracing decorators around the untraced orchestrator components.

Each wrapper exposes the same coroutine as the component it wraps and
only adds a span, so the pipeline can be assembled with or without them.
"""

from opentelemetry import trace

from shared.outcome import Outcome
from shared.tracing import create_span, record_outcome


class TracedCityResolver:
    def __init__(self, inner, tracer: trace.Tracer):
        self.inner = inner
        self.tracer = tracer

    async def resolve(self, cep: str) -> Outcome:
        with create_span(self.tracer, "fetchCityFromCEP", {"cep": cep}) as span:
            outcome = await self.inner.resolve(cep)
            record_outcome(span, outcome)
            if outcome.succeeded:
                span.set_attribute("city", outcome.value)
            return outcome


class TracedWeatherResolver:
    def __init__(self, inner, tracer: trace.Tracer):
        self.inner = inner
        self.tracer = tracer

    async def resolve(self, city: str) -> Outcome:
        with create_span(self.tracer, "fetchWeather", {"city": city}) as span:
            outcome = await self.inner.resolve(city)
            record_outcome(span, outcome)
            if outcome.succeeded:
                span.set_attribute("temperature", outcome.value)
            return outcome


class TracedPipeline:
    """Top-level server span; a child of the caller's span when one was propagated."""

    def __init__(self, inner, tracer: trace.Tracer):
        self.inner = inner
        self.tracer = tracer

    async def run(self, cep: str) -> Outcome:
        attributes = {"cep": cep, "service": "orchestrator"}
        with create_span(self.tracer, "handleRequest", attributes, kind=trace.SpanKind.SERVER) as span:
            outcome = await self.inner.run(cep)
            record_outcome(span, outcome, record_error=True)
            return outcome
