"""Tracing decorators for the ingress gateway and its orchestrator client."""

from typing import Mapping, Optional

from opentelemetry import trace
from opentelemetry.propagators.textmap import TextMapPropagator

from shared.outcome import Outcome
from shared.tracing import create_span, record_outcome
from ingress.propagation import create_propagation_headers


class TracedOrchestratorClient:
    """Client span around the forward; its context travels in the outbound headers."""

    def __init__(self, inner, tracer: trace.Tracer, propagator: TextMapPropagator):
        self.inner = inner
        self.tracer = tracer
        self.propagator = propagator

    async def fetch_temperature(self, cep: str, headers: Optional[Mapping[str, str]] = None) -> Outcome:
        attributes = {
            "cep": cep,
            "service": "ingress",
            "peer.service": "orchestrator",
            "url.full": self.inner.base_url,
        }
        with create_span(self.tracer, "sendRequestToB", attributes, kind=trace.SpanKind.CLIENT) as span:
            outgoing = create_propagation_headers(self.propagator, cep)
            if headers:
                outgoing.update(headers)

            span.add_event("Sending request to orchestrator")
            outcome = await self.inner.fetch_temperature(cep, headers=outgoing)
            span.add_event("Received response from orchestrator")

            span.set_attribute("http.status_code", outcome.status)
            record_outcome(span, outcome)
            return outcome


class TracedGateway:
    def __init__(self, inner, tracer: trace.Tracer):
        self.inner = inner
        self.tracer = tracer

    async def submit(self, body: bytes) -> Outcome:
        with create_span(self.tracer, "handleRequest-sa", kind=trace.SpanKind.SERVER) as span:
            outcome = await self.inner.submit(body)
            record_outcome(span, outcome, record_error=True)
            return outcome
