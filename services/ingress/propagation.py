"""Outbound header injection for the ingress -> orchestrator hop.

Creates headers carrying W3C Trace Context (traceparent, tracestate) of
the current span plus W3C Baggage with the requested CEP.
"""

from typing import Dict

from opentelemetry import baggage
from opentelemetry.propagators.textmap import TextMapPropagator


def create_propagation_headers(propagator: TextMapPropagator, cep: str) -> Dict[str, str]:
    """Create headers with trace context and baggage."""
    ctx = baggage.set_baggage("weather.request.cep", cep)

    headers = {}
    propagator.inject(headers, context=ctx)

    return headers
