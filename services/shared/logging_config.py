"""JSON log lines for the ingress and orchestrator.

Each line names the service and, inside a request, the trace and span it
belongs to plus the baggage the ingress attached to the forward (the
requested CEP travels as ``weather.request.cep``). An orchestrator lookup
failure can then be matched to the ingress request that caused it by
trace id or by CEP.
"""

import json
import logging
from datetime import datetime, timezone

from opentelemetry import baggage, trace


def _trace_fields() -> dict:
    ctx = trace.get_current_span().get_span_context()
    if not ctx.is_valid:
        return {}
    return {
        "trace_id": format(ctx.trace_id, "032x"),
        "span_id": format(ctx.span_id, "016x"),
    }


class OTelJSONFormatter(logging.Formatter):
    """One JSON object per record, stamped with trace ids and baggage."""

    def __init__(self, service_name: str, namespace: str):
        super().__init__()
        self.base_fields = {"service.name": service_name, "service.namespace": namespace}

    def format(self, record: logging.LogRecord) -> str:
        line = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "severity": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **self.base_fields,
            **_trace_fields(),
            **{str(key): str(value) for key, value in baggage.get_all().items()},
        }

        # extra={"log_attributes": {...}} from the request handlers
        line.update(getattr(record, "log_attributes", {}))

        if record.exc_info:
            line["error.type"] = record.exc_info[0].__name__
            line["error.message"] = str(record.exc_info[1])

        return json.dumps(line, ensure_ascii=False, default=str)


def configure_logging(service_name: str, namespace: str, level: str = "INFO"):
    """Route every logger, uvicorn's included, through the JSON formatter on stderr."""
    handler = logging.StreamHandler()
    handler.setFormatter(OTelJSONFormatter(service_name, namespace))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [handler]

    return root
