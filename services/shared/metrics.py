"""Per-service request counter and latency histogram."""

import time

from opentelemetry import metrics


class RequestMetrics:
    def __init__(self, meter: metrics.Meter, prefix: str):
        self.requests = meter.create_counter(f"{prefix}_requests_total")
        self.latency = meter.create_histogram(f"{prefix}_request_duration_ms", unit="ms")

    def record(self, status: str, started_at: float):
        """Count one finished request. *started_at* comes from ``time.time()``."""
        self.requests.add(1, {"status": status})
        self.latency.record((time.time() - started_at) * 1000, {"status": status})
