"""Prometheus metrics for entity endpoints."""

from prometheus_client import Counter, Histogram

entity_requests_total = Counter(
    "entity_requests_total",
    "Total entity endpoint requests",
    ["operation", "outcome"],
)

entity_request_latency_ms = Histogram(
    "entity_request_latency_ms",
    "Entity endpoint latency in milliseconds",
    ["operation"],
    buckets=[5, 10, 25, 50, 100, 250, 500, 1000, 2500],
)


class PrometheusEntityMetrics:
    """Prometheus-based entity metrics implementation."""

    def record(self, operation: str, outcome: str, latency_ms: float) -> None:
        """Count a finished request and observe its latency."""
        entity_requests_total.labels(operation=operation, outcome=outcome).inc()
        entity_request_latency_ms.labels(operation=operation).observe(latency_ms)
