"""Prometheus metrics for prompt flows and generation."""

from prometheus_client import Counter, Histogram

# Flow call metrics
flow_latency_ms = Histogram(
    "flow_latency_ms",
    "Prompt flow latency in milliseconds",
    ["flow", "outcome"],
    buckets=[100, 250, 500, 1000, 2000, 5000, 10000, 20000, 40000],
)

flow_errors_total = Counter(
    "flow_errors_total",
    "Total prompt flow failures",
    ["flow", "reason"],
)

generation_discarded_total = Counter(
    "generation_discarded_total",
    "Generation results discarded because a newer request superseded them",
    ["feature"],
)


class PrometheusFlowMetrics:
    """Prometheus-based flow metrics implementation."""

    def record_latency(self, flow: str, outcome: str, latency_ms: float) -> None:
        """Record flow latency."""
        flow_latency_ms.labels(flow=flow, outcome=outcome).observe(latency_ms)

    def inc_error(self, flow: str, reason: str) -> None:
        """Increment error counter."""
        flow_errors_total.labels(flow=flow, reason=reason).inc()

    def inc_discarded(self, feature: str) -> None:
        """Increment discarded-generation counter."""
        generation_discarded_total.labels(feature=feature).inc()
