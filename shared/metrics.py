"""
Self-observability metrics for the Cosmos exporter.

These describe the exporter process itself (HTTP traffic, upstream query
outcomes) and live in a registry owned by the service, separate from the
per-scrape registries that carry chain data.
"""

from typing import Dict, Any, Optional

from prometheus_client import CollectorRegistry, Counter, Histogram, Info, generate_latest


class MetricsCollector:
    """Centralized metrics collector for a service."""

    def __init__(self, service_name: str, registry: Optional[CollectorRegistry] = None):
        self.service_name = service_name
        self.registry = registry or CollectorRegistry()
        self._metrics: Dict[str, Any] = {}
        self._setup_metrics()

    def _setup_metrics(self):
        """Set up common metrics for the service."""

        # Service info
        self._metrics["service_info"] = Info(
            "service_info",
            "Service information",
            registry=self.registry
        )
        self._metrics["service_info"].info({
            "service": self.service_name,
            "version": "1.0.0"
        })

        # HTTP metrics
        self._metrics["http_requests_total"] = Counter(
            "http_requests_total",
            "Total HTTP requests",
            ["method", "endpoint", "status_code"],
            registry=self.registry
        )

        self._metrics["http_request_duration_seconds"] = Histogram(
            "http_request_duration_seconds",
            "HTTP request duration in seconds",
            ["method", "endpoint"],
            registry=self.registry
        )

        # Health check metrics
        self._metrics["health_check_total"] = Counter(
            "health_check_total",
            "Total health check requests",
            ["status"],
            registry=self.registry
        )

        # Upstream query metrics
        self._metrics["upstream_query_failures_total"] = Counter(
            "upstream_query_failures_total",
            "Total failed upstream queries",
            ["query"],
            registry=self.registry
        )

        self._metrics["upstream_query_duration_seconds"] = Histogram(
            "upstream_query_duration_seconds",
            "Upstream query duration in seconds",
            ["query"],
            registry=self.registry
        )

    def record_http_request(self, method: str, endpoint: str, status_code: int, duration: float):
        """Record HTTP request metrics."""
        self._metrics["http_requests_total"].labels(
            method=method,
            endpoint=endpoint,
            status_code=str(status_code)
        ).inc()

        self._metrics["http_request_duration_seconds"].labels(
            method=method,
            endpoint=endpoint
        ).observe(duration)

    def record_health_check(self, status: str):
        """Record health check metrics."""
        self._metrics["health_check_total"].labels(status=status).inc()

    def record_upstream_failure(self, query: str):
        self._metrics["upstream_query_failures_total"].labels(query=query).inc()

    def observe_upstream_query(self, query: str, duration: float):
        """Record how long one upstream query took, successful or not."""
        self._metrics["upstream_query_duration_seconds"].labels(query=query).observe(duration)

    def render(self) -> bytes:
        """Render this service's own metrics in exposition format."""
        return generate_latest(self.registry)


def get_metrics_collector(service_name: str, registry: Optional[CollectorRegistry] = None) -> MetricsCollector:
    """Get a metrics collector for a service."""
    return MetricsCollector(service_name, registry)
