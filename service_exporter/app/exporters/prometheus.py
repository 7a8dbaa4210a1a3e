"""
Prometheus exposition of a finished scrape.
"""

from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest

from shared.logging import get_logger
from ..ingestion.accumulator import MetricAccumulator


class SnapshotRenderer:
    """Renders a populated accumulator in the Prometheus text format."""

    content_type = CONTENT_TYPE_LATEST

    def __init__(self):
        self.logger = get_logger("exporter.renderer")

    def render(self, accumulator: MetricAccumulator) -> bytes:
        # Registry lives for this scrape only
        registry = CollectorRegistry(auto_describe=True)
        registry.register(accumulator)
        payload = generate_latest(registry)

        self.logger.debug("Rendered scrape", gauges=len(accumulator.names), bytes=len(payload))
        return payload
