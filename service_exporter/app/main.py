"""
General metrics exporter service for Cosmos SDK chains.
"""

import time
from typing import Dict, Optional

from fastapi import Response

from shared.base_service import BaseService
from shared.config import ExporterSettings, ScrapeConfig
from shared.errors import ExporterException
from shared.logging import set_request_id, clear_context

from .adapters.price_client import ChainDirectoryClient
from .adapters.query_client import CosmosQueryClient
from .adapters.rpc_client import TendermintRpcClient
from .exporters.prometheus import SnapshotRenderer
from .ingestion.coordinator import FanOutCoordinator
from .ingestion.general import GeneralQueries

GENERAL_ENDPOINT = "/metrics/general"


class ExporterService(BaseService):
    """Exporter service implementation."""

    def __init__(
        self,
        settings: Optional[ExporterSettings] = None,
        rpc_client: Optional[TendermintRpcClient] = None,
        query_client: Optional[CosmosQueryClient] = None,
        price_client: Optional[ChainDirectoryClient] = None
    ):
        super().__init__("exporter", settings)

        self.scrape_config = ScrapeConfig.from_settings(self.config)
        timeout = self.scrape_config.query_timeout_seconds

        # Initialize components
        self.rpc_client = rpc_client or TendermintRpcClient(self.config.rpc_url, timeout)
        self.query_client = query_client or CosmosQueryClient(self.config.grpc_gateway_url, timeout)
        self.price_client = price_client or ChainDirectoryClient(self.config.chain_directory_url, timeout)
        self.general_queries = GeneralQueries(
            self.scrape_config,
            self.rpc_client,
            self.query_client,
            self.price_client
        )
        self.coordinator = FanOutCoordinator(query_timeout=timeout, metrics=self.metrics)
        self.renderer = SnapshotRenderer()

        self._setup_exporter_routes()

    def _setup_exporter_routes(self):
        """Set up exporter-specific routes."""

        @self.app.get("/")
        async def root():
            """Root endpoint."""
            return {
                "service": self.service_name,
                "message": "Cosmos exporter - General Metrics",
                "version": "1.0.0",
                "chain_id": self.scrape_config.chain_id,
                "endpoints": [GENERAL_ENDPOINT, "/metrics", "/health"]
            }

        @self.app.get(GENERAL_ENDPOINT)
        async def general_metrics():
            """Scrape the chain and expose general metrics."""
            payload = await self.scrape_general()
            return Response(content=payload, media_type=self.renderer.content_type)

    async def _check_dependencies(self) -> Dict[str, str]:
        """Check that the node's RPC endpoint answers."""
        dependencies = {}

        try:
            await self.rpc_client.status()
            dependencies["tendermint_rpc"] = "ok"
        except ExporterException as exc:
            self.logger.warning("RPC unreachable", error=exc.message)
            dependencies["tendermint_rpc"] = "error"

        return dependencies

    async def scrape_general(self) -> bytes:
        """Run one scrape: query every upstream, then render what was collected."""
        request_start = time.perf_counter()
        set_request_id()

        try:
            accumulator = self.general_queries.new_accumulator()
            outcomes = await self.coordinator.run(self.general_queries.tasks(), accumulator)
            payload = self.renderer.render(accumulator)

            self.logger.info(
                "Request processed",
                method="GET",
                endpoint=GENERAL_ENDPOINT,
                failed_queries=sorted(name for name, ok in outcomes.items() if not ok),
                request_time=round(time.perf_counter() - request_start, 6)
            )
            return payload
        finally:
            clear_context()


def create_app(settings: Optional[ExporterSettings] = None):
    """Create exporter service application."""
    service = ExporterService(settings)
    return service.app


def main():
    service = ExporterService()
    service.run()


if __name__ == "__main__":
    main()
