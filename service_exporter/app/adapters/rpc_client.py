"""
Tendermint/CometBFT RPC client.
"""

from .base import JsonApiClient
from .models import NodeStatus


class TendermintRpcClient(JsonApiClient):
    """Client for the node's Tendermint RPC endpoint."""

    service_name = "tendermint_rpc"

    async def status(self) -> NodeStatus:
        """Fetch node status."""
        payload = await self._get_json("/status")

        # JSON-RPC envelope on most node versions, bare object on a few
        if isinstance(payload, dict) and "result" in payload:
            payload = payload["result"]

        return self._decode(NodeStatus, payload)

    async def latest_block_height(self) -> int:
        status = await self.status()
        return status.sync_info.latest_block_height
