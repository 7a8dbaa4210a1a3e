"""
Token price lookup through the cosmos.directory chain registry.
"""

from shared.errors import UpstreamError

from .base import JsonApiClient
from .models import ChainDirectory, DirectoryChain


class ChainDirectoryClient(JsonApiClient):
    """Client for the chain directory API."""

    service_name = "chain_directory"

    async def get_chain(self, chain_id: str) -> DirectoryChain:
        """Find a chain by its chain ID."""
        payload = await self._get_json("/")
        directory = self._decode(ChainDirectory, payload)

        for chain in directory.chains:
            if chain.chain_id == chain_id:
                return chain

        raise UpstreamError(
            service=self.service_name,
            message=f"Chain {chain_id} not found",
            details={"chain_id": chain_id}
        )

    async def get_price_usd(self, chain_id: str) -> float:
        chain = await self.get_chain(chain_id)
        price = chain.get_price_usd()
        if price is None:
            raise UpstreamError(
                service=self.service_name,
                message=f"No USD price listed for {chain_id}",
                details={"chain_id": chain_id}
            )
        return price
