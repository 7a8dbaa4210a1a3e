"""
Response shapes returned by the node, its gRPC gateway and the chain directory.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class UpstreamModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class Coin(UpstreamModel):
    """A denom/amount pair. Amounts are decimal strings."""
    denom: str
    amount: str


class SyncInfo(UpstreamModel):
    latest_block_height: int


class NodeStatus(UpstreamModel):
    sync_info: SyncInfo


class StakingPool(UpstreamModel):
    bonded_tokens: str
    not_bonded_tokens: str


class StakingPoolResponse(UpstreamModel):
    pool: StakingPool


class CommunityPoolResponse(UpstreamModel):
    pool: List[Coin] = []


class TotalSupplyResponse(UpstreamModel):
    supply: List[Coin] = []


class InflationResponse(UpstreamModel):
    inflation: str


class AnnualProvisionsResponse(UpstreamModel):
    annual_provisions: str


class ProposalsResponse(UpstreamModel):
    # Only the count is used, so proposal bodies stay untyped across gov schemas.
    proposals: List[Dict[str, Any]] = []


class UsdPrice(UpstreamModel):
    usd: Optional[float] = None


class ChainPrices(UpstreamModel):
    coingecko: Dict[str, UsdPrice] = {}


class DirectoryChain(UpstreamModel):
    chain_id: str
    symbol: Optional[str] = None
    display: Optional[str] = None
    prices: Optional[ChainPrices] = None

    def get_price_usd(self) -> Optional[float]:
        """USD price for the chain's native token, if the directory knows one."""
        if self.prices is None or not self.prices.coingecko:
            return None

        for key in (self.display, self.symbol):
            if key and key.lower() in self.prices.coingecko:
                return self.prices.coingecko[key.lower()].usd

        # An unmatched lone entry can only be the native token
        if len(self.prices.coingecko) == 1:
            return next(iter(self.prices.coingecko.values())).usd

        return None


class ChainDirectory(UpstreamModel):
    chains: List[DirectoryChain] = []
