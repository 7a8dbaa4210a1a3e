"""
Cosmos SDK module query client.

The staking, distribution, bank, mint and gov gRPC query services are reached
through the node's gRPC gateway, which serves the same Query RPCs as JSON over
HTTP and reports gRPC failures as ``{"code": ..., "message": ...}`` bodies.
"""

from enum import Enum

from .base import JsonApiClient
from .models import (
    AnnualProvisionsResponse,
    CommunityPoolResponse,
    InflationResponse,
    ProposalsResponse,
    StakingPoolResponse,
    TotalSupplyResponse,
)


class GovSchema(str, Enum):
    """Governance module schema versions a node may serve."""
    V1BETA1 = "v1beta1"
    V1 = "v1"


class ProposalStatus(str, Enum):
    VOTING_PERIOD = "PROPOSAL_STATUS_VOTING_PERIOD"


class CosmosQueryClient(JsonApiClient):
    """Client for Cosmos SDK module queries."""

    service_name = "cosmos_query"

    async def staking_pool(self) -> StakingPoolResponse:
        payload = await self._get_json("/cosmos/staking/v1beta1/pool")
        return self._decode(StakingPoolResponse, payload)

    async def community_pool(self) -> CommunityPoolResponse:
        payload = await self._get_json("/cosmos/distribution/v1beta1/community_pool")
        return self._decode(CommunityPoolResponse, payload)

    async def total_supply(self) -> TotalSupplyResponse:
        # TODO: follow pagination.next_key; only the first page is read today.
        payload = await self._get_json("/cosmos/bank/v1beta1/supply")
        return self._decode(TotalSupplyResponse, payload)

    async def inflation(self) -> InflationResponse:
        payload = await self._get_json("/cosmos/mint/v1beta1/inflation")
        return self._decode(InflationResponse, payload)

    async def annual_provisions(self) -> AnnualProvisionsResponse:
        payload = await self._get_json("/cosmos/mint/v1beta1/annual_provisions")
        return self._decode(AnnualProvisionsResponse, payload)

    async def proposals(self, status: ProposalStatus, schema: GovSchema) -> ProposalsResponse:
        """List governance proposals with the given status using one gov schema."""
        payload = await self._get_json(
            f"/cosmos/gov/{schema.value}/proposals",
            params={"proposal_status": status.value}
        )
        return self._decode(ProposalsResponse, payload)
