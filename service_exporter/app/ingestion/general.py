"""
General chain metrics: the gauges of one scrape and the queries that fill them.
"""

from typing import Iterable, List

from shared.config import ScrapeConfig
from shared.logging import get_logger

from ..adapters.governance import count_voting_proposals
from ..adapters.models import (
    AnnualProvisionsResponse,
    Coin,
    InflationResponse,
    StakingPoolResponse,
)
from ..adapters.price_client import ChainDirectoryClient
from ..adapters.query_client import CosmosQueryClient
from ..adapters.rpc_client import TendermintRpcClient
from .accumulator import MetricAccumulator
from .coordinator import QueryTask

BONDED_TOKENS = "cosmos_general_bonded_tokens"
NOT_BONDED_TOKENS = "cosmos_general_not_bonded_tokens"
COMMUNITY_POOL = "cosmos_general_community_pool"
SUPPLY_TOTAL = "cosmos_general_supply_total"
INFLATION = "cosmos_general_inflation"
ANNUAL_PROVISIONS = "cosmos_general_annual_provisions"
LATEST_BLOCK_HEIGHT = "cosmos_latest_block_height"
TOKEN_PRICE = "cosmos_token_price"
VOTING_PERIOD_PROPOSALS = "cosmos_gov_voting_period_proposals"

# Published when the proposal count cannot be resolved on either gov schema
PROPOSAL_COUNT_UNAVAILABLE = -1.0

GENERAL_GAUGES = (
    (BONDED_TOKENS, "Bonded tokens", ()),
    (NOT_BONDED_TOKENS, "Not bonded tokens", ()),
    (COMMUNITY_POOL, "Community pool", ("denom",)),
    (SUPPLY_TOTAL, "Total supply", ("denom",)),
    (INFLATION, "Inflation rate", ()),
    (ANNUAL_PROVISIONS, "Annual provisions", ("denom",)),
    (LATEST_BLOCK_HEIGHT, "Latest block height", ()),
    (TOKEN_PRICE, "Token price in USD", ()),
    (VOTING_PERIOD_PROPOSALS, "Proposals in voting period, -1 if the count could not be queried", ()),
)


class GeneralQueries:
    """Builds the query tasks for the general metrics scrape."""

    def __init__(
        self,
        config: ScrapeConfig,
        rpc_client: TendermintRpcClient,
        query_client: CosmosQueryClient,
        price_client: ChainDirectoryClient
    ):
        self.config = config
        self.rpc_client = rpc_client
        self.query_client = query_client
        self.price_client = price_client
        self.logger = get_logger("exporter.general")

    def new_accumulator(self) -> MetricAccumulator:
        """Fresh accumulator with every general gauge declared."""
        accumulator = MetricAccumulator(self.config.const_labels)
        for name, documentation, labelnames in GENERAL_GAUGES:
            accumulator.declare(name, documentation, labelnames)
        return accumulator

    def tasks(self) -> List[QueryTask]:
        return [
            QueryTask(
                name="token_price",
                fetch=lambda: self.price_client.get_price_usd(self.config.chain_id),
                apply=self._apply_token_price
            ),
            QueryTask(
                name="latest_block_height",
                fetch=self.rpc_client.latest_block_height,
                apply=self._apply_block_height
            ),
            QueryTask(
                name="staking_pool",
                fetch=self.query_client.staking_pool,
                apply=self._apply_staking_pool
            ),
            QueryTask(
                name="community_pool",
                fetch=self.query_client.community_pool,
                apply=lambda response, acc: self._apply_coins(COMMUNITY_POOL, response.pool, acc)
            ),
            QueryTask(
                name="total_supply",
                fetch=self.query_client.total_supply,
                apply=lambda response, acc: self._apply_coins(SUPPLY_TOTAL, response.supply, acc)
            ),
            QueryTask(
                name="inflation",
                fetch=self.query_client.inflation,
                apply=self._apply_inflation
            ),
            QueryTask(
                name="annual_provisions",
                fetch=self.query_client.annual_provisions,
                apply=self._apply_annual_provisions
            ),
            QueryTask(
                name="voting_period_proposals",
                fetch=lambda: count_voting_proposals(self.query_client),
                apply=self._apply_proposal_count,
                on_failure=self._proposal_count_unavailable
            ),
        ]

    def to_display_units(self, amount: str) -> float:
        return float(amount) / self.config.denom_coefficient

    def _apply_token_price(self, price: float, accumulator: MetricAccumulator) -> None:
        accumulator.set(TOKEN_PRICE, price)

    def _apply_block_height(self, height: int, accumulator: MetricAccumulator) -> None:
        accumulator.set(LATEST_BLOCK_HEIGHT, float(height))

    def _apply_staking_pool(self, response: StakingPoolResponse, accumulator: MetricAccumulator) -> None:
        # Convert both before setting either so a bad amount leaves the pair unset
        bonded = self.to_display_units(response.pool.bonded_tokens)
        not_bonded = self.to_display_units(response.pool.not_bonded_tokens)
        accumulator.set(BONDED_TOKENS, bonded)
        accumulator.set(NOT_BONDED_TOKENS, not_bonded)

    def _apply_coins(self, gauge: str, coins: Iterable[Coin], accumulator: MetricAccumulator) -> None:
        for coin in coins:
            if self.config.base_denom and coin.denom != self.config.base_denom:
                continue

            try:
                value = self.to_display_units(coin.amount)
            except ValueError as exc:
                self.logger.error(
                    "Could not parse coin amount",
                    gauge=gauge,
                    denom=coin.denom,
                    amount=coin.amount,
                    error=str(exc)
                )
                continue

            accumulator.set(gauge, value, denom=self.config.denom)

    def _apply_inflation(self, response: InflationResponse, accumulator: MetricAccumulator) -> None:
        accumulator.set(INFLATION, float(response.inflation))

    def _apply_annual_provisions(self, response: AnnualProvisionsResponse, accumulator: MetricAccumulator) -> None:
        accumulator.set(
            ANNUAL_PROVISIONS,
            self.to_display_units(response.annual_provisions),
            denom=self.config.denom
        )

    def _apply_proposal_count(self, count: int, accumulator: MetricAccumulator) -> None:
        accumulator.set(VOTING_PERIOD_PROPOSALS, float(count))

    def _proposal_count_unavailable(self, accumulator: MetricAccumulator) -> None:
        accumulator.set(VOTING_PERIOD_PROPOSALS, PROPOSAL_COUNT_UNAVAILABLE)
