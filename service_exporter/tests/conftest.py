"""
Shared fixtures for exporter tests.
"""

from typing import Dict, Tuple
from unittest.mock import AsyncMock, MagicMock

import pytest
from prometheus_client.parser import text_string_to_metric_families

from shared.config import ExporterSettings, ScrapeConfig
from service_exporter.app.adapters.models import (
    AnnualProvisionsResponse,
    Coin,
    CommunityPoolResponse,
    InflationResponse,
    NodeStatus,
    ProposalsResponse,
    StakingPool,
    StakingPoolResponse,
    SyncInfo,
    TotalSupplyResponse,
)
from service_exporter.app.adapters.price_client import ChainDirectoryClient
from service_exporter.app.adapters.query_client import CosmosQueryClient
from service_exporter.app.adapters.rpc_client import TendermintRpcClient


def _parse_samples(payload) -> Dict[Tuple[str, Tuple[Tuple[str, str], ...]], float]:
    if isinstance(payload, bytes):
        payload = payload.decode()

    samples = {}
    for family in text_string_to_metric_families(payload):
        for sample in family.samples:
            samples[(sample.name, tuple(sorted(sample.labels.items())))] = sample.value
    return samples


def _chain_labels(**extra) -> Tuple[Tuple[str, str], ...]:
    labels = {"chain_id": "cosmoshub-4"}
    labels.update(extra)
    return tuple(sorted(labels.items()))


@pytest.fixture
def parse_samples():
    """Map (sample name, sorted labels) to value for an exposition payload."""
    return _parse_samples


@pytest.fixture
def chain_labels():
    """Sorted label tuple for a cosmoshub-4 sample plus any extra labels."""
    return _chain_labels


@pytest.fixture
def scrape_config():
    """Scrape configuration for a uatom chain."""
    return ScrapeConfig(
        chain_id="cosmoshub-4",
        denom="atom",
        denom_coefficient=1e6,
        query_timeout_seconds=2.0
    )


@pytest.fixture
def settings():
    """Exporter settings pointing at unreachable upstreams."""
    return ExporterSettings(
        env="test",
        chain_id="cosmoshub-4",
        denom="atom",
        denom_coefficient=1e6,
        query_timeout_seconds=2.0,
        rpc_url="http://node.invalid:26657",
        grpc_gateway_url="http://node.invalid:1317",
        chain_directory_url="http://directory.invalid"
    )


@pytest.fixture
def rpc_client():
    """Healthy Tendermint RPC client."""
    client = MagicMock(spec=TendermintRpcClient)
    client.status = AsyncMock(return_value=NodeStatus(
        sync_info=SyncInfo(latest_block_height=19000000)
    ))
    client.latest_block_height = AsyncMock(return_value=19000000)
    return client


@pytest.fixture
def query_client():
    """Healthy module query client serving gov v1beta1."""
    client = MagicMock(spec=CosmosQueryClient)
    client.staking_pool = AsyncMock(return_value=StakingPoolResponse(
        pool=StakingPool(bonded_tokens="250000000000", not_bonded_tokens="5000000")
    ))
    client.community_pool = AsyncMock(return_value=CommunityPoolResponse(
        pool=[Coin(denom="uatom", amount="2500000.000000000000000000")]
    ))
    client.total_supply = AsyncMock(return_value=TotalSupplyResponse(
        supply=[Coin(denom="uatom", amount="300000000000000")]
    ))
    client.inflation = AsyncMock(return_value=InflationResponse(
        inflation="0.100000000000000000"
    ))
    client.annual_provisions = AsyncMock(return_value=AnnualProvisionsResponse(
        annual_provisions="30000000000000.000000000000000000"
    ))
    client.proposals = AsyncMock(return_value=ProposalsResponse(
        proposals=[{"proposal_id": "801"}, {"proposal_id": "802"}]
    ))
    return client


@pytest.fixture
def price_client():
    """Healthy chain directory client."""
    client = MagicMock(spec=ChainDirectoryClient)
    client.get_price_usd = AsyncMock(return_value=9.5)
    return client
