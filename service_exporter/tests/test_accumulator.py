"""
Unit tests for the per-scrape accumulator and its rendering.
"""

import pytest

from service_exporter.app.exporters.prometheus import SnapshotRenderer
from service_exporter.app.ingestion.accumulator import MetricAccumulator


class TestMetricAccumulator:
    """Test cases for MetricAccumulator."""

    @pytest.fixture
    def accumulator(self):
        accumulator = MetricAccumulator({"chain_id": "cosmoshub-4"})
        accumulator.declare("cosmos_latest_block_height", "Latest block height")
        accumulator.declare("cosmos_general_supply_total", "Total supply", ("denom",))
        return accumulator

    def test_last_write_wins(self, accumulator):
        accumulator.set("cosmos_latest_block_height", 10)
        accumulator.set("cosmos_latest_block_height", 12)

        assert accumulator.get("cosmos_latest_block_height") == 12.0

    def test_labeled_slots_are_independent(self, accumulator):
        accumulator.set("cosmos_general_supply_total", 1.5, denom="atom")
        accumulator.set("cosmos_general_supply_total", 7.0, denom="osmo")

        assert accumulator.samples("cosmos_general_supply_total") == {("atom",): 1.5, ("osmo",): 7.0}

    def test_unset_slot(self, accumulator):
        assert accumulator.get("cosmos_latest_block_height") is None
        assert not accumulator.is_set("cosmos_latest_block_height")

    def test_undeclared_gauge(self, accumulator):
        with pytest.raises(KeyError):
            accumulator.set("cosmos_unknown", 1.0)

    def test_wrong_labels(self, accumulator):
        with pytest.raises(ValueError):
            accumulator.set("cosmos_general_supply_total", 1.0)

    def test_duplicate_declaration(self, accumulator):
        with pytest.raises(ValueError):
            accumulator.declare("cosmos_latest_block_height", "again")

    def test_label_clash_with_constant_labels(self, accumulator):
        with pytest.raises(ValueError):
            accumulator.declare("cosmos_other", "Other", ("chain_id",))


class TestSnapshotRenderer:
    """Test cases for SnapshotRenderer."""

    def test_render_set_slots_with_constant_labels(self, parse_samples):
        accumulator = MetricAccumulator({"chain_id": "cosmoshub-4", "instance": "node-1"})
        accumulator.declare("cosmos_latest_block_height", "Latest block height")
        accumulator.declare("cosmos_general_community_pool", "Community pool", ("denom",))
        accumulator.set("cosmos_latest_block_height", 42)
        accumulator.set("cosmos_general_community_pool", 1.0, denom="atom")

        samples = parse_samples(SnapshotRenderer().render(accumulator))

        assert samples == {
            ("cosmos_latest_block_height", (("chain_id", "cosmoshub-4"), ("instance", "node-1"))): 42.0,
            ("cosmos_general_community_pool", (("chain_id", "cosmoshub-4"), ("denom", "atom"), ("instance", "node-1"))): 1.0,
        }

    def test_unset_gauge_has_no_sample(self, parse_samples):
        accumulator = MetricAccumulator()
        accumulator.declare("cosmos_token_price", "Token price in USD")

        payload = SnapshotRenderer().render(accumulator).decode()

        assert "# TYPE cosmos_token_price gauge" in payload
        assert parse_samples(payload) == {}

    def test_content_type(self):
        assert SnapshotRenderer.content_type.startswith("text/plain")
