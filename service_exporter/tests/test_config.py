"""
Unit tests for exporter configuration.
"""

import pytest
from pydantic import ValidationError

from shared.config import ExporterSettings, ScrapeConfig


class TestExporterSettings:
    """Test cases for ExporterSettings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("EXPORTER_CHAIN_ID", raising=False)
        settings = ExporterSettings(_env_file=None)

        assert settings.port == 9300
        assert settings.denom_coefficient == 1_000_000.0
        assert settings.base_denom is None
        assert settings.const_labels == {}

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("EXPORTER_CHAIN_ID", "juno-1")
        monkeypatch.setenv("EXPORTER_DENOM", "juno")
        monkeypatch.setenv("EXPORTER_DENOM_COEFFICIENT", "1000000")
        monkeypatch.setenv("EXPORTER_CONST_LABELS", '{"instance": "validator-1"}')

        settings = ExporterSettings(_env_file=None)

        assert settings.chain_id == "juno-1"
        assert settings.denom == "juno"
        assert settings.const_labels == {"instance": "validator-1"}

    @pytest.mark.parametrize("field", ["denom_coefficient", "query_timeout_seconds"])
    @pytest.mark.parametrize("value", [0, -1.5])
    def test_rejects_non_positive(self, field, value):
        with pytest.raises(ValidationError):
            ExporterSettings(_env_file=None, **{field: value})

    @pytest.mark.parametrize("name", ["denom", "chain_id", "my-label", "1st", "__meta", ""])
    def test_rejects_bad_const_label_names(self, name):
        with pytest.raises(ValidationError):
            ExporterSettings(_env_file=None, const_labels={name: "x"})

    def test_rejects_bad_const_labels_from_environment(self, monkeypatch):
        monkeypatch.setenv("EXPORTER_CONST_LABELS", '{"denom": "x"}')

        with pytest.raises(ValidationError):
            ExporterSettings(_env_file=None)

    def test_accepts_valid_const_labels(self):
        settings = ExporterSettings(_env_file=None, const_labels={"instance": "a", "_region": "eu"})

        assert settings.const_labels == {"instance": "a", "_region": "eu"}


class TestScrapeConfig:
    """Test cases for ScrapeConfig."""

    def test_from_settings(self):
        settings = ExporterSettings(
            _env_file=None,
            chain_id="osmosis-1",
            denom="osmo",
            base_denom="uosmo",
            query_timeout_seconds=3.0,
            const_labels={"region": "eu", "instance": "a"}
        )

        config = ScrapeConfig.from_settings(settings)

        assert config.chain_id == "osmosis-1"
        assert config.base_denom == "uosmo"
        assert config.query_timeout_seconds == 3.0
        assert config.const_labels == {"chain_id": "osmosis-1", "instance": "a", "region": "eu"}

    def test_is_immutable(self, scrape_config):
        with pytest.raises(AttributeError):
            scrape_config.denom = "other"
