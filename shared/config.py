"""
Shared configuration management for the Cosmos exporter.
"""

import re
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LABEL_NAME_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")

# Labels the exporter attaches itself
RESERVED_LABEL_NAMES = frozenset({"chain_id", "denom"})


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_prefix="EXPORTER_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")

    # Listener
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=9300)


class ExporterSettings(BaseConfig):
    """Exporter-specific configuration."""

    # Upstream endpoints
    rpc_url: str = Field(default="http://localhost:26657")
    grpc_gateway_url: str = Field(default="http://localhost:1317")
    chain_directory_url: str = Field(default="https://chains.cosmos.directory")

    # Chain identity
    chain_id: str = Field(default="cosmoshub-4")
    denom: str = Field(default="atom")
    base_denom: Optional[str] = Field(default=None)
    denom_coefficient: float = Field(default=1_000_000.0)

    # Scrape behaviour
    query_timeout_seconds: float = Field(default=10.0)
    const_labels: Dict[str, str] = Field(default_factory=dict)

    @field_validator("denom_coefficient", "query_timeout_seconds")
    @classmethod
    def _must_be_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("must be greater than zero")
        return value

    @field_validator("const_labels")
    @classmethod
    def _valid_label_names(cls, value: Dict[str, str]) -> Dict[str, str]:
        for name in value:
            if not LABEL_NAME_RE.match(name) or name.startswith("__"):
                raise ValueError(f"{name!r} is not a valid Prometheus label name")
            if name in RESERVED_LABEL_NAMES:
                raise ValueError(f"{name!r} is set by the exporter and cannot be a constant label")
        return value


@dataclass(frozen=True)
class ScrapeConfig:
    """Immutable per-process settings threaded into every scrape."""

    chain_id: str
    denom: str
    denom_coefficient: float
    query_timeout_seconds: float
    base_denom: Optional[str] = None
    extra_labels: Tuple[Tuple[str, str], ...] = ()

    @property
    def const_labels(self) -> Dict[str, str]:
        """Labels applied to every exposed gauge."""
        labels = {"chain_id": self.chain_id}
        labels.update(dict(self.extra_labels))
        return labels

    @classmethod
    def from_settings(cls, settings: ExporterSettings) -> "ScrapeConfig":
        return cls(
            chain_id=settings.chain_id,
            denom=settings.denom,
            denom_coefficient=settings.denom_coefficient,
            query_timeout_seconds=settings.query_timeout_seconds,
            base_denom=settings.base_denom,
            extra_labels=tuple(sorted(settings.const_labels.items())),
        )


def get_config(**overrides) -> ExporterSettings:
    """Load exporter configuration from the environment."""
    return ExporterSettings(**overrides)
