"""
Voting-period proposal count with gov schema fallback.

Nodes that migrated to gov v1 refuse to render v1-only proposals through the
v1beta1 query and fail with a conversion error. The exporter does not know in
advance which schema a node serves, so it probes v1beta1 first and falls back
to v1 only on that specific error.
"""

from dataclasses import dataclass
from typing import Optional

from shared.logging import get_logger

from .query_client import CosmosQueryClient, GovSchema, ProposalStatus

SCHEMA_MISMATCH_MARKER = "can't convert a gov/v1 Proposal to gov/v1beta1 Proposal"

# Probe order
GOV_SCHEMAS = (GovSchema.V1BETA1, GovSchema.V1)

logger = get_logger("exporter.governance")


@dataclass(frozen=True)
class ProposalCountResult:
    """Outcome of one proposal query against one gov schema."""

    schema: GovSchema
    count: Optional[int] = None
    error: Optional[Exception] = None
    schema_mismatch: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, schema: GovSchema, count: int) -> "ProposalCountResult":
        return cls(schema=schema, count=count)

    @classmethod
    def failure(cls, schema: GovSchema, error: Exception) -> "ProposalCountResult":
        return cls(
            schema=schema,
            error=error,
            schema_mismatch=is_schema_mismatch(error),
        )


def is_schema_mismatch(error: Exception) -> bool:
    """True when the node rejected a v1beta1 query because it stores v1 proposals."""
    return SCHEMA_MISMATCH_MARKER in str(error)


async def probe_voting_proposals(client: CosmosQueryClient, schema: GovSchema) -> ProposalCountResult:
    try:
        response = await client.proposals(ProposalStatus.VOTING_PERIOD, schema)
    except Exception as exc:
        return ProposalCountResult.failure(schema, exc)

    return ProposalCountResult.success(schema, len(response.proposals))


async def count_voting_proposals(client: CosmosQueryClient) -> int:
    """Count proposals in voting period, whichever gov schema the node serves.

    Raises the underlying error when the v1beta1 query fails for any reason
    other than a schema mismatch, or when the v1 query fails.
    """
    result = None
    for schema in GOV_SCHEMAS:
        result = await probe_voting_proposals(client, schema)
        if result.ok:
            return result.count

        if not result.schema_mismatch:
            raise result.error

        logger.debug("Gov schema mismatch, trying next schema", schema=schema.value)

    raise result.error
