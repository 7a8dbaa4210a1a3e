"""
Upstream clients for the exporter.

- rpc_client: Tendermint RPC status
- query_client: Cosmos SDK module queries via the gRPC gateway
- governance: voting-period proposal count with gov schema fallback
- price_client: USD price from the chain directory
"""
