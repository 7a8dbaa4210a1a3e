"""
Exporter service package.

Serves general Cosmos chain metrics on `/metrics/general`: each scrape fans
out queries to the node's RPC and gRPC gateway plus the chain directory, and
renders whatever came back in the Prometheus text format.
"""
