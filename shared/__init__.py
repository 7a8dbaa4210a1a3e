"""
Shared utilities for the Cosmos exporter.

This package aggregates common building blocks consumed by the exporter
service:

- config: Service configuration via pydantic-settings
- logging: Structured logging with request correlation
- metrics: Prometheus self-metrics for the exporter process
- errors: Canonical error types and responses
- base_service: FastAPI application scaffolding

Do not import from service_* packages into shared/.
"""
