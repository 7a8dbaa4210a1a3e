"""Cosmos general metrics exporter service."""
