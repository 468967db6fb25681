"""Shared utilities used by the infrastructure adapters."""
