"""Shops bounded context — infrastructure adapters."""
