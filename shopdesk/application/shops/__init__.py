"""Shops bounded context — application layer."""
