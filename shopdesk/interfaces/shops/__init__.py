"""Shops bounded context — HTTP interface."""
