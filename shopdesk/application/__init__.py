"""
Application layer package.

Contains the services that orchestrate domain objects and ports,
the DTOs they exchange with the interface layer and typed results.
"""
