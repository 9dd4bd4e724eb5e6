"""
Shops bounded context — domain layer.

Entities, persistence and authorization ports, the permission policy
and the domain errors for the Shop resource.
"""
