"""
Shopdesk — administration service for the Shop resource.

Application package root. This is a small modular monolith using
hexagonal architecture (ports & adapters).

Bounded contexts:
    - shops: listing, creating, editing and deleting shops.

Layers:
    - domain: Entities, ports (ABCs), policies, errors. No framework imports.
    - application: ShopService, DTOs, typed results.
    - infrastructure: Adapters (SQL persistence) implementing domain ports.
    - interfaces: FastAPI routers, the shop controller, page rendering.
    - shared: Cross-cutting concerns (errors, pagination, security, logging).
"""
