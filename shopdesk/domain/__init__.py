"""
Domain layer package.

Contains pure business concepts: entities, ports (ABCs), policies and
domain errors. No framework imports allowed in this layer.
"""
