"""
Infrastructure layer package.

Contains adapters that implement domain ports: database access
and other IO. Domain and application code never import from here.
"""
