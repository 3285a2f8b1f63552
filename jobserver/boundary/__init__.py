"""
Boundary layer for external system integrations.

Handles all interactions with external systems (database, remote processor,
user/project registries, message broker). Provides adapters implementing
the core ports.
"""
