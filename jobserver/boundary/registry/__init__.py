"""User and project registry adapters."""

from jobserver.boundary.registry.static_registry import StaticRegistry

__all__ = ["StaticRegistry"]
