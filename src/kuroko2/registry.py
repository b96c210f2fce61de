"""
Resource Registry - Discovery and registration of managed resources.

This module provides the central registry for resource types, handling
registration, entry-point discovery, and instantiation.
"""

import logging
from importlib.metadata import entry_points
from typing import Dict, Optional, Type

from kuroko2.resources.base import ManagedResource
from kuroko2.validation import validate_schema

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "kuroko2.resources"


class ResourceRegistry:
    """
    Central registry for managed resource types.

    Resource classes are registered once and instantiated on demand; each
    call to get_resource() returns a fresh instance.
    """

    def __init__(self):
        # Registered resource classes keyed by type name (not instantiated)
        self._resources: Dict[str, Type[ManagedResource]] = {}

    def register_resource(self, resource_class: Type[ManagedResource]) -> None:
        """
        Register a managed resource class.

        Args:
            resource_class: The ManagedResource subclass to register

        Raises:
            ValueError: If the resource's schema is not a valid JSON Schema
        """
        # Create temporary instance to get the type name and schema
        resource = resource_class()
        type_name = resource.type_name

        is_valid, error = validate_schema(resource.schema)
        if not is_valid:
            raise ValueError(f"Cannot register {type_name}: {error}")

        if type_name in self._resources:
            logger.warning(f"Overwriting existing resource type: {type_name}")

        self._resources[type_name] = resource_class
        logger.info(f"Registered resource type: {type_name}")

    def get_resource(self, type_name: str) -> ManagedResource:
        """
        Get a new, unconfigured resource instance.

        Args:
            type_name: The resource type name

        Returns:
            A ManagedResource instance

        Raises:
            ValueError: If the type name is not registered
        """
        if type_name not in self._resources:
            available = ", ".join(self._resources.keys()) or "none"
            raise ValueError(
                f"Unknown resource type: {type_name}. Available types: {available}"
            )
        return self._resources[type_name]()

    def list_resources(self) -> list[str]:
        """List all registered resource type names."""
        return list(self._resources.keys())

    def has_resource(self, type_name: str) -> bool:
        """Check if a resource type is registered."""
        return type_name in self._resources


# Global registry instance
_registry: Optional[ResourceRegistry] = None


def get_registry() -> ResourceRegistry:
    """Get the global resource registry singleton."""
    global _registry
    if _registry is None:
        _registry = ResourceRegistry()
    return _registry


def reset_registry() -> None:
    """Reset the global registry (mainly for testing)."""
    global _registry
    _registry = None


def register_builtin_resources(
    registry: Optional[ResourceRegistry] = None,
) -> ResourceRegistry:
    """
    Register the built-in resources and discover third-party resources
    via entry points.

    Args:
        registry: Registry to populate; defaults to the global registry
    """
    registry = registry or get_registry()

    from kuroko2.resources.job_definition import JobDefinitionResource

    registry.register_resource(JobDefinitionResource)

    discovered = entry_points(group=ENTRY_POINT_GROUP)
    for ep in discovered:
        try:
            resource_class = ep.load()
            registry.register_resource(resource_class)
        except Exception as e:
            logger.warning(f"Could not load resource {ep.name}: {e}")

    return registry
