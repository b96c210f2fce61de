"""
Kuroko2 Provider - Entry point for orchestrators.

The provider validates its own configuration block (endpoint and
credentials), builds the shared API client, and hands out configured
resource instances by type name.
"""

import logging
from typing import Any, Dict, List, Optional

from kuroko2.client import Kuroko2Client
from kuroko2.config import ProviderConfig
from kuroko2.errors import ProviderNotConfiguredError
from kuroko2.registry import (
    ResourceRegistry,
    get_registry,
    register_builtin_resources,
)
from kuroko2.resources.base import ManagedResource
from kuroko2.validation import validate_config_against_schema

logger = logging.getLogger(__name__)


class Kuroko2Provider:
    """Provider for resources managed through the Kuroko2 API."""

    type_name = "kuroko2"

    schema: Dict[str, Any] = {
        "type": "object",
        "required": ["endpoint", "username", "apikey"],
        "properties": {
            "endpoint": {"type": "string", "minLength": 1},
            "username": {"type": "string", "minLength": 1},
            "apikey": {"type": "string", "minLength": 1, "writeOnly": True},
            "timeout": {"type": "number", "exclusiveMinimum": 0},
        },
    }

    def __init__(self, registry: Optional[ResourceRegistry] = None):
        self.registry = registry or get_registry()
        if not self.registry.list_resources():
            register_builtin_resources(self.registry)
        self.client: Optional[Kuroko2Client] = None

    @property
    def configured(self) -> bool:
        return self.client is not None

    def configure(self, config: Dict[str, Any]) -> None:
        """
        Validate the provider configuration block and build the API client.

        Raises:
            ValueError: If the configuration is invalid.
        """
        is_valid, error = validate_config_against_schema(config, self.schema)
        if not is_valid:
            raise ValueError(f"Invalid provider configuration: {error}")

        self.configure_with(ProviderConfig.from_dict(config))

    def configure_with(self, provider_config: ProviderConfig) -> None:
        """Build the API client from an already loaded ProviderConfig."""
        self.client = Kuroko2Client(provider_config)
        logger.info(f"Configured Kuroko2 provider for {provider_config.base_url}")

    def resource_types(self) -> List[str]:
        """List resource type names this provider manages."""
        return self.registry.list_resources()

    def resource(self, type_name: str) -> ManagedResource:
        """
        Get a resource instance wired to the provider's client.

        Raises:
            ProviderNotConfiguredError: If configure() has not been called.
            ValueError: If the type name is unknown.
        """
        if self.client is None:
            raise ProviderNotConfiguredError(
                f"Provider {self.type_name} must be configured before "
                f"using {type_name}"
            )
        resource = self.registry.get_resource(type_name)
        resource.configure(self.client)
        return resource
