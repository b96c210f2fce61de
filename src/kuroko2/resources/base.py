"""
Managed Resource Base - Abstract interface for managed resources.

A managed resource implements the create/read/update/delete/import
lifecycle that a declarative orchestrator drives. The orchestrator owns
persisted state; resources receive it, call the API, and hand new state
back inside a ResourceResult together with any diagnostics.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from kuroko2.client import Kuroko2Client
from kuroko2.errors import ProviderNotConfiguredError
from kuroko2.validation import apply_defaults, validate_config_against_schema

logger = logging.getLogger(__name__)


class DiagnosticSeverity(Enum):
    """Severity of a diagnostic reported to the orchestrator."""

    ERROR = "error"
    WARNING = "warning"


@dataclass
class Diagnostic:
    """A structured message for the orchestrator (category + detail)."""

    severity: DiagnosticSeverity
    summary: str
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.summary}: {self.detail}"
        return self.summary


@dataclass
class ResourceResult:
    """
    Result of a lifecycle operation.

    state is the new persisted state, or None when the operation produced
    none (delete) or failed. An errored result never carries state.
    """

    state: Optional[Dict[str, Any]] = None
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def has_error(self) -> bool:
        return any(d.severity is DiagnosticSeverity.ERROR for d in self.diagnostics)

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is DiagnosticSeverity.ERROR]

    def add_error(self, summary: str, detail: str = "") -> "ResourceResult":
        self.diagnostics.append(
            Diagnostic(DiagnosticSeverity.ERROR, summary, detail)
        )
        self.state = None
        return self

    def add_warning(self, summary: str, detail: str = "") -> "ResourceResult":
        self.diagnostics.append(
            Diagnostic(DiagnosticSeverity.WARNING, summary, detail)
        )
        return self


class ManagedResource(ABC):
    """
    Abstract base class for managed resources.

    Subclasses implement each lifecycle operation for one resource type.
    The orchestrator guarantees operations on a single resource instance
    are never invoked concurrently.
    """

    def __init__(self, client: Optional[Kuroko2Client] = None):
        self._client = client

    @property
    @abstractmethod
    def type_name(self) -> str:
        """Resource type name (e.g., 'kuroko2_job_definition')."""
        pass

    @property
    @abstractmethod
    def schema(self) -> Dict[str, Any]:
        """Draft 7 JSON Schema describing declared configuration."""
        pass

    def configure(self, client: Kuroko2Client) -> None:
        """Attach the API client shared by the provider."""
        self._client = client

    @property
    def client(self) -> Kuroko2Client:
        if self._client is None:
            raise ProviderNotConfiguredError(
                f"Resource {self.type_name} has no API client; "
                f"configure the provider first"
            )
        return self._client

    def validate_config(self, config: Dict[str, Any]) -> Tuple[bool, Optional[str]]:
        """
        Validate declared configuration against this resource's schema.

        Returns:
            Tuple of (is_valid, error_message). If valid, error_message is None.
        """
        return validate_config_against_schema(config, self.schema)

    def with_defaults(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Return declared configuration with schema defaults applied."""
        return apply_defaults(config, self.schema)

    @abstractmethod
    async def create(self, config: Dict[str, Any]) -> ResourceResult:
        """
        Create the remote object from declared configuration.

        Args:
            config: Declared configuration

        Returns:
            ResourceResult whose state includes the server-assigned id.
        """
        pass

    @abstractmethod
    async def read(self, state: Dict[str, Any]) -> ResourceResult:
        """
        Refresh persisted state from the remote object.

        Args:
            state: Current persisted state; only the id is required.

        Returns:
            ResourceResult with the refreshed state.
        """
        pass

    @abstractmethod
    async def update(
        self, config: Dict[str, Any], state: Dict[str, Any]
    ) -> ResourceResult:
        """
        Apply declared configuration to an existing remote object.

        Args:
            config: Declared configuration
            state: Current persisted state holding the id

        Returns:
            ResourceResult with the new persisted state.
        """
        pass

    @abstractmethod
    async def delete(self, state: Dict[str, Any]) -> ResourceResult:
        """
        Delete the remote object.

        Returns:
            ResourceResult with no state; the orchestrator drops the resource
            when it carries no error.
        """
        pass

    @abstractmethod
    async def import_state(self, import_id: str) -> ResourceResult:
        """
        Seed state for an existing remote object from an identifier string.

        The orchestrator follows up with read() to hydrate the rest.
        """
        pass
