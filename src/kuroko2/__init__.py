"""
Kuroko2 provider.

Manages Kuroko2 job definitions declaratively: a provider builds the API
client from its configuration and hands out resources implementing the
create/read/update/delete/import lifecycle.
"""

from kuroko2.client import Kuroko2Client
from kuroko2.config import ProviderConfig
from kuroko2.errors import (
    DecodeError,
    ImportIdError,
    InternalConsistencyError,
    Kuroko2Error,
    ProviderNotConfiguredError,
    TransportError,
    UnexpectedStatusError,
)
from kuroko2.models import JobDefinition, JobDefinitionInput
from kuroko2.provider import Kuroko2Provider
from kuroko2.resources import (
    Diagnostic,
    DiagnosticSeverity,
    JobDefinitionResource,
    ManagedResource,
    ResourceResult,
)

__version__ = "0.1.0"

__all__ = [
    "Kuroko2Client",
    "ProviderConfig",
    "Kuroko2Provider",
    "JobDefinition",
    "JobDefinitionInput",
    "ManagedResource",
    "JobDefinitionResource",
    "ResourceResult",
    "Diagnostic",
    "DiagnosticSeverity",
    "Kuroko2Error",
    "TransportError",
    "UnexpectedStatusError",
    "DecodeError",
    "InternalConsistencyError",
    "ImportIdError",
    "ProviderNotConfiguredError",
]
