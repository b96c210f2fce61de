"""
Managed resources package.

Each managed resource implements the create/read/update/delete/import
lifecycle for one Kuroko2 object type.
"""

from kuroko2.resources.base import (
    Diagnostic,
    DiagnosticSeverity,
    ManagedResource,
    ResourceResult,
)
from kuroko2.resources.job_definition import JobDefinitionResource

__all__ = [
    "Diagnostic",
    "DiagnosticSeverity",
    "ManagedResource",
    "ResourceResult",
    "JobDefinitionResource",
]
