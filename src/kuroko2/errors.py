"""
Errors - Failure kinds raised by the Kuroko2 client and resources.

The client raises these; resources turn them into diagnostics for the
orchestrator. None of them are retried.
"""

from typing import Optional


class Kuroko2Error(Exception):
    """Base class for all Kuroko2 provider errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class TransportError(Kuroko2Error):
    """Raised when a request fails at the network level (connection, timeout)."""


class UnexpectedStatusError(Kuroko2Error):
    """Raised when the API answers with a status other than the expected one."""

    def __init__(self, method: str, url: str, status: int):
        self.method = method
        self.url = url
        self.status = status
        super().__init__(f"{method} {url} returned unexpected status code: {status}")


class DecodeError(Kuroko2Error):
    """Raised when a response body does not decode into a job definition."""


class InternalConsistencyError(Kuroko2Error):
    """
    Raised when a value outside a known enumeration is seen.

    Either the API returned something this provider does not understand,
    or a declared value slipped past schema validation.
    """


class ImportIdError(Kuroko2Error):
    """Raised when an import identifier is not a decimal 64-bit integer."""

    def __init__(self, import_id: str, reason: Optional[str] = None):
        self.import_id = import_id
        message = f"Invalid import identifier {import_id!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ProviderNotConfiguredError(Kuroko2Error):
    """Raised when a resource is used before the provider has been configured."""
