"""
Configuration module for the Kuroko2 provider.

Loads configuration from environment variables or from a provider
configuration block supplied by the orchestrator.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class ProviderConfig:
    """Kuroko2 API endpoint and credentials. Read-only after construction."""

    endpoint: str
    username: str
    apikey: str = field(repr=False)  # Never log the API key
    timeout: float = DEFAULT_TIMEOUT  # seconds, per request

    def __post_init__(self):
        missing = [
            name
            for name in ("endpoint", "username", "apikey")
            if not getattr(self, name)
        ]
        if missing:
            raise ValueError(
                f"Provider configuration is missing required values: "
                f"{', '.join(missing)}"
            )
        if self.timeout <= 0:
            raise ValueError("Provider timeout must be a positive number of seconds")

    @property
    def base_url(self) -> str:
        """Endpoint URL without a trailing slash."""
        return self.endpoint.rstrip("/")

    @classmethod
    def from_env(cls):
        """Load from environment variables."""
        apikey = os.getenv("KUROKO2_APIKEY", "")
        if not apikey:
            raise ValueError(
                "KUROKO2_APIKEY environment variable must be set. "
                "API key cannot be empty."
            )

        return cls(
            endpoint=os.getenv("KUROKO2_ENDPOINT", ""),
            username=os.getenv("KUROKO2_USERNAME", ""),
            apikey=apikey,
            timeout=float(os.getenv("KUROKO2_TIMEOUT", str(DEFAULT_TIMEOUT))),
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        """Build from a provider configuration block."""
        return cls(
            endpoint=data.get("endpoint", ""),
            username=data.get("username", ""),
            apikey=data.get("apikey", ""),
            timeout=float(data.get("timeout", DEFAULT_TIMEOUT)),
        )


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @classmethod
    def from_env(cls):
        """Load from environment variables."""
        return cls(level=os.getenv("LOG_LEVEL", "INFO").upper())


@dataclass
class Config:
    """Main configuration object."""

    provider: ProviderConfig
    logging: LoggingConfig

    @classmethod
    def from_env(cls):
        """Load all configuration from environment variables."""
        return cls(
            provider=ProviderConfig.from_env(),
            logging=LoggingConfig.from_env(),
        )


def configure_logging(logging_config: Optional[LoggingConfig] = None) -> None:
    """Set up root logging for command-line use."""
    logging_config = logging_config or LoggingConfig.from_env()
    logging.basicConfig(level=logging_config.level, format=logging_config.format)


# Global config instance
config: Optional[Config] = None


def load_config() -> Config:
    """Load configuration (singleton pattern)."""
    global config
    if config is None:
        config = Config.from_env()
    return config


def get_config() -> Config:
    """Get the current configuration."""
    if config is None:
        return load_config()
    return config


def reset_config() -> None:
    """Reset configuration (mainly for testing)."""
    global config
    config = None
