"""Pytest configuration and fixtures."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from kuroko2.client import Kuroko2Client
from kuroko2.config import ProviderConfig


@pytest.fixture
def provider_config():
    """Provider configuration pointing at a fake endpoint."""
    return ProviderConfig(
        endpoint="https://kuroko2.example.com/v1/",
        username="terraform",
        apikey="secret-key",
        timeout=5,
    )


@pytest.fixture
def client(provider_config):
    return Kuroko2Client(provider_config)


@pytest.fixture
def wire_definition():
    """A job definition body as returned by the Kuroko2 API."""
    return {
        "id": 42,
        "name": "nightly-report",
        "description": "Builds the nightly report.\r\nOwned by the data team.",
        "user_id": [3, 1, 2],
        "script": "env: FOO=bar\r\nexecute: bin/report\r\n",
        "cron": ["0 3 * * *"],
        "tags": ["report", "daily"],
        "notify_cancellation": True,
        "suspended": False,
        "prevent_multi": 1,
        "slack_channel": "#reports",
    }


@pytest.fixture
def declared_config():
    """Declared configuration for a job definition."""
    return {
        "name": "nightly-report",
        "description": "Builds the nightly report.\nOwned by the data team.",
        "script": "env: FOO=bar\nexecute: bin/report\n",
        "admins": [3, 1, 2],
        "cron": ["0 3 * * *"],
        "tags": ["report", "daily"],
        "notify_cancellation": True,
        "suspended": False,
        "prevent_multi": "WORKING_OR_ERROR",
        "slack_channel": "#reports",
    }


@pytest.fixture
def mock_session_cls():
    """Patch aiohttp.ClientSession as seen by the client module."""
    with patch("kuroko2.client.aiohttp.ClientSession") as session_cls:
        yield session_cls


@pytest.fixture
def respond(mock_session_cls):
    """
    Configure the patched session to answer the next request.

    Returns the mock session so tests can inspect request() calls.
    """

    def _respond(status=200, body=None, json_error=None, request_error=None):
        mock_resp = AsyncMock()
        mock_resp.status = status
        mock_resp.json = AsyncMock(return_value=body, side_effect=json_error)

        mock_session = AsyncMock()
        if request_error is not None:
            mock_session.request = MagicMock(side_effect=request_error)
        else:
            mock_session.request = MagicMock(
                return_value=AsyncMock(
                    __aenter__=AsyncMock(return_value=mock_resp),
                    __aexit__=AsyncMock(return_value=False),
                )
            )

        mock_session_cls.return_value = AsyncMock(
            __aenter__=AsyncMock(return_value=mock_session),
            __aexit__=AsyncMock(return_value=False),
        )
        return mock_session

    return _respond
