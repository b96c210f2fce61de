"""
Kuroko2 API Client - Job definition endpoints of the Kuroko2 REST API.

Every call is a single HTTP round trip authenticated with HTTP Basic
credentials. Nothing is retried; failures are raised as Kuroko2Error
subclasses for the caller to report.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

import aiohttp

from kuroko2.config import ProviderConfig
from kuroko2.errors import DecodeError, TransportError, UnexpectedStatusError
from kuroko2.models import JobDefinition, JobDefinitionInput

logger = logging.getLogger(__name__)


class Kuroko2Client:
    """
    Client for the Kuroko2 job definition API.

    Holds only the immutable provider configuration, so one instance can be
    shared by any number of resources.
    """

    def __init__(self, config: ProviderConfig):
        self.config = config
        self._auth = aiohttp.BasicAuth(config.username, config.apikey)
        self._timeout = aiohttp.ClientTimeout(total=config.timeout)

    @property
    def definitions_url(self) -> str:
        return f"{self.config.base_url}/definitions"

    def definition_url(self, definition_id: int) -> str:
        return f"{self.definitions_url}/{definition_id}"

    async def get_job_definition(self, definition_id: int) -> JobDefinition:
        """
        Fetch a job definition by id.

        Raises:
            UnexpectedStatusError: If the API does not answer 200.
            DecodeError: If the body is not a job definition.
            TransportError: On connection errors or timeouts.
        """
        body = await self._request(
            "GET", self.definition_url(definition_id), expected_status=200
        )
        return self._decode_definition(body)

    async def create_job_definition(self, model: JobDefinitionInput) -> JobDefinition:
        """
        Create a job definition.

        The API queues the creation and answers 202 with the stored
        definition, including the id it assigned.
        """
        body = await self._request(
            "POST",
            self.definitions_url,
            expected_status=202,
            payload=model.to_dict(),
        )
        return self._decode_definition(body)

    async def update_job_definition(
        self, definition_id: int, model: JobDefinitionInput
    ) -> None:
        """Replace a job definition. The API answers 204 with no body."""
        await self._request(
            "PUT",
            self.definition_url(definition_id),
            expected_status=204,
            payload=model.to_dict(),
            read_body=False,
        )

    async def delete_job_definition(self, definition_id: int) -> None:
        """Delete a job definition. The API answers 204 with no body."""
        await self._request(
            "DELETE",
            self.definition_url(definition_id),
            expected_status=204,
            read_body=False,
        )

    # Private helper methods

    @staticmethod
    def _decode_definition(body: Any) -> JobDefinition:
        return JobDefinition.from_dict(body).normalize()

    async def _request(
        self,
        method: str,
        url: str,
        expected_status: int,
        payload: Optional[Dict[str, Any]] = None,
        read_body: bool = True,
    ) -> Any:
        """Issue one request and return the parsed JSON body (or None)."""
        logger.debug(f"{method} {url}")

        try:
            async with aiohttp.ClientSession(
                auth=self._auth, timeout=self._timeout
            ) as session:
                async with session.request(method, url, json=payload) as response:
                    if response.status != expected_status:
                        logger.warning(
                            f"{method} {url} returned {response.status}, "
                            f"expected {expected_status}"
                        )
                        raise UnexpectedStatusError(method, url, response.status)

                    if not read_body:
                        return None

                    try:
                        return await response.json(content_type=None)
                    except ValueError as e:
                        raise DecodeError(
                            f"{method} {url} returned a body that is not JSON: {e}"
                        ) from e

        except asyncio.TimeoutError as e:
            logger.warning(f"{method} {url} timed out after {self.config.timeout}s")
            raise TransportError(
                f"{method} {url} timed out after {self.config.timeout}s"
            ) from e
        except aiohttp.ClientError as e:
            logger.warning(f"{method} {url} failed: {e}")
            raise TransportError(f"{method} {url} failed: {e}") from e
