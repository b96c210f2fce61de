"""
Job Definition Resource - Manages Kuroko2 job definitions.

Translates between declared configuration / persisted state and the
Kuroko2 API representation, and drives the client for each lifecycle
operation.
"""

import logging
import re
from enum import Enum
from typing import Any, Dict, List, Optional

from kuroko2.errors import (
    ImportIdError,
    InternalConsistencyError,
    Kuroko2Error,
    ProviderNotConfiguredError,
)
from kuroko2.models import JobDefinition, JobDefinitionInput
from kuroko2.resources.base import ManagedResource, ResourceResult

logger = logging.getLogger(__name__)

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_DECIMAL_RE = re.compile(r"[+-]?[0-9]+")

STATE_ATTRIBUTES = [
    "id",
    "name",
    "description",
    "script",
    "admins",
    "cron",
    "tags",
    "notify_cancellation",
    "suspended",
    "prevent_multi",
    "slack_channel",
]


class PreventMulti(Enum):
    """Whether overlapping runs are prevented, keyed by the prior run's state."""

    NONE = 0
    WORKING_OR_ERROR = 1
    WORKING = 2
    ERROR = 3


def encode_prevent_multi(value: int) -> str:
    """Map the API integer to its declared symbol."""
    # bool would otherwise match 0/1
    if isinstance(value, int) and not isinstance(value, bool):
        for member in PreventMulti:
            if member.value == value:
                return member.name
    raise InternalConsistencyError(f"Unknown prevent_multi value: {value!r}")


def decode_prevent_multi(symbol: str) -> int:
    """Map a declared symbol to the API integer."""
    if isinstance(symbol, str) and symbol in PreventMulti.__members__:
        return PreventMulti[symbol].value
    raise InternalConsistencyError(f"Unknown prevent_multi value: {symbol!r}")


def _optional_list(items: List[str]) -> Optional[List[str]]:
    # An empty remote list is kept out of state so it matches an unset attribute
    return list(items) if items else None


def encode_job_definition(definition: JobDefinition) -> Dict[str, Any]:
    """Convert an API job definition into persisted state."""
    return {
        "id": definition.id,
        "name": definition.name,
        "description": definition.description,
        "script": definition.script,
        "admins": list(definition.admins),
        "cron": _optional_list(definition.cron),
        "tags": _optional_list(definition.tags),
        "notify_cancellation": definition.notify_cancellation,
        "suspended": definition.suspended,
        "prevent_multi": encode_prevent_multi(definition.prevent_multi),
        "slack_channel": definition.slack_channel,
    }


def decode_job_definition(config: Dict[str, Any]) -> JobDefinitionInput:
    """
    Convert declared configuration into an API request body.

    Expects schema defaults to have been applied. Unset cron and tags are
    sent as empty lists.
    """
    return JobDefinitionInput(
        name=config["name"],
        description=config["description"],
        script=config["script"],
        admins=list(config["admins"]),
        cron=list(config.get("cron") or []),
        tags=list(config.get("tags") or []),
        notify_cancellation=config["notify_cancellation"],
        suspended=config["suspended"],
        prevent_multi=decode_prevent_multi(config["prevent_multi"]),
        slack_channel=config["slack_channel"],
    )


def parse_import_id(import_id: str) -> int:
    """
    Parse an import identifier as a decimal 64-bit integer.

    Raises:
        ImportIdError: If the string is not a decimal integer in range.
    """
    if not isinstance(import_id, str) or not _DECIMAL_RE.fullmatch(import_id):
        raise ImportIdError(import_id, "expected a decimal integer")
    value = int(import_id)
    if not INT64_MIN <= value <= INT64_MAX:
        raise ImportIdError(import_id, "value out of range for a 64-bit integer")
    return value


class JobDefinitionResource(ManagedResource):
    """Managed resource for Kuroko2 job definitions."""

    @property
    def type_name(self) -> str:
        return "kuroko2_job_definition"

    @property
    def schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "required": ["name", "description", "script", "admins"],
            "additionalProperties": False,
            "properties": {
                "id": {"type": "integer", "readOnly": True},
                "name": {"type": "string"},
                "description": {"type": "string"},
                "script": {"type": "string"},
                "admins": {
                    "type": "array",
                    "items": {"type": "integer"},
                    "minItems": 1,
                },
                "cron": {
                    "type": ["array", "null"],
                    "items": {"type": "string"},
                },
                "tags": {
                    "type": ["array", "null"],
                    "items": {"type": "string"},
                },
                "notify_cancellation": {"type": "boolean", "default": True},
                "suspended": {"type": "boolean", "default": False},
                "prevent_multi": {
                    "type": "string",
                    "enum": [m.name for m in PreventMulti],
                    "default": PreventMulti.WORKING_OR_ERROR.name,
                },
                "slack_channel": {"type": "string", "default": ""},
            },
        }

    async def create(self, config: Dict[str, Any]) -> ResourceResult:
        result = ResourceResult()
        config = self.with_defaults(config)
        if not self._check_config(config, result):
            return result

        try:
            model = decode_job_definition(config)
            definition = await self.client.create_job_definition(model)
            result.state = encode_job_definition(definition)
        except Kuroko2Error as e:
            return self._report(result, "create", e)

        logger.info(f"Created job definition {definition.id} ({definition.name})")
        return result

    async def read(self, state: Dict[str, Any]) -> ResourceResult:
        result = ResourceResult()
        definition_id = self._state_id(state, result)
        if definition_id is None:
            return result

        try:
            definition = await self.client.get_job_definition(definition_id)
            result.state = encode_job_definition(definition)
        except Kuroko2Error as e:
            return self._report(result, "get", e)

        logger.debug(f"Read job definition {definition_id}")
        return result

    async def update(
        self, config: Dict[str, Any], state: Dict[str, Any]
    ) -> ResourceResult:
        result = ResourceResult()
        definition_id = self._state_id(state, result)
        if definition_id is None:
            return result

        config = self.with_defaults(config)
        if not self._check_config(config, result):
            return result

        try:
            model = decode_job_definition(config)
            await self.client.update_job_definition(definition_id, model)
        except Kuroko2Error as e:
            return self._report(result, "update", e)

        # The API answers 204 without a body; the declared values become state
        new_state = {attr: config.get(attr) for attr in STATE_ATTRIBUTES}
        new_state["id"] = definition_id
        result.state = new_state

        logger.info(f"Updated job definition {definition_id}")
        return result

    async def delete(self, state: Dict[str, Any]) -> ResourceResult:
        result = ResourceResult()
        definition_id = self._state_id(state, result)
        if definition_id is None:
            return result

        try:
            await self.client.delete_job_definition(definition_id)
        except Kuroko2Error as e:
            return self._report(result, "delete", e)

        logger.info(f"Deleted job definition {definition_id}")
        return result

    async def import_state(self, import_id: str) -> ResourceResult:
        result = ResourceResult()
        try:
            definition_id = parse_import_id(import_id)
        except ImportIdError as e:
            return result.add_error(
                "Import Error", f"Failed to import a job definition: {e}"
            )

        result.state = {"id": definition_id}
        logger.info(f"Imported job definition {definition_id}")
        return result

    # Private helper methods

    def _check_config(self, config: Dict[str, Any], result: ResourceResult) -> bool:
        is_valid, error = self.validate_config(config)
        if not is_valid:
            result.add_error("Invalid Configuration", error)
        return is_valid

    @staticmethod
    def _state_id(state: Dict[str, Any], result: ResourceResult) -> Optional[int]:
        definition_id = (state or {}).get("id")
        if isinstance(definition_id, bool) or not isinstance(definition_id, int):
            result.add_error(
                "Invalid State",
                f"Job definition state has no integer id: {definition_id!r}",
            )
            return None
        return definition_id

    @staticmethod
    def _report(
        result: ResourceResult, verb: str, error: Kuroko2Error
    ) -> ResourceResult:
        if isinstance(error, InternalConsistencyError):
            logger.error(f"Internal consistency failure during {verb}: {error}")
            return result.add_error("Internal Error", str(error))
        if isinstance(error, ProviderNotConfiguredError):
            return result.add_error("Provider Not Configured", str(error))
        logger.warning(f"Failed to {verb} a job definition: {error}")
        return result.add_error(
            "API Error", f"Failed to {verb} a job definition: {error}"
        )
