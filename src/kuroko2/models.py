"""
Job definition data model.

JobDefinition is what the Kuroko2 API returns; JobDefinitionInput is what
create and update requests send. The identifier is assigned by the server
and only ever appears on JobDefinition.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List

from kuroko2.errors import DecodeError


def normalize_newlines(text: str) -> str:
    """Convert CRLF and lone CR line endings to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def _require(data: Dict[str, Any], key: str, expected: type) -> Any:
    if key not in data:
        raise DecodeError(f"Job definition is missing field '{key}'")
    value = data[key]
    # bool is a subclass of int; an id or prevent_multi of true is not valid
    if expected is int and isinstance(value, bool):
        raise DecodeError(f"Field '{key}' must be {expected.__name__}, got bool")
    if not isinstance(value, expected):
        raise DecodeError(
            f"Field '{key}' must be {expected.__name__}, "
            f"got {type(value).__name__}"
        )
    return value


def _require_list(
    data: Dict[str, Any], key: str, item_type: type, nullable: bool = False
) -> List[Any]:
    if nullable and data.get(key) is None:
        return []
    items = _require(data, key, list)
    for item in items:
        if isinstance(item, bool) or not isinstance(item, item_type):
            raise DecodeError(
                f"Field '{key}' must contain only {item_type.__name__} values"
            )
    return list(items)


@dataclass
class JobDefinitionInput:
    """Request body for creating or updating a job definition."""

    name: str
    description: str
    script: str
    admins: List[int]
    cron: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    notify_cancellation: bool = True
    suspended: bool = False
    prevent_multi: int = 1
    slack_channel: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the wire field names."""
        return {
            "name": self.name,
            "description": self.description,
            "script": self.script,
            "user_id": list(self.admins),
            "cron": list(self.cron),
            "tags": list(self.tags),
            "notify_cancellation": self.notify_cancellation,
            "suspended": self.suspended,
            "prevent_multi": self.prevent_multi,
            "slack_channel": self.slack_channel,
        }


@dataclass
class JobDefinition:
    """A job definition as stored by the Kuroko2 API."""

    id: int
    name: str
    description: str
    script: str
    admins: List[int]
    cron: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    notify_cancellation: bool = True
    suspended: bool = False
    prevent_multi: int = 1
    slack_channel: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "JobDefinition":
        """
        Decode a job definition from a parsed JSON body.

        Raises:
            DecodeError: If a field is missing or has the wrong JSON type.
        """
        if not isinstance(data, dict):
            raise DecodeError(
                f"Job definition must be a JSON object, got {type(data).__name__}"
            )

        return cls(
            id=_require(data, "id", int),
            name=_require(data, "name", str),
            description=_require(data, "description", str),
            script=_require(data, "script", str),
            admins=_require_list(data, "user_id", int),
            cron=_require_list(data, "cron", str, nullable=True),
            tags=_require_list(data, "tags", str, nullable=True),
            notify_cancellation=_require(data, "notify_cancellation", bool),
            suspended=_require(data, "suspended", bool),
            prevent_multi=_require(data, "prevent_multi", int),
            slack_channel=_require(data, "slack_channel", str),
        )

    def normalize(self) -> "JobDefinition":
        """Return a copy with description and script line endings normalized."""
        return replace(
            self,
            description=normalize_newlines(self.description),
            script=normalize_newlines(self.script),
        )
