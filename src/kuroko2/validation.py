"""
Schema Validation - JSON Schema validation of declared configuration.

Resources describe their attributes as Draft 7 JSON Schemas; these helpers
validate declared configuration against them and fill in defaults.
"""

import copy
import logging
from typing import Any, Dict, Optional, Tuple

from jsonschema import Draft7Validator, ValidationError

logger = logging.getLogger(__name__)


def validate_schema(schema: Dict[str, Any]) -> Tuple[bool, Optional[str]]:
    """
    Validate that a resource schema is itself a valid JSON Schema.

    Args:
        schema: The schema to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    try:
        Draft7Validator.check_schema(schema)
        return True, None
    except Exception as e:
        return False, f"Invalid schema: {str(e)}"


def validate_config_against_schema(
    config: Dict[str, Any], schema: Dict[str, Any]
) -> Tuple[bool, Optional[str]]:
    """
    Validate declared configuration against a resource schema.

    Args:
        config: The declared configuration to validate
        schema: The JSON Schema to validate against

    Returns:
        Tuple of (is_valid, error_message)
    """
    try:
        validator = Draft7Validator(schema)
        errors = list(validator.iter_errors(config))

        if not errors:
            return True, None

        error_messages = []
        for error in errors:
            path = ".".join(str(p) for p in error.absolute_path) or "(root)"
            error_messages.append(f"{path}: {error.message}")

        return False, "; ".join(error_messages)

    except ValidationError as e:
        return False, f"Validation error: {str(e)}"
    except Exception as e:
        logger.error(f"Unexpected error during validation: {e}")
        return False, f"Validation failed: {str(e)}"


def apply_defaults(config: Dict[str, Any], schema: Dict[str, Any]) -> Dict[str, Any]:
    """
    Return a copy of config with top-level schema defaults filled in.

    Only properties that are absent (or explicitly None) are defaulted.
    """
    result = copy.deepcopy(config)
    for name, prop in schema.get("properties", {}).items():
        if "default" in prop and result.get(name) is None:
            result[name] = copy.deepcopy(prop["default"])
    return result
