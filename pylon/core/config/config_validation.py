from __future__ import annotations

from typing import Any, Dict, List

import jsonschema

USER_CONFIG_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "$id": "pylon://config/user_config.schema.json",
    "type": "object",
    "properties": {
        "default_network": {"type": "string", "minLength": 1},
        "networks": {
            "type": "object",
            "additionalProperties": {
                "type": "object",
                "properties": {
                    "url": {"type": "string", "minLength": 1},
                    "chain_id": {"type": "string"},
                    "timeout_s": {"type": "number", "exclusiveMinimum": 0},
                    "accounts": {"type": "array", "items": {"type": "string"}},
                },
            },
        },
        "paths": {
            "type": "object",
            "properties": {
                "config_file": False,
            },
            "additionalProperties": {"type": "string"},
        },
        "plugins": {"type": "array", "items": {"type": "string", "minLength": 1}},
    },
}


def check_schema() -> None:
    jsonschema.Draft202012Validator.check_schema(USER_CONFIG_SCHEMA)


def _location(error: jsonschema.ValidationError) -> str:
    parts = [str(p) for p in error.absolute_path]
    return ".".join(parts) if parts else "<root>"


def validate_user_config(user_config: Any) -> List[str]:
    """
    Validates a user config and returns a list of error strings (empty means valid).
    """
    validator = jsonschema.Draft202012Validator(USER_CONFIG_SCHEMA)
    errors = sorted(validator.iter_errors(user_config), key=lambda e: (list(map(str, e.absolute_path)), e.message))
    return ["{}: {}".format(_location(e), e.message) for e in errors]
