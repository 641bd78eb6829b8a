"""
Helpers for unwrapping the JSON printed by the AWS CLI.

A field that may legitimately be missing is read with optional_field, which
returns None; everything else goes through required_field, which raises.
"""

import json
from typing import Any, Optional

from ..errors import ResponseFormatError

__all__ = [
    'parse_json',
    'optional_field',
    'required_field',
]


def parse_json(description: str, output: str) -> Any:
    """
    Parse command output as JSON.

    Args:
        description: Description of the command that produced the output
        output: The raw command output

    Returns:
        The decoded JSON document

    Raises:
        ResponseFormatError: If the output is not valid JSON
    """
    try:
        return json.loads(output.strip())
    except json.JSONDecodeError as e:
        raise ResponseFormatError(description, f"output is not valid JSON ({e.msg})") from e


def optional_field(description: str, payload: Any, key: str) -> Optional[Any]:
    """
    Get a top level field that may be absent.

    Returns:
        The field value, or None if the field is absent

    Raises:
        ResponseFormatError: If payload is not a JSON object or the field is null
    """
    if not isinstance(payload, dict):
        raise ResponseFormatError(description, "expected a JSON object")
    if key in payload and payload[key] is None:
        raise ResponseFormatError(description, f"field {key} is null")
    return payload.get(key)


def required_field(description: str, payload: Any, *path: str) -> Any:
    """
    Follow path through nested JSON objects and return the value found.

    Args:
        description: Description of the command that produced the payload
        payload: Decoded JSON document
        *path: Keys to follow, outermost first

    Raises:
        ResponseFormatError: If any step is not an object or lacks the key
    """
    value = payload
    for depth, key in enumerate(path):
        if not isinstance(value, dict) or key not in value:
            raise ResponseFormatError(description, f"missing field {'.'.join(path[:depth + 1])}")
        value = value[key]
    return value
