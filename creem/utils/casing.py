"""
Key Casing Conversion

Deep converters between the API wire convention (snake_case) and the SDK's
public convention (camelCase). Only mapping keys are renamed; values,
scalars and container shapes are left alone.
"""

import re
from typing import Any

_SNAKE_KEY = re.compile(r"^[a-z][a-z0-9]*(?:_[a-z0-9]+)+$")
_SNAKE_BOUNDARY = re.compile(r"_([a-z0-9])")
_CAMEL_KEY = re.compile(r"^[a-z][a-z0-9]*(?:[A-Z][a-z0-9]*)+$")
_CAMEL_BOUNDARY = re.compile(r"([A-Z])")


def camel_key(key: Any) -> Any:
    """Convert a single snake_case key to camelCase. Other keys pass through."""
    if not isinstance(key, str) or not _SNAKE_KEY.match(key):
        return key
    return _SNAKE_BOUNDARY.sub(lambda m: m.group(1).upper(), key)


def snake_key(key: Any) -> Any:
    """Convert a single camelCase key to snake_case. Other keys pass through."""
    if not isinstance(key, str) or not _CAMEL_KEY.match(key):
        return key
    return _CAMEL_BOUNDARY.sub(lambda m: f"_{m.group(1).lower()}", key)


def _convert(value: Any, convert_key) -> Any:
    if isinstance(value, dict):
        return {convert_key(k): _convert(v, convert_key) for k, v in value.items()}
    if isinstance(value, list):
        return [_convert(item, convert_key) for item in value]
    if isinstance(value, tuple):
        return tuple(_convert(item, convert_key) for item in value)
    return value


def to_camel_case(value: Any) -> Any:
    """
    Recursively rename snake_case mapping keys to camelCase.

    Nested mappings and every element of lists/tuples are walked. Numbers,
    booleans, None, strings and date/time values are returned untouched.
    Applying the conversion twice gives the same result as applying it once.
    """
    return _convert(value, camel_key)


def to_snake_case(value: Any) -> Any:
    """Recursively rename camelCase mapping keys to snake_case."""
    return _convert(value, snake_key)
