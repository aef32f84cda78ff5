"""
Webhook Field Normalizer

Converts the snake_case keys of a decoded webhook entity to camelCase,
deep over nested mappings and lists. Purely syntactic: it has no knowledge
of event types and never fails on decoded JSON.
"""

from typing import Any

from creem.utils.casing import to_camel_case


def normalize_webhook_data(value: Any) -> Any:
    """Return a copy of value with every wire-convention key in camelCase"""
    return to_camel_case(value)
