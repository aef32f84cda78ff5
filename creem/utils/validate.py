"""
Request Parameter Validation

Small guards used by the API resources before a request is sent.
Optional checks (is_*) accept None; use required() for mandatory values.
"""

from typing import Any, Iterable, Mapping

from creem.utils.exceptions import ValidationException


def required(value: Any, name: str) -> None:
    """Raise if a mandatory parameter is missing or empty"""
    if value is None or value == "":
        raise ValidationException(
            f"Missing required parameter: {name}",
            details={"parameter": name},
        )


def is_string(value: Any, name: str) -> None:
    if value is not None and not isinstance(value, str):
        raise ValidationException(
            f"Parameter {name} must be a string",
            details={"parameter": name, "type": type(value).__name__},
        )


def is_number(value: Any, name: str) -> None:
    if value is not None and (
        isinstance(value, bool) or not isinstance(value, (int, float))
    ):
        raise ValidationException(
            f"Parameter {name} must be a number",
            details={"parameter": name, "type": type(value).__name__},
        )


def is_array(value: Any, name: str) -> None:
    if value is not None and not isinstance(value, (list, tuple)):
        raise ValidationException(
            f"Parameter {name} must be an array",
            details={"parameter": name, "type": type(value).__name__},
        )


def is_mapping(value: Any, name: str) -> None:
    if value is not None and not isinstance(value, Mapping):
        raise ValidationException(
            f"Parameter {name} must be an object",
            details={"parameter": name, "type": type(value).__name__},
        )


def one_of(value: Any, choices: Iterable[Any], name: str) -> None:
    choices = tuple(choices)
    if value is not None and value not in choices:
        raise ValidationException(
            f"Parameter {name} must be one of {list(choices)}",
            details={"parameter": name, "value": value},
        )
