"""Cypher tool input binding with number handling that keeps integers integral."""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional, Union

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
# Whole floats below this magnitude are written without exponent or fraction on the wire.
_PLAIN_FLOAT_LIMIT = 1e21


class ArgumentError(ValueError):
    """Raised when tool arguments cannot be bound to a Cypher input."""


@dataclass
class CypherInput:
    """A Cypher statement and the parameters to run it with."""

    query: str = ""
    params: Optional[dict[str, Any]] = None


def _convert_decimal(number: Decimal) -> Union[int, float, str]:
    if number.is_finite() and number.as_tuple().exponent == 0:
        integer = int(number)
        if _INT64_MIN <= integer <= _INT64_MAX:
            return integer
    as_float = float(number)
    if math.isinf(as_float) or math.isnan(as_float):
        return str(number)
    return as_float


def convert_numbers(value: Any) -> Any:
    """Turn textual JSON numbers (Decimal) into int or float, recursing into dicts and lists.

    A number written without fraction or exponent that fits in 64 bits becomes
    an int; any other number becomes a float, or its text if no float holds it.
    Other values are returned unchanged.
    """
    if isinstance(value, Decimal):
        return _convert_decimal(value)
    if isinstance(value, dict):
        return {key: convert_numbers(item) for key, item in value.items()}
    if isinstance(value, list):
        return [convert_numbers(item) for item in value]
    return value


def _reject_constant(name: str) -> Any:
    raise ArgumentError(f"invalid JSON number {name}")


def parse_params(data: Union[str, bytes]) -> Optional[dict[str, Any]]:
    """Decode a JSON object of query parameters, keeping whole numbers as ints."""
    try:
        decoded = json.loads(
            data,
            parse_int=Decimal,
            parse_float=Decimal,
            parse_constant=_reject_constant,
        )
    except json.JSONDecodeError as exc:
        raise ArgumentError(str(exc)) from exc
    if decoded is None:
        return None
    if not isinstance(decoded, dict):
        raise ArgumentError("params must be a JSON object")
    return convert_numbers(decoded)


def _to_json_value(value: Any) -> Any:
    """Normalise a Python value to what a JSON encode/decode round trip yields."""
    if value is None or isinstance(value, (bool, str, Decimal)):
        return value
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ArgumentError(f"unsupported float value: {value!r}")
        if value.is_integer() and abs(value) < _PLAIN_FLOAT_LIMIT:
            return Decimal(int(value))
        return Decimal(repr(value))
    if isinstance(value, Mapping):
        result = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise ArgumentError(f"unsupported object key: {key!r}")
            result[key] = _to_json_value(item)
        return result
    if isinstance(value, (list, tuple)):
        return [_to_json_value(item) for item in value]
    raise ArgumentError(f"unsupported argument type: {type(value).__name__}")


def bind_arguments(arguments: Any) -> CypherInput:
    """Bind raw tool arguments to a CypherInput.

    A missing or null query gives an empty query; missing or null params give
    None. Field names match case-insensitively and unknown fields are ignored.
    """
    if arguments is None:
        return CypherInput()
    if not isinstance(arguments, Mapping):
        raise ArgumentError(
            f"arguments must be an object, not {type(arguments).__name__}"
        )
    normalised = _to_json_value(arguments)

    bound = CypherInput()
    for key, value in normalised.items():
        name = key.lower()
        if name == "query":
            if value is None:
                continue
            if not isinstance(value, str):
                raise ArgumentError("query must be a string")
            bound.query = value
        elif name == "params":
            if value is None:
                bound.params = None
            elif isinstance(value, dict):
                bound.params = convert_numbers(value)
            else:
                raise ArgumentError("params must be an object")
    return bound


def cypher_input_schema() -> dict[str, Any]:
    """Return the JSON schema of the read-cypher and write-cypher inputs."""
    return {
        "type": "object",
        "properties": {
            "query": {
                "type": "string",
                "description": "The Cypher query to execute",
                "default": "MATCH(n) RETURN n",
            },
            "params": {
                "type": "object",
                "description": "Parameters to pass to the Cypher query",
                "default": {},
            },
        },
        "required": ["query"],
    }