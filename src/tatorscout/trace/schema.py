"""JSON Schema validation for trace wire payloads.

Three tagged payload shapes are accepted:

    {"state": "compressed", "trace": "<encoded string>"}
    {"state": "parsed",     "trace": [[index, x, y, action|0], ...]}
    {"state": "expanded",   "trace": [[index, x, y, action|0], ...]}

Each state tag has its own schema; the envelope is checked first and the
tag then selects the payload validator.
"""

from __future__ import annotations

import math
from functools import lru_cache
from typing import Any, Callable

import jsonschema
from jsonschema import Draft7Validator

from ..errors import ValidationError
from ..grid import DEFAULT_GRID, FixedPointGrid

STATES = ("compressed", "parsed", "expanded")

ENVELOPE_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "TracePayload",
    "type": "object",
    "required": ["state", "trace"],
    "properties": {
        "state": {"enum": list(STATES)},
        "trace": {},
    },
}

ACTION_SCHEMA: dict[str, Any] = {
    "oneOf": [
        {
            "type": "string",
            "minLength": 1,
            "not": {"anyOf": [{"const": "0"}, {"pattern": "[;\\s]"}]},
        },
        {"const": 0},
    ]
}


def point_schema(grid_size: int) -> dict[str, Any]:
    """Schema for one [index, x, y, action|0] tuple on a grid of ``grid_size``."""
    return {
        "type": "array",
        "minItems": 4,
        "maxItems": 4,
        "items": [
            {"type": "integer", "minimum": 0, "maximum": grid_size - 1},
            {"type": "number", "minimum": 0, "maximum": 1},
            {"type": "number", "minimum": 0, "maximum": 1},
            ACTION_SCHEMA,
        ],
    }


def _compressed_schema(grid_size: int) -> dict[str, Any]:
    return {"type": "string", "minLength": 1}


def _parsed_schema(grid_size: int) -> dict[str, Any]:
    return {"type": "array", "minItems": 1, "items": point_schema(grid_size)}


def _expanded_schema(grid_size: int) -> dict[str, Any]:
    return {
        "type": "array",
        "minItems": grid_size,
        "maxItems": grid_size,
        "items": point_schema(grid_size),
    }


# One schema builder per state tag
PAYLOAD_SCHEMAS: dict[str, Callable[[int], dict[str, Any]]] = {
    "compressed": _compressed_schema,
    "parsed": _parsed_schema,
    "expanded": _expanded_schema,
}


@lru_cache(maxsize=None)
def _envelope_validator() -> Draft7Validator:
    return Draft7Validator(ENVELOPE_SCHEMA)


@lru_cache(maxsize=32)
def _payload_validator(state: str, grid_size: int) -> Draft7Validator:
    return Draft7Validator(PAYLOAD_SCHEMAS[state](grid_size))


def _format_path(root: str, error: jsonschema.ValidationError) -> str:
    parts = [root]
    for part in error.absolute_path:
        if isinstance(part, int):
            parts.append(f"[{part}]")
        else:
            parts.append(f".{part}")
    return "".join(parts)


def _format_validation_error(
    error: jsonschema.ValidationError, root: str
) -> ValidationError:
    """Turn a jsonschema error into a ValidationError naming field and expectation.

    Args:
        error: The validation error from jsonschema.
        root: Name of the validated value, used as the path prefix.

    Returns:
        ValidationError with path, expected and got filled in.
    """
    path = _format_path(root, error)
    validator = error.validator
    got = error.instance

    if validator == "required":
        missing = error.message.split("'")[1::2]
        return ValidationError(
            f"missing required field(s): {', '.join(missing)}",
            path,
            expected=list(error.validator_value),
        )

    if validator == "enum":
        allowed = list(error.validator_value)
        return ValidationError(
            f"invalid value, allowed values: {allowed}", path, allowed, got
        )

    if validator == "type":
        expected_type = error.validator_value
        return ValidationError(
            f"expected {expected_type}, got {type(got).__name__}",
            path,
            expected_type,
            got,
        )

    if validator in ("minimum", "maximum"):
        op = ">=" if validator == "minimum" else "<="
        return ValidationError(
            f"value must be {op} {error.validator_value}, got {got}",
            path,
            f"{op} {error.validator_value}",
            got,
        )

    if validator in ("minItems", "maxItems"):
        if isinstance(error.schema.get("items"), list):
            expected = "[index, x, y, action|0]"
            reason = f"expected a 4-element point {expected}, got {len(got)} elements"
        else:
            bound = "at least" if validator == "minItems" else "at most"
            expected = f"{bound} {error.validator_value} items"
            reason = f"expected {expected}, got {len(got)}"
        return ValidationError(reason, path, expected, len(got))

    if validator == "minLength":
        return ValidationError("value must not be empty", path, "non-empty", got)

    if validator in ("oneOf", "not", "pattern", "const"):
        return ValidationError(
            "action must be a non-empty code without ';' or whitespace (not \"0\") "
            "or the number 0",
            path,
            "action code or 0",
            got,
        )

    return ValidationError(error.message, path, got=got)


def _raise_first_error(validator: Draft7Validator, obj: Any, root: str) -> None:
    error = jsonschema.exceptions.best_match(validator.iter_errors(obj))
    if error is not None:
        raise _format_validation_error(error, root)


def validate_envelope(obj: Any) -> tuple[str, Any]:
    """Validate the tagged wrapper and return (state, payload).

    Raises:
        ValidationError: If obj is not an object with a known state and a trace
    """
    _raise_first_error(_envelope_validator(), obj, "payload")
    return obj["state"], obj["trace"]


def validate_payload(
    state: str, payload: Any, grid: FixedPointGrid = DEFAULT_GRID
) -> Any:
    """Validate a payload against the schema selected by its state tag.

    Raises:
        ValidationError: If the payload does not match the state's schema
    """
    if state not in PAYLOAD_SCHEMAS:
        raise ValidationError(
            f"unknown state {state!r}", "payload.state", list(STATES), state
        )
    _raise_first_error(_payload_validator(state, grid.size), payload, "trace")
    if state != "compressed":
        _check_finite(payload)
    return payload


def validate_points(raw: Any, grid: FixedPointGrid = DEFAULT_GRID) -> list:
    """Validate a bare sparse point array."""
    return validate_payload("parsed", raw, grid)


def _check_finite(raw_points: list) -> None:
    for i, raw in enumerate(raw_points):
        for field_index in (1, 2):
            if not math.isfinite(raw[field_index]):
                raise ValidationError(
                    "coordinate must be a finite number",
                    f"trace[{i}][{field_index}]",
                    "0 <= value <= 1",
                    raw[field_index],
                )
