"""Infer sample values from inline field shapes.

Routes without a registered factory may describe their input inline with
``fields``, a mapping of field name to type spec. A type spec is one of:

* a type name -- ``"string"``, ``"integer"``, ``"email"``, ...
* a pipe-separated rule string -- ``"required|email|max:255"``; the first
  recognised type token wins;
* a schema dict -- ``{"type": "array", "items": "integer"}``,
  ``{"type": "object", "properties": {...}}``, optionally with ``example``
  or ``enum``.

Values are deterministic so that regenerated collections diff cleanly.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_SAMPLES: dict[str, Any] = {
    "string": "string",
    "text": "Lorem ipsum dolor sit amet.",
    "integer": 1,
    "int": 1,
    "numeric": 1,
    "number": 1.5,
    "float": 1.5,
    "boolean": True,
    "bool": True,
    "email": "user@example.com",
    "url": "https://example.com",
    "uuid": "3fa85f64-5717-4562-b3fc-2c963f66afa6",
    "date": "2024-01-01",
    "datetime": "2024-01-01T00:00:00Z",
    "date-time": "2024-01-01T00:00:00Z",
    "password": "secret",
    "phone": "+10000000000",
    "file": "",
}


def infer_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Return a sample value for every field in *fields*, preserving order.

    Example::

        >>> infer_fields({"email": "required|email", "age": "integer"})
        {'email': 'user@example.com', 'age': 1}
    """
    return {name: sample_value(spec) for name, spec in fields.items()}


def sample_value(spec: Any) -> Any:
    """Return the sample value for one type spec."""
    if isinstance(spec, Mapping):
        return _sample_from_schema(spec)
    if isinstance(spec, str):
        return _sample_from_rules(spec)
    # Literal values (numbers, lists) are used as their own example.
    return spec


def _sample_from_schema(schema: Mapping[str, Any]) -> Any:
    if "example" in schema:
        return schema["example"]
    if schema.get("enum"):
        return schema["enum"][0]

    kind = str(schema.get("format") or schema.get("type") or "string").lower()
    if kind in ("array", "list"):
        items = schema.get("items")
        return [sample_value(items)] if items is not None else []
    if kind in ("object", "dict"):
        return infer_fields(schema.get("properties", {}))
    if schema.get("type") and kind not in _SAMPLES:
        kind = str(schema["type"]).lower()
    return _SAMPLES.get(kind, _SAMPLES["string"])


def _sample_from_rules(rules: str) -> Any:
    for token in rules.split("|"):
        name = token.split(":", 1)[0].strip().lower()
        if name in ("array", "list"):
            return []
        if name in ("object", "dict"):
            return {}
        if name in _SAMPLES:
            return _SAMPLES[name]
    return _SAMPLES["string"]
