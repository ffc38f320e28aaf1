"""Metadata values attached to licenses, users and products.

Metadata is a closed recursive JSON value:

    str | int | float | bool | None | list[value] | dict[str, value]

Every helper here is total over exactly that set. Anything else (bytes,
datetimes, custom objects, non-string keys, NaN or infinite floats) is
rejected with ValidationError rather than passed through.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Final

from pydantic import JsonValue

from licensechain.errors import ValidationError
from licensechain.utils.text import sanitize_input

Metadata = dict[str, JsonValue]

DEFAULT_SEPARATOR: Final[str] = "."


def _sanitize_value(value: Any, path: str) -> JsonValue:
    if isinstance(value, str):
        return sanitize_input(value)
    if isinstance(value, float) and not math.isfinite(value):
        raise ValidationError(f"Metadata value at '{path}' is not a finite number: {value!r}")
    if value is None or isinstance(value, bool | int | float):
        return value
    if isinstance(value, Mapping):
        return _sanitize_mapping(value, path)
    if isinstance(value, list | tuple):
        return [_sanitize_value(item, f"{path}[{i}]") for i, item in enumerate(value)]
    raise ValidationError(
        f"Unsupported metadata value at '{path}': {type(value).__name__}"
    )


def _sanitize_mapping(mapping: Mapping[Any, Any], path: str) -> Metadata:
    result: Metadata = {}
    for key, value in mapping.items():
        if not isinstance(key, str):
            raise ValidationError(f"Metadata keys must be strings, got {key!r} at '{path}'")
        child = f"{path}.{key}" if path else key
        result[key] = _sanitize_value(value, child)
    return result


def sanitize_metadata(metadata: Mapping[str, Any]) -> Metadata:
    """HTML-escape every string in ``metadata``, at any nesting depth.

    Lists are walked element by element, including maps nested inside lists.
    Keys are left untouched. The input is not modified.

    Raises:
        ValidationError: On a non-string key or a value outside the JSON set.
    """
    return _sanitize_mapping(metadata, "")


def flatten_metadata(
    metadata: Mapping[str, JsonValue],
    separator: str = DEFAULT_SEPARATOR,
) -> dict[str, JsonValue]:
    """Flatten nested maps and lists into ``separator``-joined keys.

    List elements use their index as the key segment. Empty maps and lists are
    kept as leaf values so no key disappears.

    Example:
        >>> flatten_metadata({"a": {"b": 1}, "tags": ["x", "y"]})
        {'a.b': 1, 'tags.0': 'x', 'tags.1': 'y'}
    """
    result: dict[str, JsonValue] = {}

    def walk(value: JsonValue, prefix: str) -> None:
        if isinstance(value, dict) and value:
            for key, child in value.items():
                walk(child, f"{prefix}{separator}{key}" if prefix else key)
        elif isinstance(value, list) and value:
            for index, child in enumerate(value):
                walk(child, f"{prefix}{separator}{index}" if prefix else str(index))
        else:
            result[prefix] = value

    for key, value in metadata.items():
        walk(value, key)
    return result


def unflatten_metadata(
    flat: Mapping[str, JsonValue],
    separator: str = DEFAULT_SEPARATOR,
) -> Metadata:
    """Rebuild nested maps from ``separator``-joined keys.

    Numeric segments become map keys; lists are not reconstructed.

    Raises:
        ValidationError: If a key needs to descend into a non-map value,
            e.g. both ``a`` and ``a.b`` are present.
    """
    result: Metadata = {}
    for flat_key, value in flat.items():
        parts = flat_key.split(separator)
        current: dict[str, JsonValue] = result
        for part in parts[:-1]:
            node = current.setdefault(part, {})
            if not isinstance(node, dict):
                raise ValidationError(f"Conflicting metadata key '{flat_key}' at '{part}'")
            current = node
        leaf = parts[-1]
        if isinstance(current.get(leaf), dict) and not isinstance(value, dict):
            raise ValidationError(f"Conflicting metadata key '{flat_key}'")
        current[leaf] = value
    return result


def deep_merge(target: Mapping[str, JsonValue], source: Mapping[str, JsonValue]) -> Metadata:
    """Merge ``source`` into a copy of ``target``.

    Nested maps present on both sides are merged recursively; any other value
    in ``source`` replaces the one in ``target``. Neither input is modified.
    """
    result: Metadata = dict(target)
    for key, value in source.items():
        existing = result.get(key)
        if isinstance(existing, dict) and isinstance(value, dict):
            result[key] = deep_merge(existing, value)
        else:
            result[key] = value
    return result
