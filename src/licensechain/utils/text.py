"""String helpers: HTML-escaping user input, case conversion, slugs."""

from __future__ import annotations

import html
import re
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")

_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")
_DASH_RUNS = re.compile(r"-+")


def sanitize_input(text: str) -> str:
    """Escape ``& < > " '`` so the value is safe to embed in HTML."""
    if not text:
        return text
    return html.escape(text, quote=True)


def capitalize_first(text: str) -> str:
    """Upper-case the first character and lower-case the rest."""
    if not text:
        return text
    return text[0].upper() + text[1:].lower()


def to_snake_case(text: str) -> str:
    """Convert camelCase or PascalCase to snake_case."""
    if not text:
        return text
    return _CAMEL_BOUNDARY.sub(r"\1_\2", text).lower()


def to_pascal_case(text: str) -> str:
    """Convert snake_case to PascalCase."""
    if not text:
        return text
    return "".join(capitalize_first(part) for part in text.split("_"))


def truncate_string(text: str, max_length: int) -> str:
    """Shorten ``text`` to ``max_length`` characters, ending with "..." when cut.

    Raises:
        ValueError: If max_length is below 3 and truncation is needed.
    """
    if len(text) <= max_length:
        return text
    if max_length < 3:
        raise ValueError(f"max_length must be >= 3 to truncate, got {max_length}")
    return text[: max_length - 3] + "..."


def slugify(text: str) -> str:
    if not text:
        return text
    slug = text.lower().replace(" ", "-").replace("_", "-")
    return _DASH_RUNS.sub("-", slug).strip("-")


def chunk_list(items: Sequence[T], chunk_size: int) -> list[list[T]]:
    """Split ``items`` into consecutive chunks of at most ``chunk_size``.

    Raises:
        ValueError: If chunk_size is not positive.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    return [list(items[i : i + chunk_size]) for i in range(0, len(items), chunk_size)]
