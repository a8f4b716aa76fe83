"""Placeholder expansion.

Sequence placeholders are expanded once per bulk instance:

    {#}   -> 1, 2, 3, ...
    {A}   -> A, B, ..., Z, AA, AB, ...
    {a}   -> a, b, ..., z, aa, ab, ...

Ancestor placeholders ``{P0}``, ``{P1}``, ... refer to the record at that
nesting layer (0 = root) and are left untouched here; the graph builder
resolves them against the ancestor chain. Any other ``{...}`` token is kept
literal unless strict mode is requested.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any

from row_seed.core.exceptions import InvalidCountError, PlaceholderError

# Any brace-delimited token without nested braces
_TOKEN_PATTERN = re.compile(r"\{([^{}]*)\}")

_ANCESTOR_TOKEN = re.compile(r"P(\d+)")
_ANCESTOR_PATTERN = re.compile(r"\{P(\d+)\}")


def alpha_label(n: int) -> str:
    """Return the 1-based alphabetic label of *n* (1 -> A, 27 -> AA)."""
    if n < 1:
        raise ValueError(f"Alphabetic labels start at 1, got {n}")
    label = ""
    while n > 0:
        n, remainder = divmod(n - 1, 26)
        label = chr(ord("A") + remainder) + label
    return label


def expand_one(template: str, index: int, *, strict: bool = False) -> str:
    """Expand the sequence placeholders of *template* for a 0-based *index*.

    Raises:
        PlaceholderError: In strict mode, if the template holds an unknown token.
    """

    def _replace(match: re.Match[str]) -> str:
        token = match.group(1)
        if token == "#":
            return str(index + 1)
        if token == "A":
            return alpha_label(index + 1)
        if token == "a":
            return alpha_label(index + 1).lower()
        if _ANCESTOR_TOKEN.fullmatch(token) or not strict:
            return match.group(0)
        raise PlaceholderError(f"Unknown placeholder '{match.group(0)}' in '{template}'")

    return _TOKEN_PATTERN.sub(_replace, template)


def expand(template: str, count: int, *, strict: bool = False) -> list[str]:
    """Produce one concrete string per instance index in ``[0, count)``.

    Args:
        template: String that may contain sequence placeholders.
        count: Number of instances. Zero yields an empty list.
        strict: Reject unknown ``{...}`` tokens instead of keeping them.

    Raises:
        InvalidCountError: If *count* is negative.
        PlaceholderError: In strict mode, for unknown tokens.
    """
    if count < 0:
        raise InvalidCountError(count)
    return [expand_one(template, i, strict=strict) for i in range(count)]


def expand_value(value: Any, count: int, *, strict: bool = False) -> list[Any]:
    """Expand a field value; non-string values are repeated unchanged."""
    if isinstance(value, str):
        return expand(value, count, strict=strict)
    if count < 0:
        raise InvalidCountError(count)
    return [value] * count


def is_ancestor_placeholder(text: str) -> int | None:
    """Return the layer if *text* is exactly one ancestor placeholder."""
    match = _ANCESTOR_PATTERN.fullmatch(text)
    if match is None:
        return None
    return int(match.group(1))


def ancestor_layers(text: str) -> list[int]:
    """List the distinct ancestor layers referenced in *text*, in order of appearance."""
    layers: list[int] = []
    for match in _ANCESTOR_PATTERN.finditer(text):
        layer = int(match.group(1))
        if layer not in layers:
            layers.append(layer)
    return layers


def substitute_ancestors(text: str, resolve: Callable[[int], str]) -> str:
    """Replace every ``{Px}`` in *text* with ``resolve(x)``."""
    return _ANCESTOR_PATTERN.sub(lambda m: resolve(int(m.group(1))), text)
