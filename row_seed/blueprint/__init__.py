"""Blueprint layer - immutable record declarations and placeholder expansion."""

from __future__ import annotations

from row_seed.blueprint.model import Blueprint, UseRef, blueprint
from row_seed.blueprint.placeholder import alpha_label, expand, expand_value

__all__ = [
    "Blueprint",
    "UseRef",
    "blueprint",
    "expand",
    "expand_value",
    "alpha_label",
]
