"""Validation of response sets against scale specifications."""

from neuroscale.validation.checks import find_missing_items, find_unknown_items

__all__ = [
    "find_missing_items",
    "find_unknown_items",
]
