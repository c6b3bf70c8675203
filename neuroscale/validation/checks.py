"""Validation checks for response sets.

A response set is complete when every item of the scale has a present
response; keys that name no item of the scale are reported separately.
"""

from collections.abc import Mapping
from typing import Any

from neuroscale.registry.models import ScaleDefinition


def find_missing_items(
    scale: ScaleDefinition,
    responses: Mapping[str, Any],
) -> list[str]:
    """List item ids without a present response, in catalog order.

    A response is missing when the key is absent or the value is None or an
    empty string.
    """
    missing: list[str] = []
    for item_id in scale.item_ids:
        value = responses.get(item_id)
        if value is None or value == "":
            missing.append(item_id)
    return missing


def find_unknown_items(
    scale: ScaleDefinition,
    responses: Mapping[str, Any],
) -> list[str]:
    """List response keys that are not items of the scale."""
    known = set(scale.item_ids)
    return [key for key in responses if key not in known]
