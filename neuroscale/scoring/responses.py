"""Decoding of raw responses into item response values.

Form controls deliver responses as integers, numeric strings ("3") or the
sentinel ("UN"). Option text is accepted too and must match exactly after
normalization. There is no fuzzy matching.
"""

from typing import Any

from neuroscale.exceptions import InvalidResponseError
from neuroscale.registry.models import UNSCOREABLE, ItemDefinition, ResponseValue


def _allowed_for_display(item: ItemDefinition) -> list[ResponseValue]:
    return [option.value for option in item.options]


def decode_response(scale_id: str, item: ItemDefinition, raw: Any) -> ResponseValue:
    """Decode and validate a raw response for an item.

    Args:
        scale_id: The scale being scored (for error reporting).
        item: The item specification.
        raw: The raw response value.

    Returns:
        An allowed integer point value or the UNSCOREABLE sentinel.

    Raises:
        InvalidResponseError: If the response is not an allowed value.
    """
    value: Any = None

    # bool is an int subclass; True must not count as 1 point
    if isinstance(raw, bool):
        value = None
    elif isinstance(raw, int):
        value = raw
    elif isinstance(raw, float) and raw.is_integer():
        value = int(raw)
    elif isinstance(raw, str):
        value = _decode_string(item, raw)

    if value is None or value not in item.allowed_values:
        raise InvalidResponseError(
            scale_id, item.item_id, raw, allowed_values=_allowed_for_display(item)
        )
    return value


def _decode_string(item: ItemDefinition, raw: str) -> ResponseValue | None:
    text = raw.strip()
    if text.upper() == UNSCOREABLE:
        return UNSCOREABLE

    # Plain ASCII digits only; no sign, underscores or other numerals
    if text.isascii() and text.isdigit():
        return int(text)

    normalized = text.casefold()
    for option in item.options:
        if option.text.strip().casefold() == normalized:
            return option.value
    return None
