"""Helpers shared by every template — field ordering, naming, units, overlay."""

import copy
import re

from kubetpl.pacts.types import MissingFieldError, UnitParseError

# Binary suffixes are checked first: "Ei" must not match the decimal "E"
_BINARY_SUFFIXES = {
    "Ki": 2 ** 10, "Mi": 2 ** 20, "Gi": 2 ** 30,
    "Ti": 2 ** 40, "Pi": 2 ** 50, "Ei": 2 ** 60,
}
_DECIMAL_SUFFIXES = {
    "K": 10 ** 3, "M": 10 ** 6, "G": 10 ** 9,
    "T": 10 ** 12, "P": 10 ** 15, "E": 10 ** 18,
}

_QUANTITY_RE = re.compile(r'^([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)([A-Za-z]*)$')


def is_hidden(key: str) -> bool:
    """Convenience fields (trailing underscore) are never serialised."""
    return key.endswith("_")


def object_items(mapping: dict) -> list[tuple]:
    """Return (key, value) pairs in insertion order, skipping hidden fields."""
    return [(k, v) for k, v in mapping.items() if not is_hidden(k)]


def object_values(mapping: dict) -> list:
    """Return values in insertion order, skipping hidden fields."""
    return [v for _, v in object_items(mapping)]


def hyphenate(s: str) -> str:
    """Turn an identifier-safe key into a DNS-label-safe name."""
    return s.replace("_", "-")


def map_to_named_list(mapping: dict | None) -> list[dict]:
    """Expand ``{key: partial}`` into ``[{"name": key, **partial}]``.

    Kubernetes models many fields as arrays of named objects; keyed mappings
    are easier to overlay, so templates take those and expand them here.
    """
    return [{"name": hyphenate(k), **(v or {})} for k, v in object_items(mapping or {})]


def to_string(value) -> str:
    """Render a scalar the way it appears in a manifest string field."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _parse_number(text: str) -> int | float:
    """Parse a mantissa as int when possible, float otherwise."""
    try:
        return int(text)
    except ValueError:
        return float(text)


def si_to_num(quantity: str | int | float) -> int | float:
    """Convert a quantity like ``500m``, ``2Ki`` or ``3G`` to a plain number.

    Raises UnitParseError on an unknown suffix or a missing mantissa.

    Examples:
        >>> si_to_num("500m")
        0.5
        >>> si_to_num("2Ki")
        2048
        >>> si_to_num("3G")
        3000000000
    """
    if isinstance(quantity, (int, float)) and not isinstance(quantity, bool):
        return quantity
    text = str(quantity).strip()
    match = _QUANTITY_RE.match(text)
    if not match:
        raise UnitParseError(f"Unknown numerical suffix in {quantity!r}")
    mantissa, suffix = match.group(1), match.group(2)
    number = _parse_number(mantissa)
    if not suffix:
        return number
    if suffix == "m":
        return number / 1000
    if suffix in _BINARY_SUFFIXES:
        return number * _BINARY_SUFFIXES[suffix]
    if suffix in _DECIMAL_SUFFIXES:
        return number * _DECIMAL_SUFFIXES[suffix]
    raise UnitParseError(f"Unknown numerical suffix in {quantity!r}")


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base. None values delete keys."""
    for key, val in overrides.items():
        if val is None:
            base.pop(key, None)
        elif isinstance(val, dict):
            if not isinstance(base.get(key), dict):
                base[key] = {}
            _deep_merge(base[key], val)
        else:
            base[key] = copy.deepcopy(val)


def overlay(base: dict, *patches: dict | None) -> dict:
    """Return a new document with each patch deep-merged onto base, in order.

    Mappings merge key by key; lists and scalars from a later patch replace
    earlier values; a None value removes the key. Neither base nor the
    patches are modified.
    """
    result = copy.deepcopy(base)
    for patch in patches:
        if patch:
            _deep_merge(result, patch)
    return result


def require(value, template: str, field: str):
    """Return value, or raise MissingFieldError when it is unset or empty."""
    if value is None or value == "":
        raise MissingFieldError(template, field)
    return value
