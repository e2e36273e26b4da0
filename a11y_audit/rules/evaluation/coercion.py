"""
Value coercion for rule evaluation.

Runtime values are plain Python objects: str, int, float, bool, None, or
whatever a context returns from get_property. These helpers implement the
language's conversion rules in one place:

- to_number: numbers pass through, numeric strings are parsed, else None
- to_bool: the `as bool` rules (also the equality fallback)
- stringify: canonical text form used by ~=, contains, matches, `as string`
- cast_value: the `prop(...) as <type>` suffix

bool is never a number here, even though Python makes it an int subclass.
"""

from __future__ import annotations

import math
import re
from typing import Any, Mapping

from ..dsl_nodes import CastType
from ..errors import RuleRuntimeError


Number = int | float

# Decimal or scientific; surrounding whitespace already stripped
_DECIMAL_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")
_HEX_RE = re.compile(r"^[+-]?0[xX][0-9a-fA-F]+$")


def is_number(value: Any) -> bool:
    """True for int/float values that are not bools."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_number(text: str) -> Number | None:
    """
    Parse a numeric string.

    Accepts optional surrounding whitespace, an optional sign, decimal and
    scientific notation, and 0x-prefixed hex integers. Integers without a
    fraction or exponent stay int. NaN and infinities are rejected. Integers
    past the int digit limit are read as floats, so huge ones are rejected
    as infinite.

    Returns:
        The number, or None if the text is not numeric.
    """
    s = text.strip()
    if _HEX_RE.match(s):
        return int(s, 16)
    if not _DECIMAL_RE.match(s):
        return None
    if "." not in s and "e" not in s and "E" not in s:
        try:
            return int(s)
        except ValueError:
            # Past the interpreter's int digit limit; read as float below
            pass
    value = float(s)
    if math.isinf(value):
        return None
    return value


def to_number(value: Any) -> Number | None:
    """
    Coerce a runtime value to a number.

    Returns:
        int/float for numbers and numeric strings, None otherwise.
    """
    if is_number(value):
        return value
    if isinstance(value, str):
        return parse_number(value)
    return None


def to_bool(value: Any) -> bool | None:
    """
    Coerce a runtime value to a bool.

    - bool: unchanged
    - str: "true" / "false" (case-insensitive, trimmed); anything else None
    - number: nonzero
    - other (including None): None
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        s = value.strip().lower()
        if s == "true":
            return True
        if s == "false":
            return False
        return None
    if is_number(value):
        return value != 0
    return None


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return repr(value)


def stringify(value: Any) -> str:
    """
    Canonical string form of a runtime value.

    None -> "null", bools -> "true"/"false", floats keep their fractional
    part ("3.0"), sequences and mappings render their items recursively.

    Raises:
        RuleRuntimeError: For an int past the interpreter's digit limit.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(stringify(v) for v in value) + "]"
    if isinstance(value, Mapping):
        items = ", ".join(f"{stringify(k)}: {stringify(v)}" for k, v in value.items())
        return "{" + items + "}"
    if isinstance(value, int):
        try:
            return str(value)
        except ValueError as e:
            raise RuleRuntimeError(f"Integer too large to convert to text: {e}") from e
    return str(value)


def _to_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return 1 if value else 0
    number = to_number(value)
    if number is None:
        return None
    if isinstance(number, float):
        if math.isnan(number) or math.isinf(number):
            return None
        return int(number)
    return number


def cast_value(value: Any, as_type: str | None) -> Any:
    """
    Apply a `prop(...) as <type>` cast.

    A None input stays None for every cast. With no cast the value is
    returned unchanged.

    Args:
        value: Raw property value.
        as_type: "int", "string", "bool" or None.

    Returns:
        Cast value, or None when the value cannot be cast.
    """
    if value is None or as_type is None:
        return value
    if as_type == CastType.INT:
        return _to_int(value)
    if as_type == CastType.STRING:
        return stringify(value)
    if as_type == CastType.BOOL:
        return to_bool(value)
    raise ValueError(f"Unknown cast type: {as_type}")


__all__ = [
    "Number",
    "is_number",
    "parse_number",
    "to_number",
    "to_bool",
    "stringify",
    "cast_value",
]
