"""Runtime values for the Lox interpreter.

Lox has four kinds of value: nil, booleans, numbers and strings. Booleans,
numbers and strings are represented by the host `bool`, `float` and `str`
types; nil is the `NIL` singleton of `NilVal`. Because `bool` is a subclass
of `int` in Python, every helper here checks booleans before numbers and
never lets one stand in for the other.
"""

from __future__ import annotations

import decimal
import math
from typing import Any


class NilVal:
    """Marker object for the Lox `nil` value."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'nil'


NIL = NilVal()


def is_number(value: Any) -> bool:
    return isinstance(value, float) and not isinstance(value, bool)


def is_truthy(value: Any) -> bool:
    """Only nil and false are falsy; 0 and "" are truthy."""
    if isinstance(value, NilVal):
        return False
    if isinstance(value, bool):
        return value
    return True


def values_equal(a: Any, b: Any) -> bool:
    """Structural equality; values of different kinds are never equal."""
    if isinstance(a, NilVal) or isinstance(b, NilVal):
        return isinstance(a, NilVal) and isinstance(b, NilVal)
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if type(a) is not type(b):
        return False
    return a == b


def type_name(value: Any) -> str:
    """Return the Lox type name of a runtime value."""
    if isinstance(value, NilVal):
        return 'nil'
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, float):
        return 'number'
    if isinstance(value, str):
        return 'string'
    return type(value).__name__


def format_number(value: float) -> str:
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'inf' if value > 0 else '-inf'
    if value == 0 and math.copysign(1.0, value) < 0:
        return '-0'
    if value.is_integer():
        return str(int(value))
    # Shortest round-tripping digits, written out positionally
    return format(decimal.Decimal(repr(value)), 'f')


def to_string(value: Any) -> str:
    """Convert a Lox value to the text `print` writes."""
    if isinstance(value, NilVal):
        return 'nil'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        return format_number(value)
    if isinstance(value, str):
        return value
    return str(value)
