"""Runtime value helpers for Basil.

Basil has exactly three kinds of runtime value and they are represented
directly by Python types:

* ``str``   -- text
* ``float`` -- number (every number is a double)
* ``bool``  -- boolean

``int`` never appears at runtime. Since ``bool`` is a subclass of ``int``
but not of ``float``, ``isinstance(value, float)`` is a safe number test.
"""

from __future__ import annotations

import math
import re
from typing import Union

Value = Union[str, float, bool]

# Text TONUM accepts: plain decimal with an optional exponent.
NUMBER_TEXT = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


def type_name(value: Value) -> str:
    """Name of the value's type as used in error messages."""
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, float):
        return 'number'
    if isinstance(value, str):
        return 'string'
    raise TypeError(f"not a Basil value: {value!r}")


def stringify(value: Value) -> str:
    """Convert a runtime value to the text PRINT and TOSTR produce.

    Whole numbers are written without decimals, other numbers with
    exactly two. Booleans are written as TRUE / FALSE.
    """
    if isinstance(value, bool):
        return 'TRUE' if value else 'FALSE'
    if isinstance(value, float):
        if value.is_integer():
            return f"{value:.0f}"
        return f"{value:.2f}"
    if isinstance(value, str):
        return value
    raise TypeError(f"not a Basil value: {value!r}")


def to_number(value: Value) -> float:
    """Convert a value the way TONUM does.

    Raises ``ValueError`` when text does not hold a finite number.
    """
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, float):
        return value
    text = value.strip()
    if not NUMBER_TEXT.fullmatch(text):
        raise ValueError(f"not a number: {value!r}")
    number = float(text)
    if not math.isfinite(number):
        raise ValueError(f"number out of range: {value!r}")
    return number


def coerce_literal(value) -> Value:
    """Normalise a Python literal (e.g. loaded from JSON) into a runtime value."""
    if isinstance(value, (bool, str, float)):
        return value
    if isinstance(value, int):
        return float(value)
    raise TypeError(f"cannot use {type(value).__name__} as a Basil value")
