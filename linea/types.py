"""Runtime value helpers for Linea.

Linea values are plain Python objects: ``int`` and ``float`` numbers,
``str`` strings, ``bool`` comparison results and ``None`` for a call that
returned nothing. This module names those types for error messages and
renders them for output.
"""

from __future__ import annotations

import math
import sys
from typing import Any

# ints and floats share the float range
MAX_NUMBER = sys.float_info.max


def is_number(value: Any) -> bool:
    # bool is an int subclass but is not a Linea number
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def in_number_range(value: Any) -> bool:
    if isinstance(value, float):
        return not math.isinf(value)
    return abs(value) <= MAX_NUMBER


def type_name(value: Any) -> str:
    if value is None:
        return 'None'
    if isinstance(value, bool):
        return 'Bool'
    if is_number(value):
        return 'Number'
    if isinstance(value, str):
        return 'Str'
    return type(value).__name__


def format_number(value: Any) -> str:
    """Render a number, dropping the fraction of integral floats (``4.0`` -> ``4``)."""
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def to_string(value: Any) -> str:
    if value is None:
        return 'None'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if is_number(value):
        return format_number(value)
    return str(value)
