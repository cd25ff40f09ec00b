"""
Numeric helpers shared by the condition parser and the value classifier.

Rounding is to two decimals, half away from zero, applied to the float
product ``value * 100``. Because that product is itself a float, inputs such
as ``5.005`` (``500.4999...`` once scaled) round down to ``5.0``.
"""

import json
import math
from typing import Any, List, Optional, Union

from rollscope.schema import DisplayValue


def is_finite_number(value: Any) -> bool:
    """
    Whether a value is a finite number.

    Ints and floats qualify when finite (booleans never do). Strings qualify
    when they hold a finite decimal number, so quoted numbers coming out of
    provider payloads are treated like their numeric form.
    """
    if value is None or isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        try:
            return math.isfinite(value)
        except OverflowError:
            return False
    if isinstance(value, str):
        text = value.strip()
        if not text or '_' in text:
            return False
        try:
            return math.isfinite(float(text))
        except ValueError:
            return False
    return False


def round_number(value: Union[int, float, str]) -> float:
    scaled = float(value) * 100
    if not math.isfinite(scaled):
        return float(value)
    # + 0.0 normalises -0.0
    return math.copysign(math.floor(abs(scaled) + 0.5), scaled) / 100 + 0.0


def format_thresholds(thresholds: List[float]) -> List[float]:
    """Thresholds rounded for display on a chart."""
    return [round_number(threshold) for threshold in thresholds]


def format_number(value: Union[int, float]) -> str:
    """Render a number the way a JSON producer would, without a trailing '.0'."""
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value) if isinstance(value, float) else str(value)


def display_string(value: Any) -> str:
    """
    Table-string form of a decoded JSON value.

    Arrays are joined with commas (nested nulls render as empty strings),
    objects are rendered as compact JSON.
    """
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, list):
        return ','.join('' if item is None else display_string(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, separators=(',', ':'), ensure_ascii=False)
    return str(value)


def formatted_value(value: Any) -> DisplayValue:
    """Rounded number for numeric values, ``None`` for null, a string otherwise."""
    if is_finite_number(value):
        return round_number(value)
    if value is None:
        return None
    return display_string(value)


def is_chartable(value: Any) -> bool:
    """A data point can be plotted when it is a finite number or a null gap."""
    return value is None or is_finite_number(value)


def parse_threshold(literal: str) -> Optional[float]:
    """Parse a condition literal into a finite threshold, ``None`` when it is not one."""
    if not is_finite_number(literal):
        return None
    return float(literal)
