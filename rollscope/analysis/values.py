"""
Classification of raw measurement values into chart and table forms.

Providers report a measurement as a JSON document: a number, an array, or an
object. Which part of it can be plotted depends on its shape and on the
extraction keys implied by the metric's conditions.
"""

import json
import re
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, List, Optional, Union

from rollscope._core.error import MeasurementDecodeError
from rollscope.analysis.numbers import (
    display_string,
    formatted_value,
    is_chartable,
    is_finite_number,
    round_number,
)
from rollscope.schema import ChartValue, DisplayValue, TableValue

_LEADING_INT = re.compile(r'\s*([+-]?\d+)')


@dataclass(frozen=True)
class Chartable:
    """A measurement value that can be plotted."""

    chart_value: ChartValue
    table_value: TableValue
    can_chart: ClassVar[bool] = True


@dataclass(frozen=True)
class NotChartable:
    """A measurement value that can only be shown in a table."""

    table_value: TableValue
    can_chart: ClassVar[bool] = False

    @property
    def chart_value(self) -> ChartValue:
        return None


MeasurementValueInfo = Union[Chartable, NotChartable]


def _reject_constant(name: str) -> Any:
    raise ValueError(f'{name} is not a JSON number')


def decode_value(raw_value: str) -> Any:
    """Decode a measurement value, raising MeasurementDecodeError when it is not JSON."""
    try:
        return json.loads(raw_value, parse_constant=_reject_constant)
    except ValueError as e:
        raise MeasurementDecodeError(raw_value, str(e)) from e


def _parse_index(key: str) -> Optional[int]:
    match = _LEADING_INT.match(key)
    return int(match.group(1)) if match else None


def format_single_item_array(values: List[Any], index: Optional[int]) -> MeasurementValueInfo:
    """
    Value at ``index`` of an array, keyed by that index.

    Examples: ``[4]``, ``[null]``, ``["anything else"]``.
    """
    if index is None:
        return NotChartable(table_value=display_string(values))

    key = str(index)
    if not 0 <= index < len(values):
        return NotChartable(table_value={key: None})

    item = values[index]
    if is_chartable(item):
        display_value = formatted_value(item)
        return Chartable(chart_value={key: display_value}, table_value={key: display_value})
    return NotChartable(table_value={key: display_string(item)})


def format_multi_item_array(values: List[Any]) -> MeasurementValueInfo:
    """
    Charts the first item when it is chartable; the table always shows every item.

    Examples: ``[4,6,3,5]``, ``[4,6,null,5]``, ``[4,6,"a string",5]``.
    """
    table_value = ','.join(display_string(item) for item in values)
    first = values[0] if values else None
    if values and is_chartable(first):
        return Chartable(chart_value=formatted_value(first), table_value=table_value)
    return NotChartable(table_value=table_value)


def format_key_value(values: Dict[str, Any], keys: List[str]) -> MeasurementValueInfo:
    """
    Values of an object picked by the extraction keys; missing keys map to ``None``.

    Chartable when every present value is chartable and at least one key
    resolved to a non-null value.
    """
    transformed: Dict[str, DisplayValue] = {}
    can_chart = True
    for key in keys:
        if key in values:
            transformed[key] = formatted_value(values[key])
            can_chart = can_chart and is_chartable(values[key])
        else:
            transformed[key] = None

    if can_chart and any(value is not None for value in transformed.values()):
        return Chartable(chart_value=transformed, table_value=dict(transformed))
    return NotChartable(table_value=transformed)


def classify_value(
    condition_keys: List[str], raw_value: Optional[str] = None
) -> MeasurementValueInfo:
    """
    Classify a JSON-encoded measurement value.

    Shapes are checked in order: number, array with a single extraction key,
    any other non-empty array, object with extraction keys. Everything else is
    shown as a string in the table only. A missing value is a chartable gap.

    Args:
        condition_keys: extraction keys implied by the metric's conditions
        raw_value: measurement value as reported by the provider

    Returns:
        Chartable or NotChartable

    Raises:
        MeasurementDecodeError: when ``raw_value`` is not valid JSON
    """
    if raw_value is None or raw_value == '':
        return Chartable(chart_value=None, table_value=None)

    value = decode_value(raw_value)

    if is_finite_number(value):
        rounded = round_number(value)
        return Chartable(chart_value=rounded, table_value=rounded)

    if isinstance(value, list) and value and len(condition_keys) == 1:
        return format_single_item_array(value, _parse_index(condition_keys[0]))

    if isinstance(value, list) and value:
        return format_multi_item_array(value)

    if isinstance(value, dict) and condition_keys:
        return format_key_value(value, condition_keys)

    return NotChartable(table_value=display_string(value))
