"""
Folding classified measurement values over a metric's measurement history.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from rollscope._core.error import MeasurementDecodeError
from rollscope._core.logging import get_logger
from rollscope.analysis.numbers import is_finite_number
from rollscope.analysis.values import MeasurementValueInfo, NotChartable, classify_value
from rollscope.schema import Measurement, TransformedMeasurement, fields_of

logger = get_logger(__name__)


@dataclass(frozen=True)
class MeasurementSetInfo:
    """
    Attributes:
        chartable: whether every measurement in the series can be plotted
        min: lowest plotted numeric value, never above 0
        max: highest plotted numeric value, ``None`` when nothing numeric was plotted
        measurements: every measurement with its chart and table values
    """

    chartable: bool = False
    min: float = 0
    max: Optional[float] = None
    measurements: List[TransformedMeasurement] = field(default_factory=list)


def _classify_measurement(
    condition_keys: List[str], measurement: Measurement
) -> MeasurementValueInfo:
    try:
        return classify_value(condition_keys, measurement.value)
    except MeasurementDecodeError as e:
        logger.warning(f'Showing undecodable measurement value as text: {e.message}')
        return NotChartable(table_value=measurement.value)


def aggregate_series(
    condition_keys: List[str], measurements: Optional[List[Measurement]] = None
) -> MeasurementSetInfo:
    """
    Classify each measurement in order and track chartability and bounds.

    Bounds start at ``min=0, max=None`` and only move for measurements that
    are chartable and whose chart value is a plain number.

    Args:
        condition_keys: extraction keys implied by the metric's conditions
        measurements: measurement history in the order it was recorded

    Returns:
        MeasurementSetInfo; an empty history is not chartable.
    """
    if not measurements:
        return MeasurementSetInfo()

    chartable = True
    low: float = 0
    high: Optional[float] = None
    transformed: List[TransformedMeasurement] = []

    for measurement in measurements:
        info = _classify_measurement(condition_keys, measurement)
        chartable = chartable and info.can_chart

        if info.can_chart and is_finite_number(info.chart_value):
            value = float(info.chart_value)
            low = min(low, value)
            high = max(high if high is not None else 0, value)

        transformed.append(
            TransformedMeasurement(
                **fields_of(measurement),
                chart_value=info.chart_value,
                table_value=info.table_value,
            )
        )

    return MeasurementSetInfo(
        chartable=chartable, min=low, max=high, measurements=transformed
    )
