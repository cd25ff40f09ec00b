from rollscope.analysis.compose import (
    analysis_end_time,
    chart_axis_max,
    compose_metrics,
    transform_analysis_run,
)
from rollscope.analysis.conditions import (
    PROVIDER_CONDITION_SUPPORT,
    AccessorSupport,
    ConditionInfo,
    parse_condition,
)
from rollscope.analysis.numbers import (
    display_string,
    format_thresholds,
    is_finite_number,
    round_number,
)
from rollscope.analysis.queries import (
    arg_value,
    format_queries,
    interpolate_query,
    metric_provider_name,
    printable_cloudwatch_query,
    printable_datadog_query,
)
from rollscope.analysis.series import MeasurementSetInfo, aggregate_series
from rollscope.analysis.status import (
    adjusted_metric_phase,
    analysis_status_label,
    analysis_substatus,
    metric_status_label,
    metric_substatus,
)
from rollscope.analysis.values import (
    Chartable,
    MeasurementValueInfo,
    NotChartable,
    classify_value,
)

__all__ = [
    'AccessorSupport',
    'Chartable',
    'ConditionInfo',
    'MeasurementSetInfo',
    'MeasurementValueInfo',
    'NotChartable',
    'PROVIDER_CONDITION_SUPPORT',
    'adjusted_metric_phase',
    'aggregate_series',
    'analysis_end_time',
    'analysis_status_label',
    'analysis_substatus',
    'arg_value',
    'chart_axis_max',
    'classify_value',
    'compose_metrics',
    'display_string',
    'format_queries',
    'format_thresholds',
    'interpolate_query',
    'is_finite_number',
    'metric_provider_name',
    'metric_status_label',
    'metric_substatus',
    'parse_condition',
    'printable_cloudwatch_query',
    'printable_datadog_query',
    'round_number',
    'transform_analysis_run',
]
