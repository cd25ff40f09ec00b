"""
Entry point of the transformation pipeline.

Combines the parsed conditions, the display queries and the measurement series
of each metric into a single display-ready record.
"""

import math
from datetime import datetime
from typing import Dict, List, Optional

from rollscope._core.logging import get_logger
from rollscope.analysis.conditions import parse_condition
from rollscope.analysis.numbers import format_thresholds, round_number
from rollscope.analysis.queries import format_queries
from rollscope.analysis.series import aggregate_series
from rollscope.analysis.status import (
    adjusted_metric_phase,
    metric_status_label,
    metric_substatus,
)
from rollscope.schema import (
    AnalysisPhase,
    AnalysisRun,
    AnalysisRunSpec,
    AnalysisRunStatus,
    Argument,
    Metric,
    MetricResult,
    TransformedMetric,
    TransformedMetricSpec,
    TransformedMetricStatus,
    fields_of,
)

logger = get_logger(__name__)

CHART_HEADROOM = 1.2


def chart_axis_max(
    value_max: float,
    fail_thresholds: Optional[List[float]],
    success_thresholds: Optional[List[float]],
) -> float:
    """
    Upper bound of a metric chart.

    120% of the largest plotted value or threshold, or 1 when every value is
    below 1 and there are no thresholds.
    """
    if value_max < 1 and not fail_thresholds and not success_thresholds:
        return 1
    fail_max = max(fail_thresholds) if fail_thresholds else -math.inf
    success_max = max(success_thresholds) if success_thresholds else -math.inf
    return round_number(max(value_max, fail_max, success_max) * CHART_HEADROOM)


def analysis_end_time(metric_results: List[MetricResult]) -> Optional[datetime]:
    """Latest finish time over every measurement, ``None`` when nothing finished."""
    finished = [
        measurement.finished_at
        for result in metric_results
        for measurement in result.measurements
        if measurement.finished_at is not None
    ]
    return max(finished) if finished else None


def _transform_metric(
    name: str, metric: Metric, result: MetricResult, args: List[Argument]
) -> TransformedMetric:
    fail_info = parse_condition(metric.failure_condition, args, metric.provider)
    success_info = parse_condition(metric.success_condition, args, metric.provider)
    fail_thresholds = format_thresholds(fail_info.thresholds) or None
    success_thresholds = format_thresholds(success_info.thresholds) or None

    # keys pick values out of array and object shaped measurements
    condition_keys = list(
        dict.fromkeys(fail_info.condition_keys + success_info.condition_keys)
    )
    series = aggregate_series(condition_keys, result.measurements)

    phase = result.phase or AnalysisPhase.UNKNOWN
    counts = (result.failed, result.error, result.inconclusive)
    logger.debug(
        f'Metric {name}: {len(series.measurements)} measurements, '
        f'chartable={series.chartable}, keys={condition_keys}'
    )

    return TransformedMetric(
        name=name,
        spec=TransformedMetricSpec(
            **fields_of(metric),
            queries=format_queries(metric.provider, args),
            fail_condition_label=fail_info.label,
            fail_thresholds=fail_thresholds,
            success_condition_label=success_info.label,
            success_thresholds=success_thresholds,
            condition_keys=condition_keys,
        ),
        status=TransformedMetricStatus(
            **fields_of(result),
            adjusted_phase=adjusted_metric_phase(phase),
            status_label=metric_status_label(phase, *counts),
            substatus=metric_substatus(phase, *counts),
            transformed_measurements=series.measurements,
            chartable=series.chartable,
            chart_min=series.min,
            chart_max=chart_axis_max(
                series.max or 0, fail_thresholds, success_thresholds
            ),
        ),
    )


def compose_metrics(
    spec: Optional[AnalysisRunSpec], status: Optional[AnalysisRunStatus]
) -> Dict[str, TransformedMetric]:
    """
    Display-ready records for every metric result of an analysis run.

    Results are matched to their spec entry by name; results without one are
    skipped.

    Args:
        spec: spec of the analysis run
        status: status of the analysis run

    Returns:
        Mapping of metric name to TransformedMetric, empty when either input
        is missing.
    """
    if spec is None or status is None:
        return {}

    metrics_by_name: Dict[str, Metric] = {}
    for metric in spec.metrics:
        metrics_by_name.setdefault(metric.name, metric)

    transformed: Dict[str, TransformedMetric] = {}
    with logger.log_operation('compose analysis metrics'):
        for idx, result in enumerate(status.metric_results):
            name = result.name if result.name is not None else f'Unknown metric {idx}'
            metric = metrics_by_name.get(name)
            if metric is None:
                logger.debug(f'Skipping metric result {name}: no matching metric spec')
                continue
            transformed[name] = _transform_metric(name, metric, result, spec.args)
    return transformed


def transform_analysis_run(run: AnalysisRun) -> Dict[str, TransformedMetric]:
    """compose_metrics over a whole analysis run resource."""
    return compose_metrics(run.spec, run.status)
