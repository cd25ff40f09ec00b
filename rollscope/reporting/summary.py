from typing import Any, Dict, List, Optional

from rollscope._core.logging import RichLogger, get_logger
from rollscope.analysis.compose import analysis_end_time, transform_analysis_run
from rollscope.analysis.numbers import format_number
from rollscope.analysis.queries import metric_provider_name
from rollscope.analysis.status import analysis_status_label, analysis_substatus
from rollscope.schema import AnalysisRun, TransformedMetric

SUMMARY_COLUMNS = [
    'metric',
    'provider',
    'status',
    'substatus',
    'measurements',
    'chartable',
    'chart_min',
    'chart_max',
    'fail_thresholds',
    'success_thresholds',
    'queries',
]


def _join_numbers(values: Optional[List[float]]) -> str:
    return ', '.join(format_number(value) for value in values or [])


def summary_rows(metrics: Dict[str, TransformedMetric]) -> List[Dict[str, Any]]:
    """One flat display row per transformed metric, in metric order."""
    rows = []
    for name, metric in metrics.items():
        spec, status = metric.spec, metric.status
        rows.append(
            {
                'metric': name,
                'provider': metric_provider_name(spec.provider),
                'status': status.status_label,
                'substatus': str(status.substatus) if status.substatus else '',
                'measurements': len(status.transformed_measurements),
                'chartable': status.chartable,
                'chart_min': format_number(status.chart_min),
                'chart_max': format_number(status.chart_max),
                'fail_thresholds': _join_numbers(spec.fail_thresholds),
                'success_thresholds': _join_numbers(spec.success_thresholds),
                'queries': '; '.join(spec.queries or []),
            }
        )
    return rows


def log_analysis_summary(
    run: AnalysisRun, logger: Optional[RichLogger] = None
) -> List[Dict[str, Any]]:
    """
    Log the run-level status and a table of its metrics.

    Returns:
        The rows that were logged.
    """
    logger = logger or get_logger(__name__)
    name = run.metadata.name or 'analysis run'

    label = analysis_status_label(run.status)
    substatus = analysis_substatus(run.status)
    if substatus is None:
        logger.info(f'{name}: {label}')
    else:
        logger.warning(f'{name}: {label} [{substatus}]')

    end_time = analysis_end_time(run.status.metric_results if run.status else [])
    if end_time is not None:
        logger.info(f'{name}: last measurement finished at {end_time.isoformat()}')

    rows = summary_rows(transform_analysis_run(run))
    logger.log_table(rows, title=f'{name} metrics', columns=SUMMARY_COLUMNS)
    return rows
