from typing import Optional

# Environment
from rollscope._core.environment import settings

# Pipeline
from rollscope.analysis import (
    aggregate_series,
    analysis_status_label,
    analysis_substatus,
    chart_axis_max,
    classify_value,
    compose_metrics,
    format_queries,
    interpolate_query,
    metric_status_label,
    parse_condition,
    transform_analysis_run,
)
from rollscope.loader import load_analysis_run

# Records
from rollscope.schema import (
    AnalysisPhase,
    AnalysisRun,
    AnalysisRunSpec,
    AnalysisRunStatus,
    Argument,
    FunctionalStatus,
    Measurement,
    Metric,
    MetricResult,
    ProviderKind,
    TransformedMetric,
)


def init(log_level: Optional[str] = None, log_rich: Optional[bool] = None) -> None:
    """
    Initialize rollscope logging with optional overrides.

    If not called, logging configures itself from the environment on first use.

    Args:
        log_level: Logging level ('DEBUG', 'INFO', 'WARNING', 'ERROR').
            If None, uses LOG_LEVEL env var or 'INFO'.
        log_rich: Enable rich formatting. If None, uses LOG_USE_RICH env var.

    Example:
        >>> import rollscope
        >>> rollscope.init(log_level='DEBUG')
    """
    from rollscope.logging import configure_logging

    configure_logging(level=log_level, use_rich=log_rich, force=True)


__all__ = [
    'init',
    # Records
    'AnalysisPhase',
    'AnalysisRun',
    'AnalysisRunSpec',
    'AnalysisRunStatus',
    'Argument',
    'FunctionalStatus',
    'Measurement',
    'Metric',
    'MetricResult',
    'ProviderKind',
    'TransformedMetric',
    # Pipeline
    'aggregate_series',
    'analysis_status_label',
    'analysis_substatus',
    'chart_axis_max',
    'classify_value',
    'compose_metrics',
    'format_queries',
    'interpolate_query',
    'load_analysis_run',
    'metric_status_label',
    'parse_condition',
    'transform_analysis_run',
    # Environment
    'settings',
]
