from rollscope.reporting.summary import (
    SUMMARY_COLUMNS,
    log_analysis_summary,
    summary_rows,
)

__all__ = [
    'SUMMARY_COLUMNS',
    'log_analysis_summary',
    'summary_rows',
]
