"""
Public API for logging functionality.

Logging configures itself from environment variables on first use.

Quick Start:
    >>> from rollscope.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info('Hello world')

Environment Variables:
    - LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
    - LOG_USE_RICH: Enable rich formatting (true/false)
    - LOG_FORMAT_STRING: Format string for the plain console handler
    - LOG_FILE_PATH: Optional log file path
"""

from rollscope._core.logging import (
    RichLogger,
    configure_logging,
    get_logger,
    is_logging_configured,
    log_summary,
)

__all__ = [
    'configure_logging',
    'get_logger',
    'is_logging_configured',
    'log_summary',
    'RichLogger',
]
