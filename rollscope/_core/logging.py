import io
import logging
import time
from contextlib import contextmanager
from logging import StreamHandler
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from rollscope._core.environment import settings
from rollscope._core.utils import Timer

# --- Global State ---
_log_stats: Dict[str, Dict[str, int]] = {}
_session_start_time: float = time.monotonic()
_logging_configured = False
DEFAULT_LOG_LEVEL = 'INFO'


class RichLogger(logging.Logger):
    """
    A custom logger class that inherits from logging.Logger and includes
    a few high-level logging helpers.
    """

    def _log(
        self,
        level,
        msg,
        args,
        exc_info=None,
        extra=None,
        stack_info=False,
        stacklevel=1,
        **kwargs,
    ):
        """Override internal _log to track stats before passing to parent."""
        logger_name = self.name
        if logger_name not in _log_stats:
            _log_stats[logger_name] = {
                'DEBUG': 0,
                'INFO': 0,
                'WARNING': 0,
                'ERROR': 0,
                'CRITICAL': 0,
            }
        level_name = logging.getLevelName(level)
        if level_name in _log_stats[logger_name]:
            _log_stats[logger_name][level_name] += 1
        super()._log(level, msg, args, exc_info, extra, stack_info, stacklevel)

    def log_table(
        self,
        data: List[Dict[str, Any]],
        title: Optional[str] = None,
        columns: Optional[List[str]] = None,
        level: Union[int, str] = logging.INFO,
    ) -> None:
        """Logs a list of dictionaries as a formatted table string."""
        if not data:
            self.log(level, f"{title or 'Table'}: No data to display")
            return

        # Render the Rich table into a string instead of printing directly
        buffer = io.StringIO()
        console = Console(file=buffer, width=120)
        table = Table(title=title, show_header=True, header_style='bold magenta')
        columns = columns or list(data[0].keys())
        for col in columns:
            table.add_column(str(col), style='cyan', no_wrap=False)
        for row in data:
            values = [str(row.get(col, '')) for col in columns]
            table.add_row(*values)

        console.print(table)
        self.log(level, f'\n{buffer.getvalue()}')

    def log_performance(self, operation: str, duration: float, **metrics: Any):
        """Log performance metrics for a specific operation."""
        msg = f'⚡ Performance | {operation} | Duration: {duration:.4f}s'
        if metrics:
            metric_str = ' | '.join(f'{k}={v}' for k, v in metrics.items())
            msg += f' | {metric_str}'
        self.debug(msg)

    @contextmanager
    def log_operation(self, operation_name: str, level: int = logging.DEBUG):
        """Context manager for logging the start, end, and duration of an operation."""
        if self.isEnabledFor(level):
            self.log(level, f'🔹 Starting | {operation_name}')
            timer = Timer()
            timer.start()
            try:
                yield timer
            except Exception as e:
                timer.stop()
                self.error(
                    f'❌ Failed   | {operation_name} after {timer.elapsed_time:.2f}s',
                    exc_info=e,
                )
                raise
            else:
                timer.stop()
                self.log(
                    level,
                    f'✅ Completed | {operation_name} in {timer.elapsed_time:.2f}s',
                )
                self.log_performance(operation_name, timer.elapsed_time)
        else:
            yield Timer()


def configure_logging(
    level: Optional[str] = None,
    use_rich: Optional[bool] = None,
    format_string: Optional[str] = None,
    file_path: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Configures the application's logging system.

    Prioritizes direct function arguments over global settings, which in turn
    are loaded from environment variables or .env files.

    Args:
        level: Override the log level (e.g., 'DEBUG').
        use_rich: Override the use of rich formatting.
        format_string: Override the log format string.
        file_path: Override the log file path.
        force: If True, will overwrite an existing configuration.
    """
    global _logging_configured, _session_start_time
    init_logger = logging.getLogger(__name__)

    if _logging_configured and not force:
        init_logger.debug('Logging already configured. Skipping reconfiguration.')
        return

    if not _logging_configured:
        _session_start_time = time.monotonic()

    # 1. Resolve configuration, prioritizing direct arguments over global settings.
    final_level = level or settings.log_level or DEFAULT_LOG_LEVEL
    # `False` is a valid override, so check against None.
    final_use_rich = use_rich if use_rich is not None else settings.log_use_rich
    final_format_string = format_string or settings.log_format_string
    final_file_path = file_path or settings.log_file_path

    # 2. Configure the root logger
    logging.setLoggerClass(RichLogger)
    root_logger = logging.getLogger()
    root_logger.setLevel(final_level.upper())

    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    init_logger.debug(
        f'--- Configuring logging. Level: {final_level}, Rich: {final_use_rich} ---'
    )

    if final_use_rich:
        handler = RichHandler(rich_tracebacks=True, show_path=False, markup=False)
        formatter = logging.Formatter('%(message)s', datefmt='[%X]')
    else:
        handler = StreamHandler()
        formatter = logging.Formatter(
            final_format_string
            or '%(asctime)s | %(name)-20s | %(levelname)-8s | %(message)s'
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    if final_file_path:
        Path(final_file_path).parent.mkdir(parents=True, exist_ok=True)
        file_formatter = logging.Formatter(
            final_format_string
            or '%(asctime)s | %(name)s | %(levelname)s | %(message)s'
        )
        file_handler = logging.FileHandler(final_file_path, mode='a')
        file_handler.setFormatter(file_formatter)
        root_logger.addHandler(file_handler)
        init_logger.debug(f'Logging also configured for file: {final_file_path}')

    _logging_configured = True


def is_logging_configured() -> bool:
    return _logging_configured


def get_logger(name: str) -> RichLogger:
    """
    Gets a logger instance. If logging is not yet configured,
    it applies a default configuration first.
    """
    if not _logging_configured:
        configure_logging()
    logging.setLoggerClass(RichLogger)
    return logging.getLogger(name)


def log_summary():
    """Logs a summary of all logging activity during the session."""
    logger = get_logger('LoggingSummary')
    total_runtime = time.monotonic() - _session_start_time
    logger.info('--- Logging Summary ---')
    logger.info(f'Total Session Runtime: {total_runtime:.2f} seconds')
    grand_total = sum(sum(stats.values()) for stats in _log_stats.values())
    for logger_name, stats in _log_stats.items():
        total = sum(stats.values())
        if total > 0:
            logger.info(f"Logger '{logger_name}': {total} messages")
            for level, count in stats.items():
                if count > 0:
                    logger.info(f'    - {level}: {count}')
    logger.info(f'Grand Total Messages: {grand_total}')
    logger.info('-----------------------')


__all__ = [
    'configure_logging',
    'get_logger',
    'is_logging_configured',
    'log_summary',
    'RichLogger',
]
