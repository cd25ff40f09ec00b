import copy
from pathlib import Path
from typing import Any, Dict, Union

from pydantic import ValidationError

from rollscope._core.config import Config
from rollscope._core.error import InvalidAnalysisRun
from rollscope._core.logging import get_logger
from rollscope.schema import AnalysisRun

logger = get_logger(__name__)

Source = Union[str, Path, Dict[str, Any]]


def load_analysis_run(*sources: Source) -> AnalysisRun:
    """
    Build an AnalysisRun from one or more YAML/JSON documents.

    Later sources are merged recursively over earlier ones, so a run's spec
    and status can live in separate files.

    Args:
        *sources: file paths or already-decoded dictionaries

    Returns:
        The validated AnalysisRun

    Raises:
        ConfigurationError: when a file is missing or is not valid YAML
        InvalidAnalysisRun: when the merged document is not an analysis run
    """
    if not sources:
        raise ValueError('At least one analysis run source is required.')

    config = None
    for source in sources:
        # Config keeps dict sources by reference and merge() updates in place
        loaded = Config(copy.deepcopy(source) if isinstance(source, dict) else source)
        if config is None:
            config = loaded
        else:
            config.merge(loaded)

    try:
        run = AnalysisRun.model_validate(config.config)
    except ValidationError as e:
        raise InvalidAnalysisRun(
            AnalysisRun.format_validation_error(e), original_error=e
        ) from e

    logger.debug(
        f'Loaded analysis run {config.get("metadata.name", "<unnamed>")} '
        f'with {len(run.spec.metrics) if run.spec else 0} metrics'
    )
    return run
