"""
Status labels and substatus for metrics and whole analysis runs.
"""

from types import MappingProxyType
from typing import Mapping, Optional, Tuple, Union

from rollscope.schema import AnalysisPhase, AnalysisRunStatus, FunctionalStatus

PhaseLike = Union[AnalysisPhase, str, None]

STATUS_LABELS: Mapping[AnalysisPhase, str] = MappingProxyType(
    {
        AnalysisPhase.UNKNOWN: 'Analysis status unknown',
        AnalysisPhase.PENDING: 'Analysis pending',
        AnalysisPhase.RUNNING: 'Analysis in progress',
        AnalysisPhase.FAILED: 'Analysis failed',
        AnalysisPhase.INCONCLUSIVE: 'Analysis inconclusive',
        AnalysisPhase.ERROR: 'Analysis errored',
        AnalysisPhase.SUCCESSFUL: 'Analysis passed',
    }
)

# keyed by (has failures, has errors, has inconclusives)
SUCCESS_DETAILS: Mapping[Tuple[bool, bool, bool], str] = MappingProxyType(
    {
        (True, False, False): 'with measurement failures',
        (False, True, False): 'with measurement errors',
        (False, False, True): 'with inconclusive measurements',
    }
)
MULTIPLE_ISSUES = 'with multiple issues'

_SUBSTATUS_PHASES = frozenset({AnalysisPhase.RUNNING, AnalysisPhase.SUCCESSFUL})


def _as_phase(phase: PhaseLike) -> AnalysisPhase:
    if isinstance(phase, AnalysisPhase):
        return phase
    if not phase:
        return AnalysisPhase.UNKNOWN
    return AnalysisPhase.from_str(phase, default=AnalysisPhase.UNKNOWN)


def adjusted_metric_phase(phase: PhaseLike) -> AnalysisPhase:
    """Phase used for display: ``Error`` shows as ``Failed``, a missing phase as ``Unknown``."""
    phase = _as_phase(phase)
    return AnalysisPhase.FAILED if phase is AnalysisPhase.ERROR else phase


def metric_status_label(
    phase: PhaseLike, failures: int = 0, errors: int = 0, inconclusives: int = 0
) -> str:
    """
    Descriptive label for a phase.

    A successful phase also names the measurement problems it passed with.
    """
    phase = _as_phase(phase)
    if phase is not AnalysisPhase.SUCCESSFUL:
        return STATUS_LABELS.get(phase, '')

    issues = (failures > 0, errors > 0, inconclusives > 0)
    details = SUCCESS_DETAILS.get(issues, MULTIPLE_ISSUES if any(issues) else '')
    return f'{STATUS_LABELS[phase]} {details}'.strip()


def metric_substatus(
    phase: PhaseLike, failures: int = 0, errors: int = 0, inconclusives: int = 0
) -> Optional[FunctionalStatus]:
    """
    ERROR when measurements failed, WARNING when they errored or were
    inconclusive. Only running and successful phases carry a substatus.
    """
    if _as_phase(phase) not in _SUBSTATUS_PHASES:
        return None
    if failures > 0:
        return FunctionalStatus.ERROR
    if errors > 0 or inconclusives > 0:
        return FunctionalStatus.WARNING
    return None


def analysis_status_label(status: Optional[AnalysisRunStatus]) -> str:
    summary = status.run_summary if status is not None else None
    return metric_status_label(
        status.phase if status is not None else None,
        summary.failed if summary else 0,
        summary.error if summary else 0,
        summary.inconclusive if summary else 0,
    )


def analysis_substatus(
    status: Optional[AnalysisRunStatus],
) -> Optional[FunctionalStatus]:
    if status is None:
        return None
    summary = status.run_summary
    return metric_substatus(
        status.phase,
        summary.failed if summary else 0,
        summary.error if summary else 0,
        summary.inconclusive if summary else 0,
    )
