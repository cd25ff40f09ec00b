import pytest

from rollscope.analysis.status import (
    adjusted_metric_phase,
    analysis_status_label,
    analysis_substatus,
    metric_status_label,
    metric_substatus,
)
from rollscope.schema import AnalysisPhase, AnalysisRunStatus, FunctionalStatus


class TestAdjustedPhase:
    def test_error_shows_as_failed(self):
        assert adjusted_metric_phase(AnalysisPhase.ERROR) is AnalysisPhase.FAILED
        assert adjusted_metric_phase('Error') is AnalysisPhase.FAILED

    @pytest.mark.parametrize('phase', [None, '', 'Paused'])
    def test_missing_or_unknown_phase(self, phase):
        assert adjusted_metric_phase(phase) is AnalysisPhase.UNKNOWN

    def test_other_phases_unchanged(self):
        assert adjusted_metric_phase('Inconclusive') is AnalysisPhase.INCONCLUSIVE


class TestMetricStatusLabel:
    @pytest.mark.parametrize(
        'phase, label',
        [
            ('Pending', 'Analysis pending'),
            ('Running', 'Analysis in progress'),
            ('Failed', 'Analysis failed'),
            ('Error', 'Analysis errored'),
            ('Inconclusive', 'Analysis inconclusive'),
            ('Unknown', 'Analysis status unknown'),
            (None, 'Analysis status unknown'),
        ],
    )
    def test_phase_labels(self, phase, label):
        assert metric_status_label(phase, 2, 2, 2) == label

    def test_clean_pass(self):
        assert metric_status_label(AnalysisPhase.SUCCESSFUL) == 'Analysis passed'

    @pytest.mark.parametrize(
        'counts, label',
        [
            ((1, 0, 0), 'Analysis passed with measurement failures'),
            ((0, 3, 0), 'Analysis passed with measurement errors'),
            ((0, 0, 1), 'Analysis passed with inconclusive measurements'),
            ((1, 1, 0), 'Analysis passed with multiple issues'),
            ((0, 1, 1), 'Analysis passed with multiple issues'),
            ((2, 2, 2), 'Analysis passed with multiple issues'),
        ],
    )
    def test_pass_with_issues(self, counts, label):
        assert metric_status_label('Successful', *counts) == label


class TestMetricSubstatus:
    @pytest.mark.parametrize('phase', ['Running', 'Successful'])
    def test_failures_are_errors(self, phase):
        assert metric_substatus(phase, 1, 1, 1) is FunctionalStatus.ERROR

    @pytest.mark.parametrize('counts', [(0, 1, 0), (0, 0, 4)])
    def test_errors_and_inconclusives_are_warnings(self, counts):
        assert metric_substatus('Successful', *counts) is FunctionalStatus.WARNING

    def test_clean(self):
        assert metric_substatus('Running') is None

    @pytest.mark.parametrize('phase', ['Failed', 'Error', 'Pending', 'Inconclusive', None])
    def test_only_running_and_successful_carry_substatus(self, phase):
        assert metric_substatus(phase, 5, 5, 5) is None


class TestAnalysisStatus:
    def test_uses_run_summary(self):
        status = AnalysisRunStatus.model_validate(
            {'phase': 'Successful', 'runSummary': {'count': 4, 'failed': 1, 'error': 1}}
        )
        assert analysis_status_label(status) == 'Analysis passed with multiple issues'
        assert analysis_substatus(status) is FunctionalStatus.ERROR

    def test_without_summary(self):
        status = AnalysisRunStatus(phase='Running')
        assert analysis_status_label(status) == 'Analysis in progress'
        assert analysis_substatus(status) is None

    def test_without_status(self):
        assert analysis_status_label(None) == 'Analysis status unknown'
        assert analysis_substatus(None) is None


def test_label_tables_are_read_only():
    from rollscope.analysis.status import STATUS_LABELS

    with pytest.raises(TypeError):
        STATUS_LABELS[AnalysisPhase.RUNNING] = 'busy'
