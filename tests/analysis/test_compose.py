from datetime import datetime, timezone

import pytest

from rollscope.analysis.compose import (
    analysis_end_time,
    chart_axis_max,
    compose_metrics,
    transform_analysis_run,
)
from rollscope.schema import (
    AnalysisPhase,
    AnalysisRunSpec,
    AnalysisRunStatus,
    FunctionalStatus,
)


class TestChartAxisMax:
    def test_small_values_without_thresholds(self):
        assert chart_axis_max(0.5, None, None) == 1
        assert chart_axis_max(0, [], []) == 1

    def test_headroom_over_largest(self):
        assert chart_axis_max(10, [12], [8]) == 14.4
        assert chart_axis_max(5, None, None) == 6.0

    def test_thresholds_raise_small_values(self):
        assert chart_axis_max(0.5, [0.9], None) == 1.08

    def test_huge_threshold(self):
        assert chart_axis_max(1, [1e307], None) == 1e307 * 1.2


class TestAnalysisEndTime:
    def test_latest_finish(self, analysis_run):
        assert analysis_end_time(analysis_run.status.metric_results) == datetime(
            2024, 5, 1, 10, 3, tzinfo=timezone.utc
        )

    def test_nothing_finished(self, analysis_run):
        assert analysis_end_time(analysis_run.status.metric_results[1:]) is None
        assert analysis_end_time([]) is None

    def test_mixed_naive_and_aware_timestamps(self):
        status = AnalysisRunStatus.model_validate(
            {
                'metricResults': [
                    {'measurements': [{'finishedAt': '2024-05-01T10:05:00'}]},
                    {'measurements': [{'finishedAt': '2024-05-01T12:04:00+02:00'}]},
                ]
            }
        )
        assert analysis_end_time(status.metric_results) == datetime(
            2024, 5, 1, 10, 5, tzinfo=timezone.utc
        )


class TestComposeMetrics:
    @pytest.fixture
    def metrics(self, analysis_run):
        return transform_analysis_run(analysis_run)

    def test_results_without_spec_are_skipped(self, metrics):
        assert list(metrics) == ['success-rate', 'latency', 'smoke-test']

    def test_prometheus_metric(self, metrics):
        metric = metrics['success-rate']
        assert metric.name == 'success-rate'
        assert metric.spec.queries == ['sum(rate(http_ok{service="checkout"}[5m]))']
        assert metric.spec.fail_condition_label == 'result[0] < 0.9'
        assert metric.spec.fail_thresholds == [0.9]
        assert metric.spec.success_condition_label == 'result[0] >= 0.95'
        assert metric.spec.success_thresholds == [0.95]
        assert metric.spec.condition_keys == ['0']
        assert metric.spec.interval == '1m'

        status = metric.status
        assert status.adjusted_phase is AnalysisPhase.SUCCESSFUL
        assert status.status_label == 'Analysis passed with measurement failures'
        assert status.substatus is FunctionalStatus.ERROR
        assert status.chartable is True
        assert status.chart_min == 0
        assert status.chart_max == 1.14
        assert [m.chart_value for m in status.transformed_measurements] == [
            {'0': 0.97},
            {'0': 0.85},
            {'0': 0.99},
        ]
        assert status.count == 3
        assert status.failed == 1

    def test_new_relic_metric(self, metrics):
        metric = metrics['latency']
        assert metric.spec.queries == [
            "SELECT percentile(duration, 95, 99) FROM Transaction WHERE appName = 'checkout'"
        ]
        assert metric.spec.fail_condition_label is None
        assert metric.spec.fail_thresholds is None
        assert metric.spec.success_thresholds == [300, 500]
        assert metric.spec.condition_keys == ['p95', 'p99']

        status = metric.status
        assert status.adjusted_phase is AnalysisPhase.RUNNING
        assert status.status_label == 'Analysis in progress'
        assert status.substatus is None
        assert status.chartable is True
        assert status.chart_max == 600
        first, pending = status.transformed_measurements
        assert first.table_value == {'p95': 210.46, 'p99': 380.0}
        assert pending.chart_value is None

    def test_unsupported_provider_metric(self, metrics):
        metric = metrics['smoke-test']
        assert metric.spec.queries is None
        assert metric.spec.success_condition_label is None
        assert metric.spec.success_thresholds is None
        assert metric.spec.condition_keys == []
        assert metric.spec.provider.provider_name == 'job'

        status = metric.status
        assert status.adjusted_phase is AnalysisPhase.FAILED
        assert status.phase is AnalysisPhase.ERROR
        assert status.status_label == 'Analysis errored'
        assert status.substatus is None
        assert status.chart_max == 1
        assert status.transformed_measurements[0].message == 'job failed'

    def test_missing_inputs(self, analysis_run):
        assert compose_metrics(None, analysis_run.status) == {}
        assert compose_metrics(analysis_run.spec, None) == {}

    def test_first_spec_wins_for_duplicate_names(self):
        spec = AnalysisRunSpec.model_validate(
            {
                'metrics': [
                    {'name': 'rate', 'successCondition': 'result[0] > 1', 'provider': {'prometheus': {}}},
                    {'name': 'rate', 'successCondition': 'result[0] > 2', 'provider': {'prometheus': {}}},
                ]
            }
        )
        status = AnalysisRunStatus.model_validate({'metricResults': [{'name': 'rate'}]})
        metric = compose_metrics(spec, status)['rate']
        assert metric.spec.success_thresholds == [1]
        assert metric.status.adjusted_phase is AnalysisPhase.UNKNOWN
        assert metric.status.status_label == 'Analysis status unknown'
        assert metric.status.chartable is False

    def test_unnamed_result_gets_placeholder_name(self):
        spec = AnalysisRunSpec.model_validate(
            {'metrics': [{'name': 'Unknown metric 0', 'provider': {'wavefront': {'query': 'ts(x)'}}}]}
        )
        status = AnalysisRunStatus.model_validate(
            {'metricResults': [{'phase': 'Running', 'measurements': [{'value': '2'}]}]}
        )
        metrics = compose_metrics(spec, status)
        assert list(metrics) == ['Unknown metric 0']
        assert metrics['Unknown metric 0'].spec.queries == ['ts(x)']
        assert metrics['Unknown metric 0'].status.chart_max == 2.4

    def test_huge_threshold_and_value(self):
        spec = AnalysisRunSpec.model_validate(
            {
                'metrics': [
                    {
                        'name': 'bytes',
                        'failureCondition': 'result[0] > 1e307',
                        'provider': {'prometheus': {'query': 'sum(bytes)'}},
                    }
                ]
            }
        )
        status = AnalysisRunStatus.model_validate(
            {'metricResults': [{'name': 'bytes', 'measurements': [{'value': '1e307'}]}]}
        )
        metric = compose_metrics(spec, status)['bytes']
        assert metric.spec.fail_thresholds == [1e307]
        assert metric.status.chart_max == 1e307 * 1.2

    def test_empty_spec_and_status(self):
        assert compose_metrics(AnalysisRunSpec(), AnalysisRunStatus()) == {}
