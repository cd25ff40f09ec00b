from typing import Any, Dict

import pytest

from rollscope.schema import AnalysisRun, Argument


@pytest.fixture
def args():
    return [
        Argument(name='service', value='checkout'),
        Argument(name='threshold', value='5'),
        Argument(name='service', value='shadowed'),
    ]


@pytest.fixture
def analysis_run_document() -> Dict[str, Any]:
    """An AnalysisRun as the controller serializes it."""
    return {
        'apiVersion': 'argoproj.io/v1alpha1',
        'kind': 'AnalysisRun',
        'metadata': {'name': 'checkout-canary-7f9c', 'namespace': 'shop'},
        'spec': {
            'args': [
                {'name': 'service', 'value': 'checkout'},
                {'name': 'threshold', 'value': '0.95'},
            ],
            'metrics': [
                {
                    'name': 'success-rate',
                    'interval': '1m',
                    'successCondition': 'result[0] >= {{ args.threshold }}',
                    'failureCondition': 'result[0] < 0.9',
                    'provider': {
                        'prometheus': {
                            'address': 'http://prometheus:9090',
                            'query': 'sum(rate(http_ok{service="{{args.service}}"}[5m]))',
                        }
                    },
                },
                {
                    'name': 'latency',
                    'successCondition': 'result.p95 < 300 && result.p99 < 500',
                    'provider': {
                        'newRelic': {
                            'query': "SELECT percentile(duration, 95, 99) FROM Transaction WHERE appName = '{{args.service}}'"
                        }
                    },
                },
                {
                    'name': 'smoke-test',
                    'provider': {'job': {'spec': {'template': {}}}},
                },
            ],
        },
        'status': {
            'phase': 'Successful',
            'runSummary': {'count': 3, 'successful': 2, 'failed': 1},
            'metricResults': [
                {
                    'name': 'success-rate',
                    'phase': 'Successful',
                    'count': 3,
                    'successful': 2,
                    'failed': 1,
                    'measurements': [
                        {
                            'phase': 'Successful',
                            'value': '[0.97]',
                            'finishedAt': '2024-05-01T10:01:00Z',
                        },
                        {
                            'phase': 'Failed',
                            'value': '[0.85]',
                            'finishedAt': '2024-05-01T10:02:00Z',
                        },
                        {
                            'phase': 'Successful',
                            'value': '[0.991]',
                            'finishedAt': '2024-05-01T10:03:00Z',
                        },
                    ],
                },
                {
                    'name': 'latency',
                    'phase': 'Running',
                    'measurements': [
                        {'phase': 'Successful', 'value': '{"p95": 210.456, "p99": 380}'},
                        {'phase': 'Running'},
                    ],
                },
                {
                    'name': 'smoke-test',
                    'phase': 'Error',
                    'error': 1,
                    'measurements': [{'phase': 'Error', 'message': 'job failed'}],
                },
                {'name': 'orphaned', 'phase': 'Successful'},
            ],
        },
    }


@pytest.fixture
def analysis_run(analysis_run_document) -> AnalysisRun:
    return AnalysisRun.model_validate(analysis_run_document)
