"""
Human-readable, argument-interpolated provider queries.
"""

import json
import re
from typing import Callable, Dict, List, Optional

from rollscope.schema import (
    Argument,
    CloudWatchMetric,
    DatadogMetric,
    ProviderConfig,
    ProviderKind,
)

UNSUPPORTED_PROVIDER = 'unsupported provider'

_PLACEHOLDER = re.compile(r'\{\{.*?\}\}')
_PLACEHOLDER_NOISE = re.compile(r'[{ }]')


def arg_value(args: Optional[List[Argument]], name: str) -> Optional[str]:
    """Value of the first argument called ``name``, or ``None``."""
    for arg in args or []:
        if arg.name == name:
            return arg.value
    return None


def metric_provider_name(provider: Optional[ProviderConfig]) -> str:
    """The provider key as written upstream."""
    if provider is None:
        return UNSUPPORTED_PROVIDER
    return provider.provider_name


def interpolate_query(
    query: Optional[str], args: Optional[List[Argument]] = None
) -> Optional[str]:
    """
    Replace every ``{{ args.NAME }}`` placeholder with the matching argument value.

    Placeholders without a matching argument (or whose argument has no value)
    are left verbatim.

    Args:
        query: query or condition text
        args: arguments of the analysis run

    Returns:
        The interpolated text, or ``None`` when ``query`` is empty.
    """
    if not query:
        return None
    if not args:
        return query

    def _replace(match: re.Match) -> str:
        pieces = _PLACEHOLDER_NOISE.sub('', match.group(0)).split('.')
        value = arg_value(args, pieces[1] if len(pieces) > 1 else '')
        return value if value is not None else match.group(0)

    return _PLACEHOLDER.sub(_replace, query)


def _interpolated_query_list(
    query: Optional[str], args: Optional[List[Argument]]
) -> List[str]:
    interpolated = interpolate_query(query, args)
    return [interpolated] if interpolated else []


def printable_datadog_query(
    datadog: Optional[DatadogMetric], args: Optional[List[Argument]] = None
) -> List[str]:
    """
    Datadog queries formatted for display.

    v1 metrics carry a single query. v2 metrics carry either a single query or
    a map of named queries, optionally combined by a formula.
    """
    if datadog is None:
        return []

    api_version = (datadog.api_version or '').lower()
    if api_version == 'v1':
        return _interpolated_query_list(datadog.query, args)
    if api_version != 'v2':
        return []

    if datadog.query:
        if datadog.formula:
            return [
                f'query: {interpolate_query(datadog.query, args)}, formula: {datadog.formula}'
            ]
        return _interpolated_query_list(datadog.query, args)

    if datadog.queries is not None:
        interpolated_queries: Dict[str, str] = {}
        for name, query in datadog.queries.items():
            interpolated = interpolate_query(query, args)
            if interpolated:
                interpolated_queries[name] = interpolated
        if datadog.formula:
            serialized = json.dumps(
                interpolated_queries, separators=(',', ':'), ensure_ascii=False
            )
            return [f'queries: {serialized}, formula: {datadog.formula}']
        return list(interpolated_queries.values())

    return []


def printable_cloudwatch_query(
    cloudwatch: Optional[CloudWatchMetric],
) -> Optional[List[str]]:
    """One compact JSON document per metric data query, ``None`` without a query list."""
    queries = cloudwatch.metric_data_queries if cloudwatch is not None else None
    if not isinstance(queries, list):
        return None
    return [
        json.dumps(query, separators=(',', ':'), ensure_ascii=False) for query in queries
    ]


def _single_query(provider: ProviderConfig, args: List[Argument]) -> List[str]:
    return _interpolated_query_list(getattr(provider, 'query', None), args)


_QUERY_FORMATTERS: Dict[
    ProviderKind, Callable[[ProviderConfig, List[Argument]], Optional[List[str]]]
] = {
    ProviderKind.PROMETHEUS: _single_query,
    ProviderKind.DATADOG: printable_datadog_query,
    ProviderKind.WAVEFRONT: _single_query,
    ProviderKind.NEW_RELIC: _single_query,
    ProviderKind.CLOUD_WATCH: lambda provider, args: printable_cloudwatch_query(
        provider
    ),
    ProviderKind.GRAPHITE: _single_query,
    ProviderKind.INFLUXDB: _single_query,
    ProviderKind.SKYWALKING: _single_query,
}


def format_queries(
    provider: Optional[ProviderConfig], args: Optional[List[Argument]] = None
) -> Optional[List[str]]:
    """
    Display queries for a metric provider.

    Returns ``None`` for an absent provider and for providers without query
    display support (kayenta, web, job, plugin and anything unrecognised).
    """
    if provider is None:
        return None
    formatter = _QUERY_FORMATTERS.get(provider.provider_kind)
    if formatter is None:
        return None
    return formatter(provider, args or [])
