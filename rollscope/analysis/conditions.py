"""
Structural parsing of success/failure conditions.

A condition is a chain of ``<accessor> <operator> <literal>`` clauses joined
by ``&&`` or ``||`` with a single space on each side. Nothing is evaluated
here: each clause is only checked against the accessor syntax its provider
is known to produce, so that numeric thresholds and the keys needed to pull
values out of structured results can be recovered for display.
"""

import re
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from rollscope.analysis.numbers import parse_threshold
from rollscope.analysis.queries import interpolate_query
from rollscope.schema import Argument, ProviderConfig, ProviderKind

_CONNECTIVES = re.compile(r' && | \|\| ')


@dataclass(frozen=True)
class AccessorSupport:
    supported: bool
    condition_key: Optional[str] = None


@dataclass(frozen=True)
class ConditionInfo:
    """
    Attributes:
        label: the condition with its arguments interpolated
        thresholds: numeric literals of the recognised clauses, in clause order
        condition_keys: distinct extraction keys of the recognised clauses
    """

    label: Optional[str] = None
    thresholds: List[float] = field(default_factory=list)
    condition_keys: List[str] = field(default_factory=list)


def _first_result_accessor(accessor: str) -> AccessorSupport:
    return AccessorSupport(accessor == 'result[0]', '0')


def _datadog_accessor(accessor: str) -> AccessorSupport:
    return AccessorSupport(
        accessor in ('result', 'default(result, 0)'),
        '0' if '0' in accessor else None,
    )


def _wavefront_accessor(accessor: str) -> AccessorSupport:
    return AccessorSupport(accessor == 'result')


def _new_relic_accessor(accessor: str) -> AccessorSupport:
    return AccessorSupport(accessor.startswith('result.'), accessor[len('result.') :])


def _no_accessor_support(accessor: str) -> AccessorSupport:
    return AccessorSupport(False)


PROVIDER_CONDITION_SUPPORT: Dict[ProviderKind, Callable[[str], AccessorSupport]] = {
    ProviderKind.PROMETHEUS: _first_result_accessor,
    ProviderKind.DATADOG: _datadog_accessor,
    ProviderKind.WAVEFRONT: _wavefront_accessor,
    ProviderKind.NEW_RELIC: _new_relic_accessor,
    ProviderKind.CLOUD_WATCH: _no_accessor_support,
    ProviderKind.GRAPHITE: _first_result_accessor,
    ProviderKind.INFLUXDB: _first_result_accessor,
    ProviderKind.SKYWALKING: _no_accessor_support,
}


def parse_condition(
    condition: Optional[str],
    args: Optional[List[Argument]] = None,
    provider: Optional[ProviderConfig] = None,
) -> ConditionInfo:
    """
    Recover the label, thresholds and extraction keys of a condition.

    A clause contributes when it splits on single spaces into exactly three
    tokens, its accessor is recognised for the provider, its operator contains
    ``<`` or ``>`` and its literal is a finite number.

    Args:
        condition: failure or success condition of a metric
        args: arguments of the analysis run
        provider: the metric's provider

    Returns:
        ConditionInfo, empty when the condition is blank or the provider has
        no condition support.
    """
    if not condition or provider is None:
        return ConditionInfo()

    accessor_support = PROVIDER_CONDITION_SUPPORT.get(provider.provider_kind)
    if accessor_support is None:
        return ConditionInfo()

    label = interpolate_query(condition, args)
    thresholds: List[float] = []
    condition_keys: List[str] = []

    for clause in _CONNECTIVES.split(label or ''):
        parts = clause.split(' ')
        if len(parts) != 3:
            continue

        accessor, operator, literal = parts
        support = accessor_support(accessor)
        if not support.supported or not ('<' in operator or '>' in operator):
            continue

        threshold = parse_threshold(literal)
        if threshold is None:
            continue

        if (
            support.condition_key is not None
            and support.condition_key not in condition_keys
        ):
            condition_keys.append(support.condition_key)
        thresholds.append(threshold)

    return ConditionInfo(
        label=label or None, thresholds=thresholds, condition_keys=condition_keys
    )
