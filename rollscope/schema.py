"""
Typed records for analysis runs and their display-ready transforms.

The upstream resources are decoded once into these models. Provider
configuration arrives as an object with exactly one populated field
(``{"prometheus": {...}}``); it is converted into a tagged variant keyed by
``kind`` at validation time, so the rest of the package never inspects
field presence again.
"""

from datetime import datetime, timezone
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import AfterValidator, BaseModel, BeforeValidator, Field, field_validator

from rollscope._core.schema import ResourceModel, RichEnum


###################################
# ENUMS
###################################
class AnalysisPhase(str, RichEnum):
    PENDING = 'Pending'
    RUNNING = 'Running'
    SUCCESSFUL = 'Successful'
    FAILED = 'Failed'
    ERROR = 'Error'
    INCONCLUSIVE = 'Inconclusive'
    UNKNOWN = 'Unknown'


class FunctionalStatus(str, RichEnum):
    """Secondary indicator layered on top of a passing or running phase."""

    ERROR = 'ERROR'
    WARNING = 'WARNING'


class ProviderKind(str, RichEnum):
    PROMETHEUS = 'prometheus'
    DATADOG = 'datadog'
    WAVEFRONT = 'wavefront'
    NEW_RELIC = 'newRelic'
    CLOUD_WATCH = 'cloudWatch'
    GRAPHITE = 'graphite'
    INFLUXDB = 'influxdb'
    SKYWALKING = 'skywalking'
    UNSUPPORTED = 'unsupported'


SUPPORTED_PROVIDER_KEYS = frozenset(
    kind.value for kind in ProviderKind if kind is not ProviderKind.UNSUPPORTED
)


def _coerce_phase(value: Any) -> Any:
    if value is None or isinstance(value, AnalysisPhase):
        return value
    if isinstance(value, str):
        if not value.strip():
            return None
        return AnalysisPhase.from_str(value.strip(), default=AnalysisPhase.UNKNOWN)
    return value


def _none_to_empty(value: Any) -> Any:
    return [] if value is None else value


def _stringify_scalar(value: Any) -> Any:
    # YAML documents may carry unquoted numbers or booleans
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (int, float)):
        return str(value)
    return value


def _assume_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


Phase = Annotated[Optional[AnalysisPhase], BeforeValidator(_coerce_phase)]
ScalarText = Annotated[Optional[str], BeforeValidator(_stringify_scalar)]
Timestamp = Annotated[Optional[datetime], AfterValidator(_assume_utc)]


###################################
# ARGUMENTS
###################################
class Argument(ResourceModel):
    name: str
    value: ScalarText = None
    value_from: Optional[Dict[str, Any]] = None


###################################
# PROVIDERS
###################################
class ProviderConfig(ResourceModel):
    """Base for a single provider variant."""

    kind: str

    @property
    def provider_kind(self) -> ProviderKind:
        return ProviderKind(self.kind)

    @property
    def provider_name(self) -> str:
        """The provider key as written in the upstream document."""
        return self.kind


class PrometheusMetric(ProviderConfig):
    kind: Literal['prometheus'] = 'prometheus'
    address: Optional[str] = None
    query: Optional[str] = None
    timeout: Optional[int] = None
    insecure: Optional[bool] = None
    headers: List[Dict[str, Any]] = Field(default_factory=list)
    authentication: Optional[Dict[str, Any]] = None


class DatadogMetric(ProviderConfig):
    kind: Literal['datadog'] = 'datadog'
    api_version: Optional[str] = None
    interval: Optional[str] = None
    query: Optional[str] = None
    queries: Optional[Dict[str, str]] = None
    formula: Optional[str] = None
    aggregator: Optional[str] = None


class WavefrontMetric(ProviderConfig):
    kind: Literal['wavefront'] = 'wavefront'
    address: Optional[str] = None
    query: Optional[str] = None


class NewRelicMetric(ProviderConfig):
    kind: Literal['newRelic'] = 'newRelic'
    profile: Optional[str] = None
    query: Optional[str] = None
    timeout: Optional[int] = None


class CloudWatchMetric(ProviderConfig):
    kind: Literal['cloudWatch'] = 'cloudWatch'
    interval: Optional[str] = None
    # Kept raw so queries render with their original key order.
    metric_data_queries: Optional[Any] = None


class GraphiteMetric(ProviderConfig):
    kind: Literal['graphite'] = 'graphite'
    address: Optional[str] = None
    query: Optional[str] = None


class InfluxdbMetric(ProviderConfig):
    kind: Literal['influxdb'] = 'influxdb'
    profile: Optional[str] = None
    query: Optional[str] = None


class SkyWalkingMetric(ProviderConfig):
    kind: Literal['skywalking'] = 'skywalking'
    address: Optional[str] = None
    query: Optional[str] = None
    interval: Optional[str] = None


class UnsupportedProvider(ProviderConfig):
    """Any provider without display support (kayenta, web, job, plugin, ...)."""

    kind: Literal['unsupported'] = 'unsupported'
    name: str
    config: Any = None

    @property
    def provider_name(self) -> str:
        return self.name


MetricProvider = Annotated[
    Union[
        PrometheusMetric,
        DatadogMetric,
        WavefrontMetric,
        NewRelicMetric,
        CloudWatchMetric,
        GraphiteMetric,
        InfluxdbMetric,
        SkyWalkingMetric,
        UnsupportedProvider,
    ],
    Field(discriminator='kind'),
]


def tag_provider(value: Any) -> Any:
    """
    Convert an upstream provider object into its tagged form.

    The first populated field names the provider. Objects that are already
    tagged, or already validated, pass through unchanged; an object with no
    populated field becomes ``None``.
    """
    if not isinstance(value, dict) or 'kind' in value:
        return value

    for key, config in value.items():
        if config is None:
            continue
        if key in SUPPORTED_PROVIDER_KEYS:
            body = dict(config) if isinstance(config, dict) else {}
            body['kind'] = key
            return body
        return {'kind': ProviderKind.UNSUPPORTED.value, 'name': key, 'config': config}
    return None


###################################
# SPEC
###################################
class Metric(ResourceModel):
    name: str
    interval: Optional[str] = None
    initial_delay: Optional[str] = None
    count: Optional[Union[int, str]] = None
    success_condition: Optional[str] = None
    failure_condition: Optional[str] = None
    failure_limit: Optional[Union[int, str]] = None
    inconclusive_limit: Optional[Union[int, str]] = None
    consecutive_error_limit: Optional[Union[int, str]] = None
    provider: Optional[MetricProvider] = None

    @field_validator('provider', mode='before')
    @classmethod
    def _tag_provider(cls, value: Any) -> Any:
        return tag_provider(value)


class AnalysisRunSpec(ResourceModel):
    metrics: Annotated[List[Metric], BeforeValidator(_none_to_empty)] = Field(
        default_factory=list
    )
    args: Annotated[List[Argument], BeforeValidator(_none_to_empty)] = Field(
        default_factory=list
    )
    dry_run: List[Dict[str, Any]] = Field(default_factory=list)
    measurement_retention: List[Dict[str, Any]] = Field(default_factory=list)
    terminate: Optional[bool] = None


###################################
# STATUS
###################################
class Measurement(ResourceModel):
    phase: Phase = None
    message: Optional[str] = None
    started_at: Timestamp = None
    finished_at: Timestamp = None
    value: ScalarText = None
    metadata: Dict[str, str] = Field(default_factory=dict)
    resume_at: Timestamp = None


class MetricResult(ResourceModel):
    name: Optional[str] = None
    phase: Phase = None
    measurements: Annotated[
        List[Measurement], BeforeValidator(_none_to_empty)
    ] = Field(default_factory=list)
    message: Optional[str] = None
    count: int = 0
    successful: int = 0
    failed: int = 0
    inconclusive: int = 0
    error: int = 0
    consecutive_error: int = 0
    dry_run: Optional[bool] = None
    metadata: Dict[str, str] = Field(default_factory=dict)


class RunSummary(ResourceModel):
    count: int = 0
    successful: int = 0
    failed: int = 0
    inconclusive: int = 0
    error: int = 0


class AnalysisRunStatus(ResourceModel):
    phase: Phase = None
    message: Optional[str] = None
    metric_results: Annotated[
        List[MetricResult], BeforeValidator(_none_to_empty)
    ] = Field(default_factory=list)
    run_summary: Optional[RunSummary] = None
    dry_run_summary: Optional[RunSummary] = None
    started_at: Timestamp = None


class ObjectMeta(ResourceModel):
    name: Optional[str] = None
    namespace: Optional[str] = None
    labels: Dict[str, str] = Field(default_factory=dict)
    annotations: Dict[str, str] = Field(default_factory=dict)


class AnalysisRun(ResourceModel):
    api_version: Optional[str] = None
    kind: Optional[str] = None
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: Optional[AnalysisRunSpec] = None
    status: Optional[AnalysisRunStatus] = None


###################################
# TRANSFORMED OUTPUT
###################################
DisplayValue = Union[float, str, None]
ChartValue = Union[float, Dict[str, DisplayValue], None]
TableValue = Union[float, str, Dict[str, DisplayValue], None]


class TransformedMeasurement(Measurement):
    chart_value: ChartValue = None
    table_value: TableValue = None


class TransformedMetricSpec(Metric):
    queries: Optional[List[str]] = None
    fail_condition_label: Optional[str] = None
    fail_thresholds: Optional[List[float]] = None
    success_condition_label: Optional[str] = None
    success_thresholds: Optional[List[float]] = None
    condition_keys: List[str] = Field(default_factory=list)


class TransformedMetricStatus(MetricResult):
    adjusted_phase: AnalysisPhase
    status_label: str
    substatus: Optional[FunctionalStatus] = None
    transformed_measurements: List[TransformedMeasurement] = Field(
        default_factory=list
    )
    chartable: bool = False
    chart_min: float = 0
    chart_max: float = 1


class TransformedMetric(ResourceModel):
    name: str
    spec: TransformedMetricSpec
    status: TransformedMetricStatus


def fields_of(model: BaseModel) -> Dict[str, Any]:
    """Shallow field mapping of a record, used to build its augmented form."""
    return {name: getattr(model, name) for name in type(model).model_fields}
