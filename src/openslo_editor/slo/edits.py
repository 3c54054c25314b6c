"""Pure update functions, one per editor intent.

Each function takes a configuration snapshot and returns a new one; the
input is never modified, so validation and rendering always see a
consistent value.
"""

from __future__ import annotations

from typing import Any, Literal

from openslo_editor.slo.spec import (
    ComparisonOp,
    Configuration,
    DocumentKind,
    IndicatorMode,
    MetricSource,
    RatioMetric,
    ThresholdMetric,
)

SourceRole = Literal["source", "good", "bad", "total"]


def update_fields(config: Configuration, **changes: Any) -> Configuration:
    """Return a copy with ``changes`` applied and re-validated.

    Keys may be attribute names (``display_name``) or aliases
    (``displayName``).
    """
    data = config.model_dump(by_alias=False)
    for key, value in changes.items():
        data[_FIELD_NAMES.get(key, key)] = value
    return Configuration.model_validate(data)


_FIELD_NAMES = {
    field.alias: name
    for name, field in Configuration.model_fields.items()
    if field.alias
}


def set_kind(config: Configuration, kind: DocumentKind | str) -> Configuration:
    return update_fields(config, kind=DocumentKind(kind))


def set_indicator_mode(config: Configuration, mode: IndicatorMode | str) -> Configuration:
    return update_fields(config, indicator_mode=IndicatorMode(mode))


def set_indicator_ref(config: Configuration, ref: str) -> Configuration:
    return update_fields(config, indicator_ref=ref)


def set_indicator_type(config: Configuration, indicator_type: str) -> Configuration:
    """Switch between threshold and ratio metrics.

    Switching to the other type starts from that type's starter shape: a
    threshold gets an empty source compared with ``lte 0.5``, a ratio gets
    empty total and good sources. Selecting the current type is a no-op.
    """
    if indicator_type == config.indicator.type:
        return config
    if indicator_type == "threshold":
        metric = ThresholdMetric(source=MetricSource(), operator=ComparisonOp.LTE, value=0.5)
        return update_fields(config, indicator=metric)
    if indicator_type == "ratio":
        return update_fields(config, indicator=RatioMetric(total=MetricSource(), good=MetricSource()))
    raise ValueError(f"Unknown indicator type: {indicator_type!r}")


def set_threshold(
    config: Configuration,
    operator: ComparisonOp | str | None = None,
    value: Any = None,
) -> Configuration:
    """Update the threshold operator and/or value.

    Raises ValueError if the indicator is not a threshold metric.
    """
    metric = config.indicator
    if not isinstance(metric, ThresholdMetric):
        raise ValueError("Indicator is not a threshold metric")
    data = metric.model_dump()
    if operator is not None:
        data["operator"] = ComparisonOp(operator)
    if value is not None:
        data["value"] = value
    return update_fields(config, indicator=data)


def set_metric_source(
    config: Configuration,
    role: SourceRole,
    type: str | None = None,
    query: str | None = None,
) -> Configuration:
    """Set the backend type and/or query of one metric source.

    ``role`` is ``source`` for threshold metrics and ``good``, ``bad`` or
    ``total`` for ratio metrics. Setting an absent good/bad source creates it.
    """
    metric = config.indicator
    valid_roles = ("source",) if isinstance(metric, ThresholdMetric) else ("good", "bad", "total")
    if role not in valid_roles:
        raise ValueError(f"Role {role!r} does not apply to a {metric.type} metric")

    current: MetricSource | None = getattr(metric, role)
    source = (current or MetricSource()).model_dump()
    if type is not None:
        source["type"] = type
    if query is not None:
        source["query"] = query

    data = metric.model_dump()
    data[role] = source
    return update_fields(config, indicator=data)


def remove_metric_source(config: Configuration, role: Literal["good", "bad"]) -> Configuration:
    """Drop the optional good or bad source of a ratio metric."""
    metric = config.indicator
    if not isinstance(metric, RatioMetric) or role not in ("good", "bad"):
        raise ValueError(f"Cannot remove {role!r} from a {metric.type} metric")
    data = metric.model_dump()
    data[role] = None
    return update_fields(config, indicator=data)


def clear_identifier(config: Configuration) -> Configuration:
    return update_fields(config, id="")
