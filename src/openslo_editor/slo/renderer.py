"""Render editor configurations as OpenSLO YAML documents.

The output is assembled line by line rather than through a YAML dumper:
key order, list style and the block-scalar form of queries are part of the
document contract.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum

from openslo_editor.slo.spec import (
    Configuration,
    DocumentKind,
    IndicatorMode,
    MetricSource,
    RatioMetric,
    ThresholdMetric,
)

INDENT = "  "


def _indent(lines: list[str], levels: int = 1) -> list[str]:
    """Prefix non-empty lines with ``levels`` indent units."""
    prefix = INDENT * levels
    return [prefix + line if line else line for line in lines]


def format_number(value: int | float | None) -> str:
    """Format a number the way it was entered, without rounding.

    Floats are written in plain decimal notation; YAML 1.1 loaders read
    exponent forms such as ``1e-05`` as strings.
    """
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, float):
        return format(Decimal(repr(value)), "f")
    return str(value)


def _text(value: Enum | str) -> str:
    """Enum members render as their value, free-form strings as entered."""
    return value.value if isinstance(value, Enum) else value


def _query_lines(query: str) -> list[str]:
    """Emit ``query:`` as a block scalar holding the text verbatim."""
    if not query:
        return ["query: >-"]
    if query.endswith("\n"):
        style, chomp, body = "|", "+", query[:-1]
    elif "\n" in query:
        style, chomp, body = "|", "-", query
    else:
        style, chomp, body = ">", "-", query
    lines = body.split("\n")
    # Indentation is detected from the first non-empty line.
    first = next((line for line in lines if line), "")
    indicator = "2" if first[:1] in (" ", "\t") else ""
    return [f"query: {style}{indicator}{chomp}"] + _indent(lines)


def _source_lines(source: MetricSource) -> list[str]:
    return [
        "metricSource:",
        f"{INDENT}type: {source.type}",
        f"{INDENT}spec:",
    ] + _indent(_query_lines(source.query), 2)


def _threshold_lines(metric: ThresholdMetric) -> list[str]:
    return (
        ["thresholdMetric:"]
        + _indent(_source_lines(metric.source))
        + [
            f"{INDENT}operator: {metric.operator.value}",
            f"{INDENT}value: {format_number(metric.value)}",
        ]
    )


def _ratio_lines(metric: RatioMetric) -> list[str]:
    lines = ["ratioMetric:"]
    for role, source in (("good", metric.good), ("bad", metric.bad), ("total", metric.total)):
        if source is None:
            continue
        lines.append(f"{INDENT}{role}:")
        lines.extend(_indent(_source_lines(source), 2))
    return lines


def indicator_lines(config: Configuration) -> list[str]:
    """The metric block shared by inline SLOs and SLIs, unindented."""
    if isinstance(config.indicator, RatioMetric):
        return _ratio_lines(config.indicator)
    return _threshold_lines(config.indicator)


def _metadata_lines(config: Configuration) -> list[str]:
    lines = [
        "metadata:",
        f"{INDENT}name: {config.name}",
        f"{INDENT}displayName: {config.display_name}",
    ]
    if config.app and config.app.strip():
        lines.append(f"{INDENT}labels:")
        lines.append(f"{INDENT * 2}app: {config.app}")
    return lines


def _sli_lines(config: Configuration) -> list[str]:
    return (
        [f"apiVersion: {config.api_version}", "kind: SLI"]
        + _metadata_lines(config)
        + ["spec:", f"{INDENT}description: {config.description}"]
        + _indent(indicator_lines(config))
    )


def _slo_lines(config: Configuration) -> list[str]:
    lines = [f"apiVersion: {config.api_version}", "kind: SLO"]
    lines += _metadata_lines(config)
    lines += [
        "spec:",
        f"{INDENT}description: {config.description}",
        f"{INDENT}service: {config.service}",
        f"{INDENT}budgetingMethod: {_text(config.budgeting_method)}",
        f"{INDENT}objectives:",
        f"{INDENT * 2}- displayName: {config.display_name}",
        f"{INDENT * 3}target: {format_number(config.target)}",
        f"{INDENT * 3}timeWindow:",
        f"{INDENT * 4}- rolling: {'true' if config.time_window_rolling else 'false'}",
        f"{INDENT * 5}count: {format_number(config.time_window_count)}",
        f"{INDENT * 5}unit: {_text(config.time_window_unit)}",
    ]
    # A blank reference falls back to the inline indicator.
    if config.indicator_mode == IndicatorMode.REFERENCE and config.indicator_ref.strip():
        lines.append(f"{INDENT}indicatorRef: {config.indicator_ref}")
    else:
        lines.append(f"{INDENT}indicator:")
        lines.extend(_indent(indicator_lines(config), 2))
    return lines


def render(config: Configuration) -> str:
    """Render ``config`` as an OpenSLO document.

    Rendering does not depend on validity; an invalid configuration still
    produces a best-effort document.
    """
    if config.kind == DocumentKind.SLI:
        return "\n".join(_sli_lines(config))
    return "\n".join(_slo_lines(config))
