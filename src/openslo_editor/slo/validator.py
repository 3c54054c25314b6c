"""Field-level validation of editor configurations.

Every rule runs on every call; the result maps a field key to a message and
an empty mapping means the configuration can be exported.
"""

from __future__ import annotations

import re

from openslo_editor.slo.spec import (
    Configuration,
    DocumentKind,
    IndicatorMode,
    MetricSource,
    RatioMetric,
    ThresholdMetric,
)

NAME_PATTERN = re.compile(r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$")

# Field keys consumed by the presentation layer.
NAME = "name"
DISPLAY_NAME = "displayName"
SERVICE = "service"
TARGET = "target"
TIME_WINDOW_COUNT = "timeWindowCount"
INDICATOR_REF = "indicatorRef"
THRESHOLD_QUERY = "thresholdQuery"
THRESHOLD_VALUE = "thresholdValue"
RATIO_TOTAL = "ratioTotal"
RATIO_GOOD_BAD = "ratioGoodBad"


def _blank(text: str | None) -> bool:
    return not text or not text.strip()


def _has_query(source: MetricSource | None) -> bool:
    return source is not None and not _blank(source.query)


def _validate_metadata(config: Configuration, errors: dict[str, str]) -> None:
    if _blank(config.name):
        errors[NAME] = "Name is required"
    elif not NAME_PATTERN.match(config.name):
        errors[NAME] = "Must be lowercase alphanumeric (kebab-case)"

    if _blank(config.display_name):
        errors[DISPLAY_NAME] = "Display Name is required"


def _validate_objective(config: Configuration, errors: dict[str, str]) -> None:
    if _blank(config.service):
        errors[SERVICE] = "Service is required"

    if config.target is None:
        errors[TARGET] = "Target is required"
    elif config.target < 0 or config.target > 1:
        errors[TARGET] = "Must be between 0.0 and 1.0"

    count = config.time_window_count
    if not count or count <= 0 or (isinstance(count, float) and not count.is_integer()):
        errors[TIME_WINDOW_COUNT] = "Must be a positive integer"

    if config.indicator_mode == IndicatorMode.REFERENCE and _blank(config.indicator_ref):
        errors[INDICATOR_REF] = "SLI Reference name is required"


def _validate_indicator(config: Configuration, errors: dict[str, str]) -> None:
    indicator = config.indicator
    if isinstance(indicator, ThresholdMetric):
        if not _has_query(indicator.source):
            errors[THRESHOLD_QUERY] = "Query is required"
        if indicator.value is None:
            errors[THRESHOLD_VALUE] = "Threshold value is required"
    elif isinstance(indicator, RatioMetric):
        if not _has_query(indicator.total):
            errors[RATIO_TOTAL] = "Total query is required"
        if not _has_query(indicator.good) and not _has_query(indicator.bad):
            errors[RATIO_GOOD_BAD] = "Either Good or Bad metric query is required"


def validate(config: Configuration) -> dict[str, str]:
    """Return a mapping of field key to problem description.

    Never raises. Description, labels, budgeting method, API version and
    time window unit/rolling are accepted as-is.
    """
    errors: dict[str, str] = {}
    _validate_metadata(config, errors)
    if config.kind == DocumentKind.SLO:
        _validate_objective(config, errors)
    if config.defines_indicator_inline:
        _validate_indicator(config, errors)
    return errors


def is_valid(config: Configuration) -> bool:
    """True when the configuration may be copied, downloaded or saved."""
    return not validate(config)
