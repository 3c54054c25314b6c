"""SLO/SLI configuration core — model, edits, validation and rendering."""

from openslo_editor.slo.renderer import render
from openslo_editor.slo.spec import (
    DEFAULT_CONFIGURATION,
    BudgetingMethod,
    ComparisonOp,
    Configuration,
    DocumentKind,
    IndicatorMode,
    MetricSource,
    RatioMetric,
    ThresholdMetric,
    TimeWindowUnit,
)
from openslo_editor.slo.validator import is_valid, validate

__all__ = [
    "BudgetingMethod",
    "ComparisonOp",
    "Configuration",
    "DEFAULT_CONFIGURATION",
    "DocumentKind",
    "IndicatorMode",
    "MetricSource",
    "RatioMetric",
    "ThresholdMetric",
    "TimeWindowUnit",
    "is_valid",
    "render",
    "validate",
]
