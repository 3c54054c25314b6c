"""Editor configuration model for OpenSLO SLO and SLI documents."""

from __future__ import annotations

import math
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class DocumentKind(str, Enum):
    """Top-level OpenSLO document kind."""

    SLO = "SLO"
    SLI = "SLI"


class IndicatorMode(str, Enum):
    """Whether an SLO embeds its indicator or points to a shared SLI."""

    INLINE = "inline"
    REFERENCE = "reference"


class BudgetingMethod(str, Enum):
    """Error budget accounting strategy."""

    OCCURRENCES = "occurrences"
    TIMESLICES = "timeslices"


class TimeWindowUnit(str, Enum):
    """Unit of an objective's time window."""

    DAY = "d"
    HOUR = "h"
    MINUTE = "m"
    WEEK = "w"

    @classmethod
    def _missing_(cls, value: object) -> TimeWindowUnit | None:
        if isinstance(value, str):
            return _UNIT_ALIASES.get(value.strip().lower())
        return None


_UNIT_ALIASES = {
    "day": TimeWindowUnit.DAY,
    "hour": TimeWindowUnit.HOUR,
    "minute": TimeWindowUnit.MINUTE,
    "week": TimeWindowUnit.WEEK,
}


class ComparisonOp(str, Enum):
    """Comparison operator for threshold metrics."""

    LT = "lt"
    LTE = "lte"  # less than or equal (e.g., latency <= 0.5s)
    GT = "gt"
    GTE = "gte"

    @classmethod
    def _missing_(cls, value: object) -> ComparisonOp | None:
        if isinstance(value, str):
            return _OP_SYMBOLS.get(value.strip())
        return None


_OP_SYMBOLS = {
    "<": ComparisonOp.LT,
    "<=": ComparisonOp.LTE,
    ">": ComparisonOp.GT,
    ">=": ComparisonOp.GTE,
}


def _blank_if_none(value: Any) -> Any:
    return "" if value is None else value


def _known_member(enum_cls: type[Enum], value: Any) -> Any:
    """Convert ``value`` to a member of ``enum_cls`` where one matches.

    Unrecognised strings are kept as entered so they reach the document
    verbatim.
    """
    if isinstance(value, str) and not isinstance(value, Enum):
        try:
            return enum_cls(value)
        except ValueError:
            return value
    return value


def coerce_number(value: Any) -> int | float | None:
    """Coerce user-entered numeric input, mapping garbage to ``None``.

    Accepts ints, floats and numeric strings. Booleans, blank or
    non-numeric strings, NaN and infinities are all treated as missing.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            pass
        try:
            value = float(text)
        except ValueError:
            return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    return None


class _Model(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class MetricSource(_Model):
    """A metrics backend plus the query evaluated against it."""

    type: str = Field(default="prometheus", description="Backend type, e.g. prometheus")
    query: str = ""

    @field_validator("query", mode="before")
    @classmethod
    def _blank_query(cls, value: Any) -> Any:
        return _blank_if_none(value)


class ThresholdMetric(_Model):
    """A single query compared against a value."""

    type: Literal["threshold"] = "threshold"
    source: MetricSource = Field(default_factory=MetricSource)
    operator: ComparisonOp = ComparisonOp.LTE
    value: Union[int, float, None] = None

    @field_validator("value", mode="before")
    @classmethod
    def _coerce_value(cls, value: Any) -> int | float | None:
        return coerce_number(value)


class RatioMetric(_Model):
    """Good-or-bad event count over a total count."""

    type: Literal["ratio"] = "ratio"
    good: MetricSource | None = None
    bad: MetricSource | None = None
    total: MetricSource = Field(default_factory=MetricSource)


Indicator = Annotated[Union[ThresholdMetric, RatioMetric], Field(discriminator="type")]


def _default_indicator() -> ThresholdMetric:
    return ThresholdMetric(
        source=MetricSource(
            type="prometheus",
            query='http_request_duration_seconds_bucket{le="0.5"}',
        ),
        operator=ComparisonOp.LTE,
        value=0.5,
    )


class Configuration(_Model):
    """Immutable snapshot of everything the editor knows about a document.

    Objective fields (``service``, ``target``, time window, indicator mode)
    only matter when ``kind`` is SLO; an SLI always defines its indicator
    in place.
    """

    id: str = Field(default="", description="Library identifier, empty until first save")
    api_version: str = "openslo/v1"
    kind: DocumentKind = DocumentKind.SLO
    name: str = "my-service-availability"
    display_name: str = "My Service Availability"
    description: str = "Availability SLO for the core API service"
    service: str = "core-api"
    app: str = Field(default="", description="Rendered as metadata.labels.app")

    budgeting_method: Union[BudgetingMethod, str] = Field(
        default=BudgetingMethod.OCCURRENCES, union_mode="left_to_right"
    )
    target: Union[int, float, None] = Field(default=0.999, description="Fraction in [0, 1]")
    time_window_count: Union[int, float, None] = 28
    time_window_unit: Union[TimeWindowUnit, str] = Field(
        default=TimeWindowUnit.DAY, union_mode="left_to_right"
    )
    time_window_rolling: bool = True

    indicator_mode: IndicatorMode = IndicatorMode.INLINE
    indicator_ref: str = ""
    indicator: Indicator = Field(default_factory=_default_indicator)

    @field_validator("target", "time_window_count", mode="before")
    @classmethod
    def _coerce_numbers(cls, value: Any) -> int | float | None:
        return coerce_number(value)

    @field_validator(
        "id", "name", "display_name", "description", "service", "app", "indicator_ref", mode="before"
    )
    @classmethod
    def _blank_strings(cls, value: Any) -> Any:
        return _blank_if_none(value)

    @field_validator("budgeting_method", mode="before")
    @classmethod
    def _budgeting_method(cls, value: Any) -> Any:
        return _known_member(BudgetingMethod, value)

    @field_validator("time_window_unit", mode="before")
    @classmethod
    def _time_window_unit(cls, value: Any) -> Any:
        return _known_member(TimeWindowUnit, value)

    @property
    def defines_indicator_inline(self) -> bool:
        """True when the metric definition is part of this document."""
        return self.kind == DocumentKind.SLI or self.indicator_mode == IndicatorMode.INLINE

    def to_dict(self) -> dict[str, Any]:
        """Serialize with camelCase keys, the persisted shape."""
        return self.model_dump(mode="json", by_alias=True)


DEFAULT_CONFIGURATION = Configuration()
