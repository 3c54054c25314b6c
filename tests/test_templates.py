"""
Tests for the built-in templates.

Verifies:
- All templates load and produce valid configurations
- Templates are merged over the base with the identifier cleared
- Unknown names list the available templates
"""

import pytest

from openslo_editor.errors import TemplateNotFoundError
from openslo_editor.slo.edits import update_fields
from openslo_editor.slo.renderer import render
from openslo_editor.slo.spec import (
    DEFAULT_CONFIGURATION,
    DocumentKind,
    IndicatorMode,
    RatioMetric,
    ThresholdMetric,
)
from openslo_editor.slo.validator import validate
from openslo_editor.specs import from_template, list_templates, load_template_data, merge_partial

EXPECTED_TEMPLATES = [
    "availability",
    "latency",
    "sli-reference",
    "standalone-sli",
]


class TestListTemplates:
    def test_returns_all_templates(self):
        assert list_templates() == EXPECTED_TEMPLATES

    def test_missing_directory(self, tmp_path):
        assert list_templates(str(tmp_path / "nope")) == []


class TestLoadTemplate:
    @pytest.mark.parametrize("name", EXPECTED_TEMPLATES)
    def test_template_is_valid(self, name):
        config = from_template(name)
        assert validate(config) == {}, name

    @pytest.mark.parametrize("name", EXPECTED_TEMPLATES)
    def test_raw_data_is_partial(self, name):
        data = load_template_data(name)
        assert "name" in data
        assert "id" not in data

    def test_availability(self):
        config = from_template("availability")
        assert config.name == "api-availability"
        assert isinstance(config.indicator, RatioMetric)
        assert config.indicator.good is not None
        assert config.indicator.bad is None
        # Not in the template, so inherited from the defaults.
        assert config.service == "core-api"
        assert config.time_window_count == 28

    def test_latency(self):
        config = from_template("latency")
        assert isinstance(config.indicator, ThresholdMetric)
        assert config.indicator.value == 0.2
        assert config.target == 0.99

    def test_sli_reference_renders_indicator_ref(self):
        document = render(from_template("sli-reference"))
        assert "  indicatorRef: worker-latency-sli" in document
        assert "indicator:" not in document

    def test_standalone_sli(self):
        config = from_template("standalone-sli")
        assert config.kind == DocumentKind.SLI
        document = render(config)
        assert "  ratioMetric:\n    bad:\n" in document
        assert "good:" not in document

    def test_unknown_template(self):
        with pytest.raises(TemplateNotFoundError) as exc_info:
            from_template("does-not-exist")
        assert "availability" in str(exc_info.value)
        assert exc_info.value.available == EXPECTED_TEMPLATES

    def test_unknown_template_is_key_error(self):
        with pytest.raises(KeyError):
            load_template_data("does-not-exist")


class TestMerge:
    def test_identifier_cleared(self):
        base = update_fields(DEFAULT_CONFIGURATION, id="saved-id", service="payments")
        config = from_template("latency", base=base)
        assert config.id == ""
        assert config.service == "payments"

    def test_partial_indicator_replaces_base(self):
        config = merge_partial(
            DEFAULT_CONFIGURATION,
            {"indicator": {"type": "ratio", "total": {"query": "all"}}},
        )
        assert isinstance(config.indicator, RatioMetric)
        assert config.indicator.good is None

    def test_snake_case_keys(self):
        config = merge_partial(DEFAULT_CONFIGURATION, {"display_name": "Renamed", "indicator_mode": "reference"})
        assert config.display_name == "Renamed"
        assert config.indicator_mode == IndicatorMode.REFERENCE

    def test_custom_directory(self, tmp_path):
        (tmp_path / "mine.yaml").write_text("name: mine\nkind: SLI\n", encoding="utf-8")
        assert list_templates(str(tmp_path)) == ["mine"]
        config = from_template("mine", templates_dir=str(tmp_path))
        assert config.kind == DocumentKind.SLI
