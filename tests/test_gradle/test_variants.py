"""Tests for variant parsing and selection."""

import pytest

from koverstep.core.errors import (
    ModuleNotFoundInProjectError,
    VariantFilterError,
    VariantNotFoundError,
)
from koverstep.gradle.variants import filter_variants, parse_variants


TASKS_OUTPUT = """
app:koverXmlReport - Generates XML for all variants
app:koverXmlReportDebug - Generates XML for debug
app:koverXmlReportRelease - Generates XML for release
app:koverXmlReportDebug - Duplicate line
lib:koverXmlReportDebug - Generates XML for debug
feature:nested:koverXmlReportStaging - Generates XML for staging
koverXmlReportDemo - Root project task
app:assembleDebug - Assembles debug
"""


class TestParseVariants:
    """Test parsing of the `gradlew tasks --all` listing."""

    def test_groups_variants_by_module(self):
        """Variants are collected per module in first-seen order."""
        variants = parse_variants("koverXmlReport", TASKS_OUTPUT)

        assert variants["app"] == ["Debug", "Release"]
        assert variants["lib"] == ["Debug"]

    def test_bare_task_is_not_a_variant(self):
        """The task without a suffix is skipped."""
        variants = parse_variants("koverXmlReport", "app:koverXmlReport - All\n")

        assert variants == {}

    def test_nested_module_keeps_full_path(self):
        """Only the last colon separates the module from the task."""
        variants = parse_variants("koverXmlReport", TASKS_OUTPUT)

        assert variants["feature:nested"] == ["Staging"]

    def test_root_project_tasks_use_empty_module(self):
        """Tasks without a module prefix belong to the root project."""
        variants = parse_variants("koverXmlReport", TASKS_OUTPUT)

        assert variants[""] == ["Demo"]

    def test_unrelated_tasks_are_ignored(self):
        """Tasks of other names never show up."""
        variants = parse_variants("koverXmlReport", TASKS_OUTPUT)

        assert all("assemble" not in v for vs in variants.values() for v in vs)

    def test_empty_output(self):
        """An empty listing has no variants."""
        assert parse_variants("koverXmlReport", "") == {}


class TestFilterVariants:
    """Test module/variant selection."""

    @pytest.fixture
    def variants(self):
        return {
            "app": ["Debug", "Release"],
            "lib": ["Debug"],
        }

    def test_no_selection_returns_everything(self, variants):
        """Empty module and variant select all."""
        assert filter_variants("", "", variants) == variants

    def test_module_selection(self, variants):
        """Only the selected module is kept."""
        assert filter_variants("lib", "", variants) == {"lib": ["Debug"]}

    def test_module_match_is_case_sensitive(self, variants):
        """`App` does not select `app`."""
        with pytest.raises(ModuleNotFoundInProjectError, match="module not found: App"):
            filter_variants("App", "", variants)

    def test_variant_match_ignores_case(self, variants):
        """`debug` selects `Debug` in every module, keeping Gradle casing."""
        result = filter_variants("", "debug", variants)

        assert result == {"app": ["Debug"], "lib": ["Debug"]}

    def test_module_and_variant(self, variants):
        """Both selectors combine."""
        assert filter_variants("app", "RELEASE", variants) == {"app": ["Release"]}

    def test_variant_not_found(self, variants):
        """An unknown variant raises VariantNotFoundError."""
        with pytest.raises(VariantNotFoundError, match="variant Staging not found"):
            filter_variants("", "Staging", variants)

    def test_variant_not_in_selected_module(self, variants):
        """The variant must exist in the selected module."""
        with pytest.raises(VariantNotFoundError):
            filter_variants("lib", "Release", variants)

    def test_no_variants_at_all(self):
        """A project without the task cannot be built."""
        with pytest.raises(VariantNotFoundError):
            filter_variants("", "", {})

    def test_errors_share_base_class(self, variants):
        """Both selection errors are VariantFilterError."""
        with pytest.raises(VariantFilterError):
            filter_variants("missing", "", variants)
        with pytest.raises(VariantFilterError):
            filter_variants("", "missing", variants)

    def test_filtering_is_idempotent(self, variants):
        """Filtering an already filtered selection changes nothing."""
        once = filter_variants("app", "debug", variants)

        assert filter_variants("app", "debug", once) == once

    def test_input_is_not_modified(self, variants):
        """The full catalog stays intact for printing."""
        filter_variants("app", "debug", variants)

        assert variants == {"app": ["Debug", "Release"], "lib": ["Debug"]}
