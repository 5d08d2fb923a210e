"""Tests for options normalization."""

from http_params_mcp.filtering.options import (
    OptionsRecord,
    ScalarOptions,
    StructuredOptions,
    normalize_options,
    to_options_arg,
)


class TestNormalizeOptions:
    """Test the scalar-or-mapping options argument."""

    def test_none(self):
        record = normalize_options(None)
        assert record.default is None
        assert record.has_default is False
        assert record.extra == {}

    def test_scalar_default(self):
        record = normalize_options(7)
        assert record.default == 7
        assert record.extra == {"default": 7}

    def test_string_default(self):
        record = normalize_options("")
        assert record.default == ""
        assert record.has_default is True

    def test_mapping_with_default(self):
        record = normalize_options({"default": 5, "min_range": 1})
        assert record.default == 5
        assert record.extra == {"default": 5, "min_range": 1}

    def test_mapping_without_default(self):
        record = normalize_options({"max_range": 10})
        assert record.has_default is False
        assert record.extra == {"max_range": 10}

    def test_mapping_is_copied(self):
        raw = {"min_range": 1}
        record = normalize_options(raw)
        raw["min_range"] = 99
        assert record.extra["min_range"] == 1

    def test_idempotent(self):
        first = normalize_options(42)
        assert normalize_options(first) is first
        assert normalize_options(first).default == 42

        structured = normalize_options({"default": "x", "regexp": "/x/"})
        assert normalize_options(structured).default == "x"

    def test_tagged_variants(self):
        assert normalize_options(ScalarOptions(3)) == OptionsRecord(default=3, extra={"default": 3})
        assert normalize_options(StructuredOptions({"default": 3})).default == 3


class TestToOptionsArg:
    """Test tagging of raw options arguments."""

    def test_tags(self):
        assert to_options_arg(None) is None
        assert to_options_arg(1) == ScalarOptions(1)
        assert to_options_arg({"a": 1}) == StructuredOptions({"a": 1})

    def test_tagged_passthrough(self):
        tagged = ScalarOptions("a")
        assert to_options_arg(tagged) is tagged
