"""Tests for filter id and flag resolution."""

import pytest

from http_params_mcp.constants import (
    FILTER_FLAG_ALLOW_FRACTION,
    FILTER_FLAG_ALLOW_HEX,
    FILTER_FLAG_ALLOW_OCTAL,
    FILTER_FLAG_ALLOW_THOUSAND,
    FILTER_FLAG_IPV4,
    FILTER_NULL_ON_FAILURE,
    FILTER_SANITIZE_STRING,
    FILTER_UNSAFE_RAW,
    FILTER_VALIDATE_BOOLEAN,
    FILTER_VALIDATE_EMAIL,
    FILTER_VALIDATE_FLOAT,
    FILTER_VALIDATE_INT,
)
from http_params_mcp.exceptions import UnknownFlagError
from http_params_mcp.filtering.resolver import canonical_flag_name, resolve_filter, resolve_flags


class TestResolveFilter:
    """Test filter spec resolution."""

    @pytest.mark.parametrize("spec", ["", None, 0, False])
    def test_empty_spec(self, spec):
        assert resolve_filter(spec) is None

    def test_names(self):
        assert resolve_filter("int") == FILTER_VALIDATE_INT
        assert resolve_filter("validate_int") == FILTER_VALIDATE_INT
        assert resolve_filter("boolean") == FILTER_VALIDATE_BOOLEAN
        assert resolve_filter("validate_email") == FILTER_VALIDATE_EMAIL
        assert resolve_filter("sanitize_string") == FILTER_SANITIZE_STRING
        assert resolve_filter("unsafe_raw") == FILTER_UNSAFE_RAW

    def test_unknown_name(self):
        assert resolve_filter("no_such_filter") is None

    def test_numeric(self):
        assert resolve_filter(FILTER_VALIDATE_FLOAT) == FILTER_VALIDATE_FLOAT
        assert resolve_filter(257.0) == FILTER_VALIDATE_INT
        assert resolve_filter(257) == FILTER_VALIDATE_INT

    def test_numeric_string_is_a_name(self):
        assert resolve_filter("257") is None

    def test_numeric_is_trusted(self):
        # No table lookup for numeric specs
        assert resolve_filter(9999) == 9999


class TestCanonicalFlagName:
    """Test flag name canonicalization."""

    def test_canonical(self):
        assert canonical_flag_name("allow_thousand") == "ALLOW_THOUSAND"
        assert canonical_flag_name(" Allow-Hex! ") == "ALLOWHEX"
        assert canonical_flag_name("null_on_failure") == "NULL_ON_FAILURE"


class TestResolveFlags:
    """Test flag set resolution."""

    def test_no_flags(self):
        assert resolve_flags(None, FILTER_VALIDATE_INT) == 0
        assert resolve_flags([], FILTER_VALIDATE_INT) == 0

    def test_numeric_tokens(self):
        assert resolve_flags(FILTER_FLAG_ALLOW_HEX, FILTER_VALIDATE_INT) == FILTER_FLAG_ALLOW_HEX
        assert resolve_flags("2", FILTER_VALIDATE_INT) == FILTER_FLAG_ALLOW_HEX
        assert resolve_flags([1, 2], FILTER_VALIDATE_INT) == 3

    def test_symbolic_tokens(self):
        assert resolve_flags("allow_hex", FILTER_VALIDATE_INT) == FILTER_FLAG_ALLOW_HEX
        assert resolve_flags(["allow_hex", "ALLOW_OCTAL"], FILTER_VALIDATE_INT) == (
            FILTER_FLAG_ALLOW_HEX | FILTER_FLAG_ALLOW_OCTAL
        )

    def test_mixed_tokens(self):
        flags = resolve_flags([FILTER_FLAG_ALLOW_FRACTION, "allow_thousand"], FILTER_VALIDATE_FLOAT)
        assert flags == FILTER_FLAG_ALLOW_FRACTION | FILTER_FLAG_ALLOW_THOUSAND

    def test_order_independent_and_additive(self):
        a, b = "allow_thousand", FILTER_FLAG_IPV4
        combined = resolve_flags([a, b], FILTER_VALIDATE_FLOAT)
        assert combined == resolve_flags([b, a], FILTER_VALIDATE_FLOAT)
        assert combined == resolve_flags([a], FILTER_VALIDATE_FLOAT) | resolve_flags([b], FILTER_VALIDATE_FLOAT)

    def test_unknown_name_contributes_nothing(self):
        assert resolve_flags("allow_everything", FILTER_VALIDATE_INT) == 0
        assert resolve_flags(["allow_hex", "typo"], FILTER_VALIDATE_INT) == FILTER_FLAG_ALLOW_HEX

    def test_mapping_values_are_tokens(self):
        assert resolve_flags({"a": "allow_hex"}, FILTER_VALIDATE_INT) == FILTER_FLAG_ALLOW_HEX
        assert resolve_flags({"x": 1, "y": "allow_hex"}, FILTER_VALIDATE_INT) == 3

    def test_other_token_types_ignored(self):
        assert resolve_flags([True, None, {"a": 1}], FILTER_VALIDATE_INT) == 0

    def test_null_on_failure_boolean(self):
        assert resolve_flags("null_on_failure", FILTER_VALIDATE_BOOLEAN) == FILTER_NULL_ON_FAILURE

    def test_null_on_failure_other_filter(self):
        assert resolve_flags("null_on_failure", FILTER_VALIDATE_INT) == 0
        assert resolve_flags("null_on_failure", FILTER_VALIDATE_INT, strict=True) == 0

    def test_null_on_failure_numeric_any_filter(self):
        assert resolve_flags(FILTER_NULL_ON_FAILURE, FILTER_VALIDATE_INT) == FILTER_NULL_ON_FAILURE

    def test_strict_unknown_name(self):
        with pytest.raises(UnknownFlagError) as exc_info:
            resolve_flags(["allow_hex", "alow_octal"], FILTER_VALIDATE_INT, strict=True)
        assert exc_info.value.canonical_name == "ALOW_OCTAL"

    def test_negative_tokens(self):
        assert resolve_flags(-1, FILTER_VALIDATE_INT) == 0
        with pytest.raises(UnknownFlagError):
            resolve_flags("-4", FILTER_VALIDATE_INT, strict=True)
