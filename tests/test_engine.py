"""Tests for the filter engine."""

from unittest.mock import patch

import pytest

from http_params_mcp.constants import ENV_STRICT_FLAGS, FILTER_VALIDATE_BOOLEAN, FILTER_VALIDATE_INT
from http_params_mcp.filtering import ResultKind, apply_filter, filter_variable
from http_params_mcp.filtering.options import normalize_options


class TestAbsentValues:
    """Absent input never reaches a filter."""

    def test_absent_without_default(self):
        outcome = apply_filter(None, "int")
        assert outcome.kind == ResultKind.ABSENT
        assert outcome.value is None

    @pytest.mark.parametrize("options", [7, {"default": 7}, {"default": 7, "min_range": 100}])
    def test_absent_with_default(self, options):
        outcome = apply_filter(None, "int", options)
        assert outcome.kind == ResultKind.DEFAULT
        assert outcome.value == 7

    def test_default_ignores_filter_and_flags(self):
        assert filter_variable(None, "", "fallback") == "fallback"
        assert filter_variable(None, "no_such_filter", "fallback", ["bogus"], strict_flags=True) == "fallback"
        assert filter_variable(None, "int", normalize_options("x")) == "x"


class TestNoFilter:
    """A present value with no resolvable filter always fails."""

    @pytest.mark.parametrize("spec", ["", None, 0, "no_such_filter"])
    def test_failure(self, spec):
        outcome = apply_filter("42", spec)
        assert outcome.kind == ResultKind.FAILURE
        assert outcome.value is False

    def test_numeric_string_is_not_an_id(self):
        assert filter_variable("42", "257") is False
        assert filter_variable("42", 257) == 42

    def test_failure_even_with_default(self):
        assert filter_variable("42", "", {"default": 7}) is False
        assert filter_variable("42", "", 7) is False


class TestDispatch:
    """Resolved calls are passed to the primitives."""

    def test_integer(self):
        assert filter_variable("42", "int") == 42
        assert filter_variable("42", FILTER_VALIDATE_INT) == 42
        assert filter_variable("42", "validate_int") == 42

    def test_integer_failure(self):
        assert filter_variable("abc", "int") is False

    def test_integer_failure_with_default(self):
        outcome = apply_filter("abc", "int", {"default": 7})
        assert outcome.kind == ResultKind.DEFAULT
        assert outcome.value == 7

    def test_options_reach_filter(self):
        assert filter_variable("50", "int", {"min_range": 1, "max_range": 10}) is False

    def test_flags_reach_filter(self):
        assert filter_variable("0xff", "int", flags="allow_hex") == 255
        assert filter_variable("1,000", "float", flags=["allow_thousand"]) == 1000.0

    def test_sanitize(self):
        assert filter_variable("<i>x</i>", "sanitize_string") == "x"

    def test_callback_error_stays_inside(self):
        def reject(text):
            raise ValueError("bad")

        outcome = apply_filter("x", "callback", {"callback": reject})
        assert outcome.kind == ResultKind.FAILURE


class TestBooleanNullOnFailure:
    """The null_on_failure flag name only applies to the boolean filter."""

    def test_valid_values(self):
        assert filter_variable("on", "boolean", flags=["null_on_failure"]) is True
        assert filter_variable("off", "boolean", flags=["null_on_failure"]) is False

    def test_failure_is_absent(self):
        outcome = apply_filter("maybe", FILTER_VALIDATE_BOOLEAN, flags=["null_on_failure"])
        assert outcome.kind == ResultKind.ABSENT
        assert outcome.value is None

    def test_failure_without_flag(self):
        outcome = apply_filter("maybe", "boolean")
        assert outcome.kind == ResultKind.FAILURE

    def test_other_filter_ignores_name(self):
        assert filter_variable("abc", "int", flags=["null_on_failure"]) is False


class TestFlagPolicy:
    """Unknown flag names are ignored unless the strict policy is on."""

    def test_lenient(self):
        assert filter_variable("42", "int", flags=["no_such_flag"], strict_flags=False) == 42

    def test_strict(self):
        outcome = apply_filter("42", "int", flags=["no_such_flag"], strict_flags=True)
        assert outcome.kind == ResultKind.FAILURE

    def test_policy_from_environment(self):
        with patch.dict("os.environ", {ENV_STRICT_FLAGS: "true"}):
            assert filter_variable("42", "int", flags="no_such_flag") is False
        with patch.dict("os.environ", {ENV_STRICT_FLAGS: "false"}):
            assert filter_variable("42", "int", flags="no_such_flag") == 42
