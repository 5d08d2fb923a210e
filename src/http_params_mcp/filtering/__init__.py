"""
Request Parameter Filtering Module

This module resolves filter calls and applies validation and sanitization
filters to scalar request parameters.

Key Components:
- normalize_options: Scalar default or options mapping -> OptionsRecord
- resolve_filter / resolve_flags: Filter names and flag tokens -> ids and bits
- run_filter / filter_var: The validate/sanitize primitives
- apply_filter / filter_variable: The full filter call

Usage:
    from http_params_mcp.filtering import filter_variable

    page = filter_variable("42", "int", {"default": 1, "min_range": 1})
"""

from .engine import apply_filter, filter_variable
from .options import OptionsRecord, ScalarOptions, StructuredOptions, normalize_options
from .outcome import FilterOutcome, ResultKind
from .primitives import filter_var, run_filter
from .resolver import canonical_flag_name, resolve_filter, resolve_flags

__all__ = [
    "FilterOutcome",
    "OptionsRecord",
    "ResultKind",
    "ScalarOptions",
    "StructuredOptions",
    "apply_filter",
    "canonical_flag_name",
    "filter_var",
    "filter_variable",
    "normalize_options",
    "resolve_filter",
    "resolve_flags",
    "run_filter",
]
