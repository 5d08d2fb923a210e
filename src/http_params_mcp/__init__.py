"""Validate and sanitize HTTP query and form parameters."""

from .filtering import apply_filter, filter_variable
from .params import RequestParams, get_form_parameter, get_url_parameter

__version__ = "1.0.0"
__all__ = [
    "RequestParams",
    "apply_filter",
    "filter_variable",
    "get_form_parameter",
    "get_url_parameter",
]
