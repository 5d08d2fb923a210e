#!/usr/bin/env python3
"""MCP Server for filtering HTTP request parameters using FastMCP.

This server exposes tools that validate and sanitize query string and form
parameters, mirroring the url_param/form_param helpers used in templates.
"""

import json
import logging
from typing import Annotated, Any

from fastmcp import FastMCP

from .config import get_settings
from .constants import FILTER_NAMES, FILTER_NULL_ON_FAILURE, FLAG_CONSTANT_PREFIX, FLAG_CONSTANTS
from .filtering import apply_filter
from .params import lookup_scalar, parse_params
from .utils.decorators import handle_filter_errors

logger = logging.getLogger(__name__)

mcp: FastMCP = FastMCP(
    "http-params-mcp",
    instructions="Validate and sanitize HTTP query string and form parameters with named filters, options and flags.",
)

FilterArg = Annotated[
    Any,
    "Filter name (e.g. 'int', 'boolean', 'validate_email', 'string') or numeric filter id. Empty means no filter and fails.",
]
OptionsArgument = Annotated[
    Any,
    "Either a scalar default value, or an object of filter options such as {'default': 1, 'min_range': 1}.",
]
FlagsArg = Annotated[
    Any,
    "A flag bit mask, a flag name such as 'allow_thousand' or 'null_on_failure', or a list of both.",
]


def _success(data: dict[str, Any]) -> str:
    return json.dumps({"success": True, "data": data}, indent=2)


@handle_filter_errors
def filter_value(
    value: Annotated[Any, "Scalar value to filter; null means the value is absent"],
    filter: FilterArg = "",
    options: OptionsArgument = None,
    flags: FlagsArg = None,
) -> str:
    """Filter a single value with a validation or sanitization filter.

    Returns the filtered value together with the kind of result:
    'filtered', 'failure', 'default' or 'absent'.
    """
    if value is not None and not isinstance(value, (str, int, float, bool)):
        raise ValueError("Only scalar values can be filtered")

    outcome = apply_filter(value, filter, options, flags)
    return _success(outcome.to_dict())


@handle_filter_errors
def url_param(
    query_string: Annotated[str, "URL-encoded query string, e.g. 'page=2&sort=asc'"],
    name: Annotated[str, "Name of the query parameter to filter"],
    filter: FilterArg = "",
    options: OptionsArgument = None,
    flags: FlagsArg = None,
) -> str:
    """Filter a URL query parameter by name.

    Missing or non-scalar parameters (such as 'ids[]=1') are treated as absent
    and fall back to the default value.
    """
    value = lookup_scalar(parse_params(query_string), name)
    outcome = apply_filter(value, filter, options, flags)
    return _success({"name": name, **outcome.to_dict()})


@handle_filter_errors
def form_param(
    form_body: Annotated[str, "URL-encoded form body, e.g. 'email=a%40example.com'"],
    name: Annotated[str, "Name of the form parameter to filter"],
    filter: FilterArg = "",
    options: OptionsArgument = None,
    flags: FlagsArg = None,
) -> str:
    """Filter a submitted form parameter by name.

    Missing or non-scalar parameters are treated as absent and fall back to
    the default value.
    """
    value = lookup_scalar(parse_params(form_body), name)
    outcome = apply_filter(value, filter, options, flags)
    return _success({"name": name, **outcome.to_dict()})


@handle_filter_errors
def list_filters() -> str:
    """List the filter names accepted by the filtering tools and their ids."""
    filters: dict[int, list[str]] = {}
    for name, filter_id in FILTER_NAMES.items():
        filters.setdefault(filter_id, []).append(name)

    return _success({
        "filters": [
            {"id": filter_id, "name": names[0], "aliases": names[1:]} for filter_id, names in sorted(filters.items())
        ]
    })


@handle_filter_errors
def list_flags() -> str:
    """List the flag names accepted by the filtering tools and their bit values."""
    flags = [
        {"name": constant[len(FLAG_CONSTANT_PREFIX) :].lower(), "value": value}
        for constant, value in FLAG_CONSTANTS.items()
    ]
    flags.append({"name": "null_on_failure", "value": FILTER_NULL_ON_FAILURE, "filters": ["boolean"]})
    return _success({"flags": flags})


# Registered without rebinding so the tool functions stay directly callable
for tool in (filter_value, url_param, form_param, list_filters, list_flags):
    mcp.tool()(tool)


def main() -> None:
    """Entry point for the MCP server."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info(f"Starting http-params-mcp (strict_flags={settings.strict_flags})")
    mcp.run()


if __name__ == "__main__":
    main()
