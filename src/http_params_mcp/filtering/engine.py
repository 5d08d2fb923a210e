"""
Filter engine: resolves a filter call and dispatches it to a primitive.
"""

import logging
from typing import Any, Optional

from ..config import get_settings
from ..exceptions import UnknownFlagError
from .options import normalize_options
from .outcome import FilterOutcome
from .primitives import run_filter
from .resolver import resolve_filter, resolve_flags

logger = logging.getLogger(__name__)


def apply_filter(
    value: Any,
    filter_spec: Any = "",
    options: Any = None,
    flags: Any = None,
    strict_flags: Optional[bool] = None,
) -> FilterOutcome:
    """Filter a value by validating or sanitizing it.

    Validation checks whether the value meets certain qualifications but does
    not change it (apart from type conversion). Sanitization may alter the
    value by removing or encoding undesired characters; it does not validate.

    Args:
        value: Scalar to filter, or None if the value is absent
        filter_spec: Filter name (e.g. "int", "validate_email") or numeric id;
            an empty value means no filter and yields a failure
        options: Either a mapping of filter options (e.g. {"default": 42,
            "min_range": 1}) or a scalar default value used when value is None
        flags: A bit mask, a flag name such as "allow_thousand", or a list of
            both; names map to the FILTER_FLAG_* constants
        strict_flags: Fail on unknown flag names; defaults to the configured
            policy

    Returns:
        FilterOutcome holding the filtered value, the failure sentinel (False),
        the default value, or None
    """
    record = normalize_options(options)

    if value is None:
        if record.has_default:
            return FilterOutcome.default(record.default)
        return FilterOutcome.absent()

    filter_id = resolve_filter(filter_spec)
    if filter_id is None:
        logger.debug(f"No filter resolvable from {filter_spec!r}")
        return FilterOutcome.failure()

    if strict_flags is None:
        strict_flags = get_settings().strict_flags

    try:
        flag_set = resolve_flags(flags, filter_id, strict=strict_flags)
    except UnknownFlagError as e:
        logger.warning(f"Rejecting filter call: {e}")
        return FilterOutcome.failure()

    return run_filter(value, filter_id, record, flag_set)


def filter_variable(
    value: Any,
    filter_spec: Any = "",
    options: Any = None,
    flags: Any = None,
    strict_flags: Optional[bool] = None,
) -> Any:
    """Filter a value and return the plain result.

    Returns either the filtered value, False if the filter fails, the given
    default value, or None if the value is absent and no default is given.
    See apply_filter() for the arguments.
    """
    return apply_filter(value, filter_spec, options, flags, strict_flags).value
