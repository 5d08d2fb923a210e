"""
Filter identifier and flag resolution.
"""

import logging
import re
from collections.abc import Mapping
from typing import Any, Iterable, Optional

from ..constants import (
    FILTER_NAMES,
    FILTER_NULL_ON_FAILURE,
    FILTER_VALIDATE_BOOLEAN,
    FLAG_CONSTANT_PREFIX,
    FLAG_CONSTANTS,
    NULL_ON_FAILURE_NAME,
)
from ..exceptions import UnknownFlagError

logger = logging.getLogger(__name__)

NON_FLAG_CHARACTERS = re.compile(r"[^a-zA-Z0-9_]")
NUMERIC_STRING = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")
INTEGER_STRING = re.compile(r"^\s*[+-]?\d+\s*$")


def resolve_filter(filter_spec: Any) -> Optional[int]:
    """Resolve a filter name or numeric code to a filter id.

    Args:
        filter_spec: Filter name, numeric id, or an empty value

    Returns:
        The filter id, or None if no filter was requested or the name is unknown
    """
    if not filter_spec:
        return None

    if isinstance(filter_spec, str):
        filter_id = FILTER_NAMES.get(filter_spec)
        if filter_id is None:
            logger.debug(f"Unknown filter name: {filter_spec!r}")
        return filter_id

    if isinstance(filter_spec, (int, float)):
        try:
            return int(filter_spec) or None
        except (OverflowError, ValueError):
            return None

    logger.debug(f"Unsupported filter spec type: {type(filter_spec).__name__}")
    return None


def canonical_flag_name(token: str) -> str:
    """Strip everything but letters, digits and underscores, then uppercase."""
    return NON_FLAG_CHARACTERS.sub("", token).upper()


def _flag_tokens(flags: Any) -> list[Any]:
    if flags is None:
        return []
    if isinstance(flags, Mapping):
        return list(flags.values())
    if isinstance(flags, (list, tuple, set, frozenset)):
        return list(flags)
    return [flags]


def _numeric_flag(token: Any) -> Optional[int]:
    """Return the integer value of a numeric token, or None if it is not numeric."""
    if isinstance(token, bool):
        return None
    if isinstance(token, str):
        if INTEGER_STRING.match(token):
            return int(token)
        if not NUMERIC_STRING.match(token):
            return None
        token = float(token)
    if isinstance(token, (int, float)):
        try:
            return int(token)
        except (OverflowError, ValueError):
            # inf and nan
            return -1
    return None


def resolve_flag_token(token: Any, filter_id: Optional[int], strict: bool = False) -> int:
    """Resolve a single flag token to its bit value.

    Raises:
        UnknownFlagError: In strict mode, for unknown names and negative numbers
    """
    numeric = _numeric_flag(token)
    if numeric is not None:
        if numeric < 0:
            if strict:
                raise UnknownFlagError(token)
            logger.debug(f"Ignoring negative flag token {token!r}")
            return 0
        return numeric

    if not isinstance(token, str):
        logger.debug(f"Ignoring flag token of type {type(token).__name__}")
        return 0

    name = canonical_flag_name(token)
    if name == NULL_ON_FAILURE_NAME:
        if filter_id == FILTER_VALIDATE_BOOLEAN:
            return FILTER_NULL_ON_FAILURE
        logger.debug(f"Flag {name} has no effect on filter {filter_id}")
        return FLAG_CONSTANTS.get(FLAG_CONSTANT_PREFIX + name, 0)

    value = FLAG_CONSTANTS.get(FLAG_CONSTANT_PREFIX + name)
    if value is None:
        if strict:
            raise UnknownFlagError(token, name)
        logger.debug(f"Unknown flag {token!r} ignored")
        return 0
    return value


def resolve_flags(flags: Any, filter_id: Optional[int], strict: bool = False) -> int:
    """Combine flag tokens into a single bit mask.

    Args:
        flags: A single token or an iterable of tokens; each token is either a
            numeric bit mask or a symbolic flag name such as "allow_thousand"
        filter_id: The resolved filter id; needed for the NULL_ON_FAILURE case
        strict: Raise UnknownFlagError instead of ignoring unknown names

    Returns:
        The bitwise OR of all resolved tokens (0 when no flags are given)
    """
    tokens: Iterable[Any] = _flag_tokens(flags)
    flag_set = 0
    for token in tokens:
        flag_set |= resolve_flag_token(token, filter_id, strict)
    return flag_set
