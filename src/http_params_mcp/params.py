"""Query and form parameter accessors."""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional
from urllib.parse import parse_qsl

from .filtering import filter_variable
from .utils.validators import is_scalar

logger = logging.getLogger(__name__)

SUBKEY_PATTERN = re.compile(r"\[([^\]]*)\]")


def _mangle_name(name: str) -> str:
    return name.replace(".", "_").replace(" ", "_")


def _insert_nested(container: dict[Any, Any], keys: list[str], value: str) -> None:
    key: Any = keys[0]
    if key == "":
        key = len(container)
    if len(keys) == 1:
        container[key] = value
        return
    child = container.get(key)
    if not isinstance(child, dict):
        child = {}
        container[key] = child
    _insert_nested(child, keys[1:], value)


def parse_params(raw: str) -> dict[str, Any]:
    """Parse a URL-encoded query string or form body into a parameter map.

    Blank values are kept and the last duplicate wins. Keys such as
    ``ids[]`` or ``user[name]`` build nested mappings, which the accessors
    treat as absent since only scalars are filtered.

    Args:
        raw: URL-encoded text, with or without a leading '?'

    Returns:
        Mapping of parameter names to strings or nested mappings
    """
    params: dict[str, Any] = {}
    for key, value in parse_qsl(raw.lstrip("?"), keep_blank_values=True):
        bracket = key.find("[")
        if bracket > 0 and key.endswith("]"):
            base = _mangle_name(key[:bracket])
            subkeys = SUBKEY_PATTERN.findall(key[bracket:])
            nested = params.get(base)
            if not isinstance(nested, dict):
                nested = {}
                params[base] = nested
            _insert_nested(nested, subkeys or [""], value)
        else:
            params[_mangle_name(key).replace("[", "_")] = value
    return params


def lookup_scalar(source: Mapping[str, Any], name: str) -> Optional[Any]:
    """Return the named entry if it is a scalar, else None."""
    value = source.get(name)
    if value is not None and not is_scalar(value):
        logger.debug(f"Parameter {name!r} is not scalar; treating it as absent")
        return None
    return value


def get_url_parameter(
    query: Mapping[str, Any],
    name: str,
    filter_spec: Any = "",
    options: Any = None,
    flags: Any = None,
    strict_flags: Optional[bool] = None,
) -> Any:
    """Filter a URL query parameter.

    Args:
        query: The request's query parameters
        name: Name of the parameter to filter
        filter_spec: Filter name or numeric id to apply
        options: Options mapping or a scalar default value
        flags: Flag bits, flag names, or a list of both
        strict_flags: Override the configured unknown-flag policy

    Returns:
        The filtered value, False if the filter fails, or the default value
        (None if no default is given) when the parameter is missing
    """
    value = lookup_scalar(query, name)
    return filter_variable(value, filter_spec, options, flags, strict_flags)


def get_form_parameter(
    form: Mapping[str, Any],
    name: str,
    filter_spec: Any = "",
    options: Any = None,
    flags: Any = None,
    strict_flags: Optional[bool] = None,
) -> Any:
    """Filter a submitted form parameter.

    Same contract as get_url_parameter(), reading from the form body.
    """
    value = lookup_scalar(form, name)
    return filter_variable(value, filter_spec, options, flags, strict_flags)


@dataclass
class RequestParams:
    """The query and form parameter maps of a single request."""

    query: dict[str, Any] = field(default_factory=dict)
    form: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_raw(cls, query_string: str = "", form_body: str = "") -> "RequestParams":
        """Build both maps from URL-encoded text."""
        return cls(query=parse_params(query_string), form=parse_params(form_body))

    def get_url_parameter(
        self,
        name: str,
        filter_spec: Any = "",
        options: Any = None,
        flags: Any = None,
        strict_flags: Optional[bool] = None,
    ) -> Any:
        return get_url_parameter(self.query, name, filter_spec, options, flags, strict_flags)

    def get_form_parameter(
        self,
        name: str,
        filter_spec: Any = "",
        options: Any = None,
        flags: Any = None,
        strict_flags: Optional[bool] = None,
    ) -> Any:
        return get_form_parameter(self.form, name, filter_spec, options, flags, strict_flags)
