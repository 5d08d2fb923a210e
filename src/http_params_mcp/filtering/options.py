"""
Options normalization for filter calls.

Callers pass either a scalar default value or a mapping of filter options.
Both shapes are resolved once into a single OptionsRecord.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class ScalarOptions:
    """A bare scalar given as the options argument; it is the default value."""

    default: Any


@dataclass(frozen=True)
class StructuredOptions:
    """A mapping of filter options, optionally holding a 'default' entry."""

    values: Mapping[str, Any]


OptionsArg = Union[ScalarOptions, StructuredOptions, None]


@dataclass(frozen=True)
class OptionsRecord:
    """Canonical options: the default value plus the filter-specific mapping."""

    default: Any = None
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def has_default(self) -> bool:
        return self.default is not None


def to_options_arg(raw: Any) -> OptionsArg:
    """Tag a raw caller-supplied options argument."""
    if raw is None or isinstance(raw, (ScalarOptions, StructuredOptions)):
        return raw
    if isinstance(raw, Mapping):
        return StructuredOptions(values=raw)
    return ScalarOptions(default=raw)


def normalize_options(raw: Any) -> OptionsRecord:
    """Normalize an options argument into an OptionsRecord.

    Args:
        raw: None, a scalar default value, a mapping of options, a tagged
            OptionsArg, or an already normalized OptionsRecord

    Returns:
        The canonical OptionsRecord; an OptionsRecord input is returned as is
    """
    if isinstance(raw, OptionsRecord):
        return raw

    options = to_options_arg(raw)
    if isinstance(options, StructuredOptions):
        extra = dict(options.values)
        return OptionsRecord(default=extra.get("default"), extra=extra)
    if isinstance(options, ScalarOptions):
        return OptionsRecord(default=options.default, extra={"default": options.default})
    return OptionsRecord()
