"""Common exceptions for the http-params-mcp package."""

from typing import Any, Optional


class FilterError(Exception):
    """Base class for filtering errors."""


class UnknownFlagError(FilterError):
    """Raised when a flag token cannot be resolved under the strict flag policy."""

    def __init__(self, token: Any, canonical_name: Optional[str] = None) -> None:
        super().__init__(f"Unknown filter flag: {token!r}")
        self.token = token
        self.canonical_name = canonical_name


class InvalidFilterOptionError(FilterError):
    """Raised when a filter option is missing or malformed."""

    def __init__(self, option: str, value: Any = None, reason: str = "invalid value") -> None:
        super().__init__(f"Filter option '{option}': {reason} ({value!r})")
        self.option = option
        self.value = value
