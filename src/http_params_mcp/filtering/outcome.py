"""
Result types returned by the filter engine.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ResultKind(str, Enum):
    """The four shapes a filter call can produce."""

    FILTERED = "filtered"
    FAILURE = "failure"
    DEFAULT = "default"
    ABSENT = "absent"


@dataclass(frozen=True)
class FilterOutcome:
    """Tagged result of a filter call.

    ``value`` is what a plain call returns: the filtered value, ``False`` on
    failure, the default value, or ``None``.
    """

    kind: ResultKind
    value: Any = None

    @classmethod
    def filtered(cls, value: Any) -> "FilterOutcome":
        return cls(ResultKind.FILTERED, value)

    @classmethod
    def failure(cls) -> "FilterOutcome":
        return cls(ResultKind.FAILURE, False)

    @classmethod
    def default(cls, value: Any) -> "FilterOutcome":
        return cls(ResultKind.DEFAULT, value)

    @classmethod
    def absent(cls) -> "FilterOutcome":
        return cls(ResultKind.ABSENT, None)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "value": self.value}
