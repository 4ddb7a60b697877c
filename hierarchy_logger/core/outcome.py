"""
Operation outcome returned by appender lifecycle methods
"""

from dataclasses import dataclass
from enum import Enum


class OutcomeKind(Enum):
    """Kind of result of an activate/append/close call."""

    OK = "ok"
    CONFIG_ERROR = "config_error"
    IO_ERROR = "io_error"


@dataclass(frozen=True)
class Outcome:
    """
    Tagged result of an appender operation.

    Appenders return these instead of raising; the dispatching code decides
    to self-close and report a diagnostic when the outcome is not OK.
    """

    kind: OutcomeKind = OutcomeKind.OK
    message: str = ""

    @property
    def ok(self) -> bool:
        """True if the operation succeeded."""
        return self.kind is OutcomeKind.OK

    @classmethod
    def success(cls) -> "Outcome":
        return _SUCCESS

    @classmethod
    def config_error(cls, message: str) -> "Outcome":
        return cls(OutcomeKind.CONFIG_ERROR, message)

    @classmethod
    def io_error(cls, message: str) -> "Outcome":
        return cls(OutcomeKind.IO_ERROR, message)

    def __bool__(self) -> bool:
        return self.ok


_SUCCESS = Outcome()
