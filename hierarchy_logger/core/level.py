"""
Log level enumeration

Severity levels ordered by integer value, each with a syslog equivalent.
"""

from enum import IntEnum
from typing import Any, Dict, Optional


class Level(IntEnum):
    """
    Log level enumeration.

    One member per severity value. Comparison and equality use the
    integer value, never the name.
    """

    ALL = -2147483647
    TRACE = 5000        # Most verbose, detailed tracing
    DEBUG = 10000       # Debug information
    INFO = 20000        # Informational messages
    NOTICE = 25000      # Normal but significant events
    WARNING = 30000     # Warning messages
    ERROR = 40000       # Error messages
    CRITICAL = 50000    # Critical conditions
    ALERT = 60000       # Action must be taken immediately
    EMERGENCY = 70000   # System is unusable
    OFF = 2147483647    # Logging disabled

    def __str__(self) -> str:
        """String representation of log level."""
        return self.name

    @property
    def syslog_equivalent(self) -> int:
        """
        Get the syslog priority matching this level.

        Returns:
            Syslog priority (0 = emergency ... 7 = debug)
        """
        return SYSLOG_EQUIVALENTS[self]

    def is_greater_or_equal(self, other: "Level") -> bool:
        """Check whether this level is at least as severe as ``other``."""
        return int(self) >= int(other)

    @classmethod
    def to_level(cls, value: Any, default: Optional["Level"] = None) -> Optional["Level"]:
        """
        Convert an integer or a level name to a Level.

        Args:
            value: Level member, integer severity or level name
                   (case-insensitive, ``WARN`` is accepted for ``WARNING``)
            default: Value returned when the conversion is not possible

        Returns:
            Matching Level, or ``default``
        """
        if isinstance(value, cls):
            return value

        if isinstance(value, bool):
            return default

        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                return default

        if isinstance(value, str):
            name = value.strip().upper()
            return LEVEL_FROM_NAME.get(name, default)

        return default


SYSLOG_EQUIVALENTS: Dict[Level, int] = {
    Level.ALL: 7,
    Level.TRACE: 7,
    Level.DEBUG: 7,
    Level.INFO: 6,
    Level.NOTICE: 5,
    Level.WARNING: 4,
    Level.ERROR: 3,
    Level.CRITICAL: 2,
    Level.ALERT: 1,
    Level.EMERGENCY: 0,
    Level.OFF: 0,
}

# Reverse mapping, including the WARN alias
LEVEL_FROM_NAME: Dict[str, Level] = {level.name: level for level in Level}
LEVEL_FROM_NAME["WARN"] = Level.WARNING
