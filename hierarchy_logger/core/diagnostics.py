"""
Internal diagnostics

The framework never logs through itself. Problems with appenders, layouts,
filters and configuration are reported on the ``warnings`` channel, which
the hosting process can filter, escalate or capture.
"""

import warnings

PREFIX = "hierarchy_logger"


class LoggerWarning(UserWarning):
    """Warning category for all internal diagnostics."""


class LoggerException(Exception):
    """Raised for failures outside the logging path (e.g. config loading)."""


def warn(source: str, message: str, stacklevel: int = 3) -> None:
    """
    Emit an internal diagnostic.

    Args:
        source: Component reporting the problem (appender name, class name)
        message: Human readable description
        stacklevel: Passed to ``warnings.warn``
    """
    if source:
        text = f"{PREFIX}: [{source}]: {message}"
    else:
        text = f"{PREFIX}: {message}"
    warnings.warn(text, LoggerWarning, stacklevel=stacklevel)
