"""
Bridge to the standard library ``logging`` module

Forwards formatted events to a ``logging.Logger`` so that applications
already configured with stdlib handlers receive them.
"""

import logging
from typing import Any

from hierarchy_logger.core.level import Level
from hierarchy_logger.core.logging_event import LoggingEvent
from hierarchy_logger.core.outcome import Outcome
from hierarchy_logger.appenders.base_appender import Appender
from hierarchy_logger.layouts.base_layout import to_text

DEFAULT_CHANNEL = "hierarchy_logger"


def to_stdlib_level(level: Level) -> int:
    """Map a level onto the three stdlib levels used for forwarding."""
    if level >= Level.ERROR:
        return logging.ERROR
    if level >= Level.WARNING:
        return logging.WARNING
    return logging.INFO


class StdlibLoggingAppender(Appender):
    """
    Forward events to the stdlib logger named by ``channel``.

    Example:
        appender = StdlibLoggingAppender("bridge", channel="myapp")
    """

    def __init__(self, name: str = "", channel: str = DEFAULT_CHANNEL, **kwargs):
        super().__init__(name, **kwargs)
        self.channel = channel

    def set_channel(self, value: Any) -> None:
        self._set_string("channel", value)

    def append(self, event: LoggingEvent) -> Outcome:
        content = self.format(event)
        if content is None:
            return Outcome.success()
        logging.getLogger(self.channel).log(to_stdlib_level(event.level), to_text(content).rstrip("\n"))
        return Outcome.success()
