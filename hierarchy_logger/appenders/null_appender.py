"""Appender that discards every event"""

from hierarchy_logger.core.logging_event import LoggingEvent
from hierarchy_logger.core.outcome import Outcome
from hierarchy_logger.appenders.base_appender import Appender


class NullAppender(Appender):
    """Discard events. Useful to silence a branch of the hierarchy."""

    requires_layout = False

    def append(self, event: LoggingEvent) -> Outcome:
        return Outcome.success()
