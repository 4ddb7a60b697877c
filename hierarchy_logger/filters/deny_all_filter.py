"""Filter that drops every event"""

from hierarchy_logger.core.logging_event import LoggingEvent
from hierarchy_logger.filters.base_filter import Filter, FilterDecision


class DenyAllFilter(Filter):
    """
    Deny every event.

    Put it at the end of a chain to turn the default accept into deny,
    e.g. after a StringMatchFilter that accepts what should be logged.
    """

    def decide(self, event: LoggingEvent) -> FilterDecision:
        return FilterDecision.DENY

    def __repr__(self) -> str:
        return "DenyAllFilter()"
