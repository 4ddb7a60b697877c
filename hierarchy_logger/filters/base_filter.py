"""
Base filter interface

Filters vote on whether an appender should write an event. Filters attached
to an appender form a chain consulted in order.
"""

from abc import ABC, abstractmethod
from enum import IntEnum
from typing import Iterable

from hierarchy_logger.core.logging_event import LoggingEvent
from hierarchy_logger.core.options import Configurable
from hierarchy_logger.core.outcome import Outcome


class FilterDecision(IntEnum):
    """Vote of a single filter."""

    DENY = -1
    NEUTRAL = 0
    ACCEPT = 1


class Filter(Configurable, ABC):
    """
    Abstract base class for filters.

    ``decide`` returns ACCEPT to log the event right away, DENY to drop
    it, or NEUTRAL to leave the decision to the next filter in the chain.
    """

    @abstractmethod
    def decide(self, event: LoggingEvent) -> FilterDecision:
        """
        Decide what to do with a logging event.

        Args:
            event: The event to check

        Returns:
            The filter's decision
        """
        pass

    def activate_options(self) -> Outcome:
        """Validate options once they are all set."""
        return Outcome.success()

    def __call__(self, event: LoggingEvent) -> FilterDecision:
        """Allow filters to be callable."""
        return self.decide(event)


def decide_chain(filters: Iterable[Filter], event: LoggingEvent) -> FilterDecision:
    """
    Run an event through a filter chain.

    The first ACCEPT or DENY wins. An empty chain, or one where every
    filter is NEUTRAL, accepts the event.
    """
    for event_filter in filters:
        decision = event_filter.decide(event)
        if decision != FilterDecision.NEUTRAL:
            return decision
    return FilterDecision.ACCEPT
