"""
Level-based filter

Filters events based on a level range
"""

from typing import Any, Optional

from hierarchy_logger.core.level import Level
from hierarchy_logger.core.logging_event import LoggingEvent
from hierarchy_logger.filters.base_filter import Filter, FilterDecision


class LevelRangeFilter(Filter):
    """
    Filter events based on level.

    Events outside the range are denied. Events inside it are accepted
    when ``accept_on_match`` is set, otherwise left NEUTRAL for the rest
    of the chain.
    """

    def __init__(
        self,
        level_min: Optional[Level] = None,
        level_max: Optional[Level] = None,
        accept_on_match: bool = False
    ):
        """
        Initialize level range filter.

        Args:
            level_min: Minimum level (inclusive). If None, no minimum.
            level_max: Maximum level (inclusive). If None, no maximum.
            accept_on_match: Accept in-range events instead of passing them on

        Example:
            # Only WARNING and above
            filter = LevelRangeFilter(level_min=Level.WARNING)

            # Only DEBUG to INFO, accepted without consulting later filters
            filter = LevelRangeFilter(Level.DEBUG, Level.INFO, accept_on_match=True)
        """
        self.level_min = level_min
        self.level_max = level_max
        self.accept_on_match = accept_on_match

    def set_level_min(self, value: Any) -> None:
        self._set_level("level_min", value)

    def set_level_max(self, value: Any) -> None:
        self._set_level("level_max", value)

    def set_accept_on_match(self, value: Any) -> None:
        self._set_boolean("accept_on_match", value)

    def decide(self, event: LoggingEvent) -> FilterDecision:
        """
        Check if the event's level is within the range.

        Args:
            event: Event to check

        Returns:
            DENY when out of range, ACCEPT or NEUTRAL otherwise
        """
        if self.level_min is not None and event.level < self.level_min:
            return FilterDecision.DENY

        if self.level_max is not None and event.level > self.level_max:
            return FilterDecision.DENY

        return FilterDecision.ACCEPT if self.accept_on_match else FilterDecision.NEUTRAL

    def __repr__(self) -> str:
        """String representation."""
        return f"LevelRangeFilter(min={self.level_min}, max={self.level_max})"
