"""
Level matching filter

Votes on events of exactly one level
"""

from typing import Any, Optional

from hierarchy_logger.core.level import Level
from hierarchy_logger.core.logging_event import LoggingEvent
from hierarchy_logger.filters.base_filter import Filter, FilterDecision


class LevelMatchFilter(Filter):
    """
    Accept or deny events whose level equals ``level_to_match``.

    Other levels, or a filter without a level, yield NEUTRAL.
    """

    def __init__(self, level_to_match: Optional[Level] = None, accept_on_match: bool = True):
        self.level_to_match = level_to_match
        self.accept_on_match = accept_on_match

    def set_level_to_match(self, value: Any) -> None:
        self._set_level("level_to_match", value)

    def set_accept_on_match(self, value: Any) -> None:
        self._set_boolean("accept_on_match", value)

    def decide(self, event: LoggingEvent) -> FilterDecision:
        if self.level_to_match is None or event.level != self.level_to_match:
            return FilterDecision.NEUTRAL
        return FilterDecision.ACCEPT if self.accept_on_match else FilterDecision.DENY

    def __repr__(self) -> str:
        return f"LevelMatchFilter(level={self.level_to_match}, accept_on_match={self.accept_on_match})"
