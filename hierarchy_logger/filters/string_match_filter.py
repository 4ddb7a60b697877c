"""
String matching filter

Votes on events whose rendered message contains a given string
"""

from typing import Any, Optional

from hierarchy_logger.core.logging_event import LoggingEvent
from hierarchy_logger.filters.base_filter import Filter, FilterDecision


class StringMatchFilter(Filter):
    """
    Accept or deny events whose message contains ``string_to_match``.

    Events that do not contain the string pass through as NEUTRAL.

    Example:
        # Drop heartbeat noise
        filter = StringMatchFilter("heartbeat", accept_on_match=False)
    """

    def __init__(self, string_to_match: Optional[str] = None, accept_on_match: bool = True):
        self.string_to_match = string_to_match
        self.accept_on_match = accept_on_match

    def set_string_to_match(self, value: Any) -> None:
        self._set_string("string_to_match", value)

    def set_accept_on_match(self, value: Any) -> None:
        self._set_boolean("accept_on_match", value)

    def decide(self, event: LoggingEvent) -> FilterDecision:
        message = event.get_rendered_message()
        if not message or not self.string_to_match:
            return FilterDecision.NEUTRAL
        if self.string_to_match not in message:
            return FilterDecision.NEUTRAL
        return FilterDecision.ACCEPT if self.accept_on_match else FilterDecision.DENY

    def __repr__(self) -> str:
        return f"StringMatchFilter(string_to_match={self.string_to_match!r}, accept_on_match={self.accept_on_match})"
