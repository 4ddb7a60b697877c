"""
Callback-based filter

Filters events using custom callback functions
"""

from typing import Callable, Optional, Union

from hierarchy_logger.core.logging_event import LoggingEvent
from hierarchy_logger.filters.base_filter import Filter, FilterDecision

CallbackResult = Optional[Union[FilterDecision, bool]]


class CallbackFilter(Filter):
    """
    Filter events using a custom callback function.

    Provides maximum flexibility for filtering logic.
    """

    def __init__(self, callback: Callable[[LoggingEvent], CallbackResult]):
        """
        Initialize callback filter.

        Args:
            callback: Function that takes a LoggingEvent and returns a
                     FilterDecision, True (accept), False (deny) or
                     None (neutral).

        Example:
            # Only events from the billing subsystem
            def only_billing(event):
                return event.logger_name.startswith("billing")

            filter = CallbackFilter(only_billing)

            # Deny events tagged as noisy, leave the rest to other filters
            def not_noisy(event):
                return False if event.get_context().get("noisy") else None

            filter = CallbackFilter(not_noisy)
        """
        if not callable(callback):
            raise TypeError("callback must be callable")

        self.callback = callback

    def decide(self, event: LoggingEvent) -> FilterDecision:
        """
        Use callback to decide on the event.

        A callback that raises is reported and counts as NEUTRAL.
        """
        try:
            result = self.callback(event)
        except Exception as e:
            self.warn(f"Filter callback error: {e}")
            return FilterDecision.NEUTRAL

        if result is None:
            return FilterDecision.NEUTRAL
        if isinstance(result, FilterDecision):
            return result
        if isinstance(result, bool):
            return FilterDecision.ACCEPT if result else FilterDecision.DENY
        try:
            return FilterDecision(result)
        except ValueError:
            self.warn(f"Filter callback returned unsupported value [{result!r}]")
            return FilterDecision.NEUTRAL

    def __repr__(self) -> str:
        """String representation."""
        callback_name = getattr(self.callback, '__name__', repr(self.callback))
        return f"CallbackFilter(callback={callback_name})"
