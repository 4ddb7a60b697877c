"""
Base appender interface

Appenders deliver formatted events to a sink. The base class owns the
lifecycle (unconfigured, active, closed), the threshold and filter chain
checks, and turns sink failures into a self-close plus one diagnostic.
"""

import threading
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, List, Optional

from hierarchy_logger.core.diagnostics import warn
from hierarchy_logger.core.level import Level
from hierarchy_logger.core.logging_event import LoggingEvent
from hierarchy_logger.core.options import Configurable
from hierarchy_logger.core.outcome import Outcome
from hierarchy_logger.filters.base_filter import Filter, FilterDecision, decide_chain
from hierarchy_logger.layouts.base_layout import Layout
from hierarchy_logger.layouts.simple_layout import SimpleLayout


class AppenderState(Enum):
    UNCONFIGURED = "unconfigured"
    ACTIVE = "active"
    CLOSED = "closed"


class Appender(Configurable, ABC):
    """
    Abstract base class for appenders.

    Subclasses implement ``append`` (write one accepted event) and may
    override ``activate_options`` (acquire resources, validate options)
    and ``release`` (free resources). Neither may raise for ordinary sink
    failures; they return an ``Outcome`` instead.

    Thread Safety:
        ``do_append`` and ``close`` hold a per-appender lock.
    """

    requires_layout = True

    def __init__(self, name: str = "", layout: Optional[Layout] = None, threshold: Level = Level.ALL):
        """
        Initialize appender.

        Args:
            name: Appender name, unique within a logger
            layout: Layout used to format events (default: get_default_layout())
            threshold: Events below this level are skipped
        """
        self.name = name
        self.layout = layout
        self.threshold = threshold
        self.filters: List[Filter] = []
        self.state = AppenderState.UNCONFIGURED
        self._lock = threading.RLock()

    # Configuration

    def get_default_layout(self) -> Layout:
        return SimpleLayout()

    def set_layout(self, layout: Layout) -> None:
        if not self.requires_layout:
            return
        if not isinstance(layout, Layout):
            self.warn(f"Invalid layout [{layout!r}]. Layout not changed.")
            return
        self.layout = layout

    def set_threshold(self, value: Any) -> None:
        self._set_level("threshold", value)

    def add_filter(self, event_filter: Filter) -> None:
        self.filters.append(event_filter)

    def clear_filters(self) -> None:
        self.filters = []

    @property
    def closed(self) -> bool:
        return self.state is AppenderState.CLOSED

    def warn(self, message: str) -> None:
        warn(f"{type(self).__name__}:{self.name}", message, stacklevel=4)

    # Lifecycle

    def activate(self) -> Outcome:
        """
        Activate the appender once its options are set.

        Returns:
            Outcome of activation; on failure the appender is closed
        """
        with self._lock:
            if self.closed:
                return Outcome.config_error("Appender is closed")
            if self.state is AppenderState.ACTIVE:
                return Outcome.success()

            if self.requires_layout and self.layout is None:
                self.layout = self.get_default_layout()

            outcome = self._activate_components()
            if outcome.ok:
                outcome = self.activate_options()

            if not outcome.ok:
                self.state = AppenderState.CLOSED
                self.warn(f"{outcome.message}. Closing appender.")
                return outcome

            self.state = AppenderState.ACTIVE
            return outcome

    def _activate_components(self) -> Outcome:
        if self.layout is not None:
            outcome = self.layout.activate_options()
            if not outcome.ok:
                return outcome
        for event_filter in self.filters:
            outcome = event_filter.activate_options()
            if not outcome.ok:
                return outcome
        return Outcome.success()

    def activate_options(self) -> Outcome:
        """Validate options and acquire resources that are not opened lazily."""
        return Outcome.success()

    def do_append(self, event: LoggingEvent) -> Outcome:
        """
        Run threshold and filter checks, then append the event.

        Args:
            event: Event to deliver

        Returns:
            Outcome of the append; never raises for sink failures
        """
        with self._lock:
            if self.closed:
                return Outcome.success()

            if event.level < self.threshold:
                return Outcome.success()

            if self.state is AppenderState.UNCONFIGURED:
                outcome = self.activate()
                if not outcome.ok:
                    return outcome

            try:
                decision = decide_chain(self.filters, event)
            except Exception as e:
                self.warn(f"Filter failed, dropping event: {e}")
                return Outcome.success()
            if decision != FilterDecision.ACCEPT:
                return Outcome.success()

            try:
                outcome = self.append(event)
            except Exception as e:
                outcome = Outcome.io_error(f"Failed writing event: {e}")

            if not outcome.ok:
                self._fail(outcome)
            return outcome

    @abstractmethod
    def append(self, event: LoggingEvent) -> Outcome:
        """
        Write one accepted event to the sink.

        Args:
            event: Event that passed threshold and filters

        Returns:
            Outcome of the write
        """
        pass

    def close(self) -> Outcome:
        """
        Close the appender. Only the first call has an effect.

        The footer is written if the sink supports it; resources are
        released even when that write fails.
        """
        with self._lock:
            if self.closed:
                return Outcome.success()
            was_active = self.state is AppenderState.ACTIVE
            self.state = AppenderState.CLOSED
            outcome = Outcome.success()
            try:
                if was_active:
                    outcome = self.write_footer()
            except Exception as e:
                outcome = Outcome.io_error(f"Failed writing footer: {e}")
            finally:
                self._release()
            if not outcome.ok:
                self.warn(outcome.message)
            return outcome

    def write_footer(self) -> Outcome:
        """Write the layout footer. Sinks without footer support keep the default."""
        return Outcome.success()

    def release(self) -> None:
        """Release sink resources. Must be safe to call more than once."""

    def _fail(self, outcome: Outcome) -> None:
        self.state = AppenderState.CLOSED
        self._release()
        self.warn(f"{outcome.message}. Closing appender.")

    def _release(self) -> None:
        try:
            self.release()
        except Exception as e:
            self.warn(f"Failed releasing resources: {e}")

    # Helpers

    def format(self, event: LoggingEvent):
        if self.layout is None:
            return None
        return self.layout.format(event)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, threshold={self.threshold}, state={self.state.value})"
