"""
Logger classes

A Logger is a named node of a Hierarchy. Log calls build a LoggingEvent
and dispatch it to the appenders of the logger and, while additivity
allows, of its ancestors. Dispatch is synchronous on the calling thread.
"""

from __future__ import annotations

import sys
from collections import OrderedDict
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional, Union

from hierarchy_logger.core.diagnostics import warn
from hierarchy_logger.core.level import Level
from hierarchy_logger.core.location_info import MAIN, skip_framework_frames
from hierarchy_logger.core.logging_event import LoggingEvent

if TYPE_CHECKING:
    from hierarchy_logger.appenders.base_appender import Appender
    from hierarchy_logger.core.hierarchy import Hierarchy

Context = Optional[Mapping[str, Any]]


class Logger:
    """
    Named logger with level inheritance and additivity.

    Loggers are created by ``Hierarchy.get_logger`` and should not be
    instantiated directly.

    Example:
        logger = hierarchy.get_logger("app.db")
        logger.info("Connected to {host}", {"host": "db1"})
        logger.error("Query failed", {"exception": exc})
    """

    def __init__(self, name: str, hierarchy: "Hierarchy", parent: Optional["Logger"] = None):
        self.name = name
        self.hierarchy = hierarchy
        self.parent = parent
        self.level: Optional[Level] = None
        self.additivity = True
        self._appenders: "OrderedDict[str, Appender]" = OrderedDict()
        self._extended_context: Dict[str, Any] = {}

    # Levels

    def get_level(self) -> Optional[Level]:
        return self.level

    def set_level(self, level: Union[Level, str, None]) -> None:
        """
        Set the logger's own level. None makes the logger inherit its level.

        Args:
            level: Level, level name, or None
        """
        if level is None:
            self.level = None
            return
        resolved = Level.to_level(level)
        if resolved is None:
            warn(self.name, f"Invalid level [{level!r}]. Level not changed.")
            return
        self.level = resolved

    def get_effective_level(self) -> Level:
        """Return the first level set on this logger or its ancestors."""
        logger: Optional[Logger] = self
        while logger is not None:
            if logger.level is not None:
                return logger.level
            logger = logger.parent
        return Level.DEBUG

    def is_enabled_for(self, level: Level) -> bool:
        if self.hierarchy is not None and self.hierarchy.is_disabled(level):
            return False
        return level >= self.get_effective_level()

    def is_trace_enabled(self) -> bool:
        return self.is_enabled_for(Level.TRACE)

    def is_debug_enabled(self) -> bool:
        return self.is_enabled_for(Level.DEBUG)

    def is_info_enabled(self) -> bool:
        return self.is_enabled_for(Level.INFO)

    # Additivity

    def get_additivity(self) -> bool:
        return self.additivity

    def set_additivity(self, additivity: bool) -> None:
        self.additivity = bool(additivity)

    # Appenders

    def add_appender(self, appender: "Appender") -> None:
        """
        Attach an appender. An appender with the same name is replaced.

        Args:
            appender: Appender instance
        """
        if not appender.name:
            appender.name = f"{type(appender).__name__}{len(self._appenders)}"
        self._appenders[appender.name] = appender

    def remove_appender(self, appender: Union["Appender", str]) -> None:
        """Detach and close an appender, given by instance or name."""
        name = appender if isinstance(appender, str) else appender.name
        removed = self._appenders.pop(name, None)
        if removed is not None:
            removed.close()

    def remove_all_appenders(self) -> None:
        """Detach and close all appenders."""
        appenders = list(self._appenders.values())
        self._appenders.clear()
        for appender in appenders:
            appender.close()

    def get_appender(self, name: str) -> Optional["Appender"]:
        return self._appenders.get(name)

    def get_all_appenders(self) -> List["Appender"]:
        return list(self._appenders.values())

    def is_attached(self, appender: "Appender") -> bool:
        return self._appenders.get(appender.name) is appender

    # Extended context

    def set_context(self, key: str, value: Union[Any, Callable[[], Any]]) -> None:
        """
        Add a value to every event of this logger.

        Callables are evaluated each time the context is read, e.g. to
        attach a request id held elsewhere.
        """
        self._extended_context[key] = value

    def remove_context(self, key: str) -> None:
        self._extended_context.pop(key, None)

    def clear_context(self) -> None:
        self._extended_context.clear()

    def resolve_extended_context(self) -> Dict[str, Any]:
        """Return the extended context with callables resolved."""
        resolved = {}
        for key, value in self._extended_context.items():
            if callable(value):
                try:
                    value = value()
                except Exception as e:
                    warn(self.name, f"Extended context [{key}] failed: {e}")
                    continue
            resolved[key] = value
        return resolved

    # Log methods

    def trace(self, message: Any, context: Context = None, *, stacklevel: int = 1) -> None:
        """Log trace message."""
        self._log(Level.TRACE, message, context, stacklevel)

    def debug(self, message: Any, context: Context = None, *, stacklevel: int = 1) -> None:
        """Log debug message."""
        self._log(Level.DEBUG, message, context, stacklevel)

    def info(self, message: Any, context: Context = None, *, stacklevel: int = 1) -> None:
        """Log info message."""
        self._log(Level.INFO, message, context, stacklevel)

    def notice(self, message: Any, context: Context = None, *, stacklevel: int = 1) -> None:
        """Log notice message."""
        self._log(Level.NOTICE, message, context, stacklevel)

    def warning(self, message: Any, context: Context = None, *, stacklevel: int = 1) -> None:
        """Log warning message."""
        self._log(Level.WARNING, message, context, stacklevel)

    def warn(self, message: Any, context: Context = None, *, stacklevel: int = 1) -> None:
        """Alias for warning()."""
        self._log(Level.WARNING, message, context, stacklevel)

    def error(self, message: Any, context: Context = None, *, stacklevel: int = 1) -> None:
        """Log error message."""
        self._log(Level.ERROR, message, context, stacklevel)

    def critical(self, message: Any, context: Context = None, *, stacklevel: int = 1) -> None:
        """Log critical message."""
        self._log(Level.CRITICAL, message, context, stacklevel)

    def alert(self, message: Any, context: Context = None, *, stacklevel: int = 1) -> None:
        """Log alert message."""
        self._log(Level.ALERT, message, context, stacklevel)

    def emergency(self, message: Any, context: Context = None, *, stacklevel: int = 1) -> None:
        """Log emergency message."""
        self._log(Level.EMERGENCY, message, context, stacklevel)

    def log(self, level: Union[Level, str], message: Any, context: Context = None, *, stacklevel: int = 1) -> None:
        """
        Log a message at the given level.

        Args:
            level: Level or level name
            message: Message template or renderable object
            context: Values for ``{placeholder}`` substitution; an
                     ``exception`` entry attaches a traceback
            stacklevel: Which caller frame to report, 1 being the direct caller
        """
        resolved = Level.to_level(level)
        if resolved is None:
            warn(self.name, f"Invalid level [{level!r}]. Message not logged.")
            return
        self._log(resolved, message, context, stacklevel)

    def _log(self, level: Level, message: Any, context: Context, stacklevel: int) -> None:
        if not self.is_enabled_for(level):
            return

        # frame 0 is _log, frame 1 the public log method
        try:
            frame = sys._getframe(stacklevel + 1)
        except ValueError:
            frame = None
        frame = skip_framework_frames(frame)

        fqcn = frame.f_globals.get("__name__", MAIN) if frame is not None else MAIN
        event = LoggingEvent(fqcn, self, level, message, context=context, location=frame)
        self.call_appenders(event)

    def call_appenders(self, event: LoggingEvent) -> None:
        """
        Deliver an event to this logger's appenders and its ancestors'.

        Each logger on the way forwards the event to its appenders if the
        event level reaches its effective level. Climbing stops after a
        logger with additivity disabled.
        """
        logger: Optional[Logger] = self
        while logger is not None:
            if event.level >= logger.get_effective_level():
                for appender in list(logger._appenders.values()):
                    appender.do_append(event)
            if not logger.additivity:
                break
            logger = logger.parent

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, level={self.level})"


class RootLogger(Logger):
    """
    Top of the hierarchy.

    Always has a level (DEBUG by default) and cannot be given a parent.
    """

    NAME = "root"

    def __init__(self, hierarchy: "Hierarchy", level: Level = Level.DEBUG):
        super().__init__(self.NAME, hierarchy, None)
        self.level = level

    def set_level(self, level: Union[Level, str, None]) -> None:
        if level is None:
            warn(self.name, "Attempting to set the root logger level to None. Level not changed.")
            return
        super().set_level(level)

    def get_effective_level(self) -> Level:
        return self.level
