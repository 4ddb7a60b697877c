"""
Logger hierarchy

Owns the named loggers, the root logger, the global threshold and the
renderer map shared by all events created through it.
"""

from typing import Dict, List, Optional, Union

from hierarchy_logger.core.diagnostics import warn
from hierarchy_logger.core.level import Level
from hierarchy_logger.core.logger import Logger, RootLogger
from hierarchy_logger.core.renderer_map import RendererMap


class Hierarchy:
    """
    Registry of loggers organized by dotted names.

    ``get_logger("a.b.c")`` creates ``a`` and ``a.b`` as well if they do
    not exist yet, so every logger's parent is its closest named ancestor
    or the root logger.

    Example:
        hierarchy = Hierarchy()
        hierarchy.root.add_appender(ConsoleAppender("console"))
        hierarchy.get_logger("app.db").info("ready")
        hierarchy.shutdown()
    """

    def __init__(self, renderer_map: Optional[RendererMap] = None):
        self.renderer_map = renderer_map if renderer_map is not None else RendererMap()
        self.root = RootLogger(self)
        self.threshold = Level.ALL
        self._loggers: Dict[str, Logger] = {}

    def get_root_logger(self) -> RootLogger:
        return self.root

    def get_logger(self, name: str) -> Logger:
        """
        Return the logger with the given name, creating it if needed.

        Args:
            name: Dotted logger name; an empty name returns the root logger
        """
        parts = [part for part in (name or "").split(".") if part]
        if not parts:
            return self.root

        name = ".".join(parts)
        logger = self._loggers.get(name)
        if logger is not None:
            return logger

        parent: Logger = self.root
        for end in range(1, len(parts) + 1):
            current = ".".join(parts[:end])
            logger = self._loggers.get(current)
            if logger is None:
                logger = Logger(current, self, parent)
                self._loggers[current] = logger
            parent = logger
        return logger

    def exists(self, name: str) -> bool:
        return name in self._loggers

    def get_current_loggers(self) -> List[Logger]:
        """Return all loggers except the root logger, in creation order."""
        return list(self._loggers.values())

    def get_threshold(self) -> Level:
        return self.threshold

    def set_threshold(self, threshold: Union[Level, str]) -> None:
        level = Level.to_level(threshold)
        if level is None:
            warn("Hierarchy", f"Invalid threshold [{threshold!r}]. Threshold not changed.")
            return
        self.threshold = level

    def is_disabled(self, level: Level) -> bool:
        """Check whether the hierarchy threshold suppresses a level."""
        return level < self.threshold

    def shutdown(self) -> None:
        """Close and detach every appender in the hierarchy."""
        self.root.remove_all_appenders()
        for logger in self._loggers.values():
            logger.remove_all_appenders()

    def reset_configuration(self) -> None:
        """
        Shut down and return the hierarchy to its initial state.

        Loggers stay registered but lose their appenders, levels and
        additivity settings.
        """
        self.shutdown()
        self.root.set_level(Level.DEBUG)
        self.root.clear_context()
        self.threshold = Level.ALL
        for logger in self._loggers.values():
            logger.set_level(None)
            logger.set_additivity(True)
            logger.clear_context()
        self.renderer_map.reset()

    def __repr__(self) -> str:
        return f"Hierarchy(loggers={len(self._loggers)}, threshold={self.threshold})"
