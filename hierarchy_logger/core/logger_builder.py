"""Logger hierarchy builder pattern"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from hierarchy_logger.appenders.base_appender import Appender
from hierarchy_logger.appenders.console_appender import ConsoleAppender
from hierarchy_logger.appenders.file_appender import FileAppender
from hierarchy_logger.appenders.rolling_file_appender import DEFAULT_MAX_FILE_SIZE, RollingFileAppender
from hierarchy_logger.core.hierarchy import Hierarchy
from hierarchy_logger.core.level import Level
from hierarchy_logger.layouts.base_layout import Layout


@dataclass
class _LoggerSettings:
    level: Optional[Level] = None
    additivity: bool = True
    appenders: List[Appender] = field(default_factory=list)


class LoggerBuilder:
    """
    Builder pattern for hierarchy construction.

    Appenders added without a logger name go to the root logger. All
    appenders are activated by ``build``.

    Example:
        hierarchy = (LoggerBuilder()
            .with_root_level(Level.INFO)
            .with_console()
            .with_file("logs/app.log", rotating=True)
            .with_logger("app.db", level=Level.WARNING)
            .build())
    """

    def __init__(self):
        self._threshold = Level.ALL
        self._root = _LoggerSettings(level=Level.DEBUG)
        self._loggers: Dict[str, _LoggerSettings] = {}
        self._renderers: List[Tuple[Any, Any]] = []

    def with_threshold(self, level: Union[Level, str]) -> "LoggerBuilder":
        """Set the hierarchy-wide threshold."""
        self._threshold = _require_level(level)
        return self

    def with_root_level(self, level: Union[Level, str]) -> "LoggerBuilder":
        """Set the root logger level."""
        self._root.level = _require_level(level)
        return self

    def with_console(
        self,
        target: str = "stdout",
        layout: Optional[Layout] = None,
        name: str = "console"
    ) -> "LoggerBuilder":
        """Add a console appender to the root logger."""
        return self.with_appender(ConsoleAppender(name, target=target, layout=layout))

    def with_file(
        self,
        filepath: Union[str, Path],
        rotating: bool = False,
        layout: Optional[Layout] = None,
        name: str = "file",
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
        max_backup_index: int = 1
    ) -> "LoggerBuilder":
        """
        Add a file appender to the root logger.

        Args:
            filepath: Path to log file
            rotating: Use a RollingFileAppender
            layout: Layout (default: SimpleLayout)
            name: Appender name
            max_file_size: Rollover size when rotating
            max_backup_index: Backups kept when rotating

        Returns:
            Self for method chaining
        """
        if rotating:
            appender: Appender = RollingFileAppender(
                name,
                file=str(filepath),
                layout=layout,
                max_file_size=max_file_size,
                max_backup_index=max_backup_index
            )
        else:
            appender = FileAppender(name, file=str(filepath), layout=layout)
        return self.with_appender(appender)

    def with_appender(self, appender: Appender, logger_name: Optional[str] = None) -> "LoggerBuilder":
        """
        Add a custom appender.

        Args:
            appender: Appender instance
            logger_name: Logger to attach it to (default: root)

        Returns:
            Self for method chaining
        """
        settings = self._root if logger_name is None else self._logger_settings(logger_name)
        settings.appenders.append(appender)
        return self

    def with_logger(
        self,
        name: str,
        level: Union[Level, str, None] = None,
        additivity: bool = True,
        appenders: Optional[List[Appender]] = None
    ) -> "LoggerBuilder":
        """
        Configure a named logger.

        Example:
            builder.with_logger("app.audit", level="INFO", additivity=False,
                                appenders=[FileAppender("audit", file="audit.log")])
        """
        settings = self._logger_settings(name)
        settings.level = _require_level(level) if level is not None else None
        settings.additivity = additivity
        settings.appenders.extend(appenders or [])
        return self

    def with_renderer(self, rendered_class: Any, renderer: Any) -> "LoggerBuilder":
        """Register an object renderer for a message class."""
        self._renderers.append((rendered_class, renderer))
        return self

    def build(self) -> Hierarchy:
        """Build and return the configured hierarchy."""
        hierarchy = Hierarchy()
        hierarchy.set_threshold(self._threshold)

        for rendered_class, renderer in self._renderers:
            hierarchy.renderer_map.add_renderer(rendered_class, renderer)

        self._apply(hierarchy.root, self._root)
        for name, settings in self._loggers.items():
            self._apply(hierarchy.get_logger(name), settings)

        return hierarchy

    def _logger_settings(self, name: str) -> _LoggerSettings:
        return self._loggers.setdefault(name, _LoggerSettings())

    @staticmethod
    def _apply(logger, settings: _LoggerSettings) -> None:
        if settings.level is not None:
            logger.set_level(settings.level)
        logger.set_additivity(settings.additivity)
        for appender in settings.appenders:
            appender.activate()
            logger.add_appender(appender)


def _require_level(value: Union[Level, str]) -> Level:
    level = Level.to_level(value)
    if level is None:
        raise ValueError(f"Invalid level: {value!r}")
    return level
