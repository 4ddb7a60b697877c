"""
Hierarchy configurator

Applies a configuration mapping (or a file converted into one) to a
Hierarchy. Problems with individual pieces are reported as warnings and
the piece is skipped; problems with the input as a whole revert to the
default configuration.
"""

import json
import os
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Type, Union

from hierarchy_logger.appenders import (
    Appender,
    ConsoleAppender,
    EchoAppender,
    FileAppender,
    NullAppender,
    RollingFileAppender,
    SocketAppender,
    StdlibLoggingAppender,
    UnixSocketAppender,
)
from hierarchy_logger.config.ini_adapter import IniConfigAdapter
from hierarchy_logger.core.diagnostics import LoggerException, warn
from hierarchy_logger.core.hierarchy import Hierarchy
from hierarchy_logger.core.level import Level
from hierarchy_logger.core.logger import Logger
from hierarchy_logger.core.options import OptionConverter
from hierarchy_logger.core.renderer_map import import_object
from hierarchy_logger.filters import (
    DenyAllFilter,
    Filter,
    LevelMatchFilter,
    LevelRangeFilter,
    StringMatchFilter,
)
from hierarchy_logger.layouts import JsonLayout, Layout, PatternLayout, SerializedLayout, SimpleLayout

ConfigSource = Union[Mapping[str, Any], str, "os.PathLike[str]", None]

APPENDER_ALIASES: Dict[str, Type[Appender]] = {
    "console": ConsoleAppender,
    "echo": EchoAppender,
    "file": FileAppender,
    "rolling_file": RollingFileAppender,
    "socket": SocketAppender,
    "unix_socket": UnixSocketAppender,
    "null": NullAppender,
    "stdlib": StdlibLoggingAppender,
}

LAYOUT_ALIASES: Dict[str, Type[Layout]] = {
    "simple": SimpleLayout,
    "pattern": PatternLayout,
    "json": JsonLayout,
    "serialized": SerializedLayout,
}

FILTER_ALIASES: Dict[str, Type[Filter]] = {
    "string_match": StringMatchFilter,
    "level_match": LevelMatchFilter,
    "level_range": LevelRangeFilter,
    "deny_all": DenyAllFilter,
}

SOURCE = "Configurator"


def default_configuration() -> Dict[str, Any]:
    """Root logger at DEBUG echoing through a SimpleLayout."""
    return {
        "threshold": "ALL",
        "rootLogger": {
            "level": "DEBUG",
            "appenders": ["default"],
        },
        "appenders": {
            "default": {
                "class": "echo",
                "layout": {"class": "simple"},
            },
        },
    }


class Configurator:
    """
    Configure a hierarchy from a mapping, an INI/properties file or a
    JSON file.

    Example:
        Configurator().configure(hierarchy, {
            "rootLogger": {"level": "INFO", "appenders": ["console"]},
            "appenders": {
                "console": {
                    "class": "console",
                    "layout": {"class": "pattern",
                               "params": {"conversionPattern": "%d %-5p %c - %m%n"}},
                    "params": {"target": "stderr"},
                },
            },
        })
    """

    def __init__(self):
        self.adapters: Dict[str, Callable[[Path], Dict[str, Any]]] = {
            ".ini": IniConfigAdapter().convert,
            ".properties": IniConfigAdapter().convert,
            ".json": _load_json,
        }

    def configure(self, hierarchy: Hierarchy, config: ConfigSource = None) -> None:
        """
        Reset the hierarchy and apply a configuration.

        Args:
            hierarchy: Hierarchy to configure
            config: Mapping, path to a configuration file, or None for the
                    default configuration
        """
        try:
            mapping = self.parse(config)
        except LoggerException as e:
            warn(SOURCE, f"Configuration failed. {e} Reverting to default configuration.")
            mapping = default_configuration()

        hierarchy.reset_configuration()
        self.apply(hierarchy, mapping)

    def parse(self, config: ConfigSource) -> Dict[str, Any]:
        """
        Turn a configuration source into a mapping.

        Raises:
            LoggerException: For input that cannot be used at all
        """
        if config is None:
            return default_configuration()
        if isinstance(config, Mapping):
            return dict(config)
        if isinstance(config, (str, os.PathLike)):
            path = Path(config)
            adapter = self.adapters.get(path.suffix.lower())
            if adapter is None:
                raise LoggerException(f"Unsupported configuration file extension: {path.suffix.lstrip('.')}.")
            return adapter(path)
        raise LoggerException("Invalid configuration param given.")

    def apply(self, hierarchy: Hierarchy, config: Mapping[str, Any]) -> None:
        """Apply a parsed configuration mapping to a hierarchy."""
        if "threshold" in config:
            self._configure_threshold(hierarchy, config["threshold"])

        for renderer in config.get("renderers") or []:
            self._configure_renderer(hierarchy, renderer)

        appenders: Dict[str, Appender] = {}
        appenders_config = config.get("appenders") or {}
        if not isinstance(appenders_config, Mapping):
            warn(SOURCE, "Invalid configuration provided for appenders. Skipping appender definitions.")
            appenders_config = {}
        for name, appender_config in appenders_config.items():
            appender = self.create_appender(str(name), appender_config)
            if appender is not None:
                appender.activate()
                appenders[appender.name] = appender

        if "rootLogger" in config:
            self._configure_logger(hierarchy.root, config["rootLogger"], appenders)

        loggers_config = config.get("loggers") or {}
        if not isinstance(loggers_config, Mapping):
            warn(SOURCE, "Invalid configuration provided for loggers. Skipping logger definitions.")
            loggers_config = {}
        for name, logger_config in loggers_config.items():
            self._configure_logger(hierarchy.get_logger(str(name)), logger_config, appenders)

    # Appenders

    def create_appender(self, name: str, config: Any) -> Optional[Appender]:
        """
        Build and configure one appender, without activating it.

        Returns:
            The appender, or None if the definition had to be skipped
        """
        if not isinstance(config, Mapping):
            warn(SOURCE, f"Invalid configuration provided for appender [{name}]. Skipping appender definition.")
            return None

        class_name = config.get("class")
        if not class_name:
            warn(SOURCE, f"No class given for appender [{name}]. Skipping appender definition.")
            return None

        appender_class = _resolve_class(class_name, APPENDER_ALIASES)
        if appender_class is None:
            warn(
                SOURCE,
                f"Invalid class [{class_name}] given for appender [{name}]. "
                "Class does not exist. Skipping appender definition.",
            )
            return None
        if not (isinstance(appender_class, type) and issubclass(appender_class, Appender)):
            warn(
                SOURCE,
                f"Invalid class [{class_name}] given for appender [{name}]. "
                "Not a valid Appender class. Skipping appender definition.",
            )
            return None

        try:
            appender = appender_class(name)
        except TypeError as e:
            warn(
                SOURCE,
                f"Appender class [{class_name}] given for appender [{name}] "
                f"cannot be created from configuration: {e}. Skipping appender definition.",
            )
            return None

        if appender.requires_layout and "layout" in config:
            layout = self._create_layout(name, config["layout"])
            if layout is not None:
                appender.set_layout(layout)

        if "threshold" in config:
            threshold = Level.to_level(config["threshold"])
            if threshold is None:
                warn(
                    SOURCE,
                    f"Invalid threshold value [{config['threshold']}] specified for appender [{name}]. "
                    "Ignoring threshold definition.",
                )
            else:
                appender.threshold = threshold

        for filter_config in config.get("filters") or []:
            event_filter = self._create_filter(name, filter_config)
            if event_filter is not None:
                appender.add_filter(event_filter)

        appender.configure(config.get("params"))
        return appender

    def _create_layout(self, appender_name: str, config: Any) -> Optional[Layout]:
        if isinstance(config, str):
            config = {"class": config}
        class_name = config.get("class") if isinstance(config, Mapping) else None
        if not class_name:
            warn(SOURCE, f"Layout class not specified for appender [{appender_name}]. Reverting to default layout.")
            return None

        layout_class = _resolve_class(class_name, LAYOUT_ALIASES)
        if layout_class is None:
            warn(
                SOURCE,
                f"Unknown layout class [{class_name}] specified for appender [{appender_name}]. "
                "Reverting to default layout.",
            )
            return None
        if not (isinstance(layout_class, type) and issubclass(layout_class, Layout)):
            warn(
                SOURCE,
                f"Invalid layout class [{class_name}] specified for appender [{appender_name}]. "
                "Reverting to default layout.",
            )
            return None

        try:
            layout = layout_class()
        except TypeError as e:
            warn(
                SOURCE,
                f"Layout class [{class_name}] specified for appender [{appender_name}] "
                f"cannot be created from configuration: {e}. Reverting to default layout.",
            )
            return None
        layout.configure(config.get("params"))
        return layout

    def _create_filter(self, appender_name: str, config: Any) -> Optional[Filter]:
        if isinstance(config, str):
            config = {"class": config}
        class_name = config.get("class") if isinstance(config, Mapping) else None

        filter_class = _resolve_class(class_name, FILTER_ALIASES) if class_name else None
        if filter_class is None:
            warn(
                SOURCE,
                f"Unknown filter class [{class_name}] specified on appender [{appender_name}]. "
                "Skipping filter definition.",
            )
            return None
        if not (isinstance(filter_class, type) and issubclass(filter_class, Filter)):
            warn(
                SOURCE,
                f"Invalid filter class [{class_name}] specified on appender [{appender_name}]. "
                "Skipping filter definition.",
            )
            return None

        try:
            event_filter = filter_class()
        except TypeError as e:
            warn(
                SOURCE,
                f"Filter class [{class_name}] specified on appender [{appender_name}] "
                f"cannot be created from configuration: {e}. Skipping filter definition.",
            )
            return None
        event_filter.configure(config.get("params"))
        return event_filter

    # Loggers and hierarchy settings

    def _configure_logger(self, logger: Logger, config: Any, appenders: Dict[str, Appender]) -> None:
        if not isinstance(config, Mapping):
            warn(SOURCE, f"Invalid configuration provided for logger [{logger.name}]. Skipping logger definition.")
            return

        if config.get("level") is not None:
            level = Level.to_level(config["level"])
            if level is None:
                warn(
                    SOURCE,
                    f"Invalid level value [{config['level']}] specified for logger [{logger.name}]. "
                    "Ignoring level definition.",
                )
            else:
                logger.set_level(level)

        for appender_name in _as_list(config.get("appenders")):
            appender = appenders.get(appender_name)
            if appender is None:
                warn(SOURCE, f"Unknown appender [{appender_name}] linked to logger [{logger.name}].")
                continue
            logger.add_appender(appender)

        if "additivity" in config:
            try:
                logger.set_additivity(OptionConverter.to_boolean(config["additivity"]))
            except ValueError:
                warn(SOURCE, f"Invalid additivity value [{config['additivity']}] specified for logger [{logger.name}].")

    def _configure_threshold(self, hierarchy: Hierarchy, value: Any) -> None:
        threshold = Level.to_level(value)
        if threshold is None:
            warn(SOURCE, f"Invalid threshold value [{value!r}] specified. Ignoring threshold definition.")
            return
        hierarchy.set_threshold(threshold)

    def _configure_renderer(self, hierarchy: Hierarchy, config: Any) -> None:
        if not isinstance(config, Mapping):
            warn(SOURCE, "Invalid renderer definition. Skipping renderer definition.")
            return
        rendering_class = config.get("renderingClass")
        rendered_class = config.get("renderedClass")
        if not rendering_class:
            warn(SOURCE, "Rendering class not specified. Skipping renderer definition.")
            return
        if not rendered_class:
            warn(SOURCE, "Rendered class not specified. Skipping renderer definition.")
            return
        hierarchy.renderer_map.add_renderer(rendered_class, rendering_class)


def _resolve_class(name: Any, aliases: Mapping[str, type]) -> Optional[Any]:
    if isinstance(name, type):
        return name
    name = str(name).strip()
    if name.lower() in aliases:
        return aliases[name.lower()]
    try:
        return import_object(name)
    except ImportError:
        return None


def _as_list(value: Any) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return [str(item) for item in value]


def _load_json(path: Path) -> Dict[str, Any]:
    if not path.is_file():
        raise LoggerException(f"File [{path}] does not exist.")
    try:
        with open(path, encoding="utf-8") as fp:
            config = json.load(fp)
    except (OSError, ValueError) as e:
        raise LoggerException(f"Error parsing configuration file {path}: {e}") from e
    if not isinstance(config, dict):
        raise LoggerException(f"Invalid configuration in file {path}. Expected an object.")
    return config
