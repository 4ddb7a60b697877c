"""
INI configuration adapter

Converts flat ``log4php.*`` property files into the native configuration
mapping understood by the Configurator:

    log4php.threshold = ALL
    log4php.rootLogger = DEBUG, console, file
    log4php.logger.app.db = WARNING, file
    log4php.additivity.app.db = false
    log4php.appender.console = console
    log4php.appender.console.target = stderr
    log4php.appender.console.layout = pattern
    log4php.appender.console.layout.conversionPattern = %d %p %c - %m%n
    log4php.renderer.myapp.Order = myapp.renderers.OrderRenderer

Section headers are optional; keys of all sections are merged.
"""

import configparser
from pathlib import Path
from typing import Any, Dict, Union

from hierarchy_logger.core.diagnostics import LoggerException, warn

ROOT_LOGGER_NAME = "root"

THRESHOLD_PREFIX = "log4php.threshold"
ROOT_LOGGER_PREFIX = "log4php.rootLogger"
LOGGER_PREFIX = "log4php.logger."
ADDITIVITY_PREFIX = "log4php.additivity."
APPENDER_PREFIX = "log4php.appender."
RENDERER_PREFIX = "log4php.renderer."

_DEFAULT_SECTION = "log4php"


class IniConfigAdapter:
    """
    Convert an INI/properties file to a configuration mapping.

    Example:
        config = IniConfigAdapter().convert("logging.ini")
        Configurator().configure(hierarchy, config)
    """

    def convert(self, path: Union[str, Path]) -> Dict[str, Any]:
        """
        Read and convert a property file.

        Args:
            path: Path to the file

        Returns:
            Configuration mapping

        Raises:
            LoggerException: If the file is missing or cannot be parsed
        """
        properties = self.load(path)
        config: Dict[str, Any] = {}

        if THRESHOLD_PREFIX in properties:
            config["threshold"] = properties[THRESHOLD_PREFIX]

        if ROOT_LOGGER_PREFIX in properties:
            self._parse_logger(config, properties[ROOT_LOGGER_PREFIX], ROOT_LOGGER_NAME)

        for key, value in properties.items():
            if key.startswith(LOGGER_PREFIX):
                self._parse_logger(config, value, key[len(LOGGER_PREFIX):])
            elif key.startswith(ADDITIVITY_PREFIX):
                name = key[len(ADDITIVITY_PREFIX):]
                config.setdefault("loggers", {}).setdefault(name, {})["additivity"] = value
            elif key.startswith(APPENDER_PREFIX):
                self._parse_appender(config, key, value)
            elif key.startswith(RENDERER_PREFIX):
                config.setdefault("renderers", []).append({
                    "renderedClass": key[len(RENDERER_PREFIX):],
                    "renderingClass": value,
                })

        return config

    def load(self, path: Union[str, Path]) -> Dict[str, str]:
        """Read all key/value pairs of a property file, case preserved."""
        path = Path(path)
        if not path.is_file():
            raise LoggerException(f"File [{path}] does not exist.")

        parser = configparser.ConfigParser(delimiters=("=",), interpolation=None, strict=False)
        parser.optionxform = str

        try:
            text = path.read_text(encoding="utf-8")
            try:
                parser.read_string(text, source=str(path))
            except configparser.MissingSectionHeaderError:
                parser.read_string(f"[{_DEFAULT_SECTION}]\n{text}", source=str(path))
        except (OSError, UnicodeDecodeError, configparser.Error) as e:
            raise LoggerException(f"Error parsing configuration file {path}: {e}") from e

        properties: Dict[str, str] = {key: _unquote(value) for key, value in parser.defaults().items()}
        for section in parser.sections():
            for key, value in parser.items(section):
                properties[key] = _unquote(value)
        return properties

    def _parse_logger(self, config: Dict[str, Any], value: str, name: str) -> None:
        if not value:
            return
        parts = [part.strip() for part in value.split(",")]
        level, appenders = parts[0], [part for part in parts[1:] if part]

        if name == ROOT_LOGGER_NAME:
            target = config.setdefault("rootLogger", {})
        else:
            target = config.setdefault("loggers", {}).setdefault(name, {})
        if level:
            target["level"] = level
        target["appenders"] = appenders

    def _parse_appender(self, config: Dict[str, Any], key: str, value: str) -> None:
        parts = key[len(APPENDER_PREFIX):].split(".")
        name = parts[0].strip()
        appender = config.setdefault("appenders", {}).setdefault(name, {})

        if len(parts) == 1:
            appender["class"] = value
            return
        if len(parts) == 2:
            if parts[1] == "layout":
                appender.setdefault("layout", {})["class"] = value
            elif parts[1] == "threshold":
                appender["threshold"] = value
            else:
                appender.setdefault("params", {})[parts[1]] = value
            return
        if len(parts) == 3 and parts[1] == "layout":
            appender.setdefault("layout", {}).setdefault("params", {})[parts[2]] = value
            return

        warn("IniConfigAdapter", f'Don\'t know how to parse the following line: "{key} = {value}". Skipping.')


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value
