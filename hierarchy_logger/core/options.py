"""
Option handling for configurable components

Appenders, layouts and filters receive their parameters as a mapping of
named, usually string-valued, options. Typed setters coerce the values and
report invalid ones without raising, leaving the previous value in place.
"""

import re
from typing import Any, Mapping, Optional

from hierarchy_logger.core.diagnostics import warn
from hierarchy_logger.core.level import Level

_TRUE_VALUES = {"true", "1", "on", "yes"}
_FALSE_VALUES = {"false", "0", "off", "no"}

_SIZE_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(KB|MB|GB)?\s*$", re.IGNORECASE)
_SIZE_UNITS = {None: 1, "KB": 1024, "MB": 1024 ** 2, "GB": 1024 ** 3}

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def to_snake_case(name: str) -> str:
    """Convert ``remoteHost`` style option names to ``remote_host``."""
    return _CAMEL_BOUNDARY.sub("_", name.strip()).lower()


class OptionConverter:
    """Conversions from raw option values. Each raises ValueError on bad input."""

    @staticmethod
    def to_boolean(value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        if isinstance(value, str):
            text = value.strip().lower()
            if text in _TRUE_VALUES:
                return True
            if text in _FALSE_VALUES:
                return False
        raise ValueError(value)

    @staticmethod
    def to_positive_integer(value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(value)
        if isinstance(value, int):
            number = value
        elif isinstance(value, str) and value.strip().isdigit():
            number = int(value.strip())
        else:
            raise ValueError(value)
        if number <= 0:
            raise ValueError(value)
        return number

    @staticmethod
    def to_number(value: Any) -> float:
        if isinstance(value, bool):
            raise ValueError(value)
        if isinstance(value, (int, float)):
            return value
        if isinstance(value, str):
            return float(value.strip())
        raise ValueError(value)

    @staticmethod
    def to_file_size(value: Any) -> int:
        """Convert ``1024``, ``"100KB"``, ``"10MB"`` or ``"1GB"`` to bytes."""
        if isinstance(value, bool):
            raise ValueError(value)
        if isinstance(value, int):
            if value <= 0:
                raise ValueError(value)
            return value
        if isinstance(value, str):
            match = _SIZE_PATTERN.match(value)
            if match:
                unit = match.group(2).upper() if match.group(2) else None
                size = int(float(match.group(1)) * _SIZE_UNITS[unit])
                if size > 0:
                    return size
        raise ValueError(value)

    @staticmethod
    def to_level(value: Any) -> Level:
        level = Level.to_level(value)
        if level is None:
            raise ValueError(value)
        return level


class Configurable:
    """
    Mixin for components configured from named options.

    Each option ``fooBar`` (or ``foo_bar``) is applied by calling the
    component's ``set_foo_bar`` method.
    """

    def configure(self, options: Optional[Mapping[str, Any]]) -> None:
        """
        Apply a mapping of options through the matching setters.

        Args:
            options: Option names mapped to raw values
        """
        if not options:
            return
        if not isinstance(options, Mapping):
            self.warn(f"Invalid options [{options!r}] specified on [{type(self).__name__}]. Skipping.")
            return
        for name, value in options.items():
            setter = getattr(self, f"set_{to_snake_case(str(name))}", None)
            if setter is None or not callable(setter):
                self.warn(f"Unknown option [{name}] specified on [{type(self).__name__}]. Skipping.")
                continue
            setter(value)

    def warn(self, message: str) -> None:
        """Report a problem with this component on the diagnostics channel."""
        warn(type(self).__name__, message, stacklevel=4)

    # Typed setters

    def _set_boolean(self, prop: str, value: Any) -> None:
        try:
            setattr(self, prop, OptionConverter.to_boolean(value))
        except ValueError:
            self._warn_invalid(prop, value, "a boolean value")

    def _set_positive_integer(self, prop: str, value: Any) -> None:
        try:
            setattr(self, prop, OptionConverter.to_positive_integer(value))
        except ValueError:
            self._warn_invalid(prop, value, "a positive integer")

    def _set_number(self, prop: str, value: Any) -> None:
        try:
            setattr(self, prop, OptionConverter.to_number(value))
        except ValueError:
            self._warn_invalid(prop, value, "a number")

    def _set_file_size(self, prop: str, value: Any) -> None:
        try:
            setattr(self, prop, OptionConverter.to_file_size(value))
        except ValueError:
            self._warn_invalid(prop, value, "a file size (e.g. 100KB, 10MB)")

    def _set_level(self, prop: str, value: Any) -> None:
        try:
            setattr(self, prop, OptionConverter.to_level(value))
        except ValueError:
            self._warn_invalid(prop, value, "a level value")

    def _set_string(self, prop: str, value: Any, nullable: bool = False) -> None:
        if value is None:
            if nullable:
                setattr(self, prop, None)
            else:
                self._warn_invalid(prop, value, "a string")
            return
        if isinstance(value, (str, int, float)) and not isinstance(value, bool):
            setattr(self, prop, str(value))
        else:
            self._warn_invalid(prop, value, "a string")

    def _warn_invalid(self, prop: str, value: Any, expected: str) -> None:
        self.warn(
            f"Invalid value given for '{prop}' property: [{value!r}]. "
            f"Expected {expected}. Property not changed."
        )
