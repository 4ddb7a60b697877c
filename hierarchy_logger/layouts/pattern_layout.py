"""
Pattern layout with customizable conversion pattern

Formats events using a conversion pattern, see ``pattern_parser`` for the
pattern language.
"""

from typing import Any, List, Optional

from hierarchy_logger.core.logging_event import LoggingEvent
from hierarchy_logger.layouts.base_layout import Layout
from hierarchy_logger.layouts.pattern_parser import PatternConverter, PatternParser


class PatternLayout(Layout):
    """
    Format events using a conversion pattern.

    Available conversion words (short and long forms):
        - %c, %logger: Logger name (%c{10} shortens it)
        - %C, %class: Caller class name
        - %d, %date: Date (%d{%H:%M:%S}, %d{ISO8601}, %d{ABSOLUTE})
        - %F, %file / %L, %line / %M, %method / %l, %location
        - %m, %msg, %message: Rendered message
        - %n, %newline: Line break
        - %p, %level: Level name
        - %r, %relative: Milliseconds since process start
        - %t, %pid: Process id
        - %X{key}, %mdc / %x, %ndc: Diagnostic contexts
        - %ex, %exception: Traceback of an attached exception
        - %context{key}: Event context value

    Example:
        # Default format
        layout = PatternLayout()

        # Custom format with padding
        layout = PatternLayout("%d{%H:%M:%S} [%-5p] %c: %m%n")
    """

    DEFAULT_CONVERSION_PATTERN = "%date %-5level %logger %message%newline"

    TTCC_CONVERSION_PATTERN = "%d [%t] %p %c %x - %m%n"

    def __init__(self, conversion_pattern: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.conversion_pattern = conversion_pattern or self.DEFAULT_CONVERSION_PATTERN
        self._converters: Optional[List[PatternConverter]] = None

    def set_conversion_pattern(self, value: Any) -> None:
        self._set_string("conversion_pattern", value)
        self._converters = None

    def _get_converters(self) -> List[PatternConverter]:
        if self._converters is None:
            parser = PatternParser(self.conversion_pattern, on_error=self.warn)
            self._converters = parser.parse()
        return self._converters

    def format(self, event: LoggingEvent) -> Optional[str]:
        """
        Format event using the conversion pattern.

        Args:
            event: Event to format

        Returns:
            Formatted string
        """
        return "".join(converter.format(event) for converter in self._get_converters())

    def __repr__(self) -> str:
        return f"PatternLayout(conversion_pattern={self.conversion_pattern!r})"
