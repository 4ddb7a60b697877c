"""
Base layout interface

Layouts convert logging events into the text (or bytes) written by appenders.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Union

from hierarchy_logger.core.logging_event import LoggingEvent
from hierarchy_logger.core.options import Configurable
from hierarchy_logger.core.outcome import Outcome

Content = Union[str, bytes]


class Layout(Configurable, ABC):
    """
    Abstract base class for layouts.

    Besides ``format`` a layout may provide a header and a footer, written
    once when an appender opens its target and once when it closes it.
    Both can be set through the ``header`` and ``footer`` options.
    """

    content_type = "text/plain"

    def __init__(self, header: Optional[str] = None, footer: Optional[str] = None):
        self.header = header
        self.footer = footer

    @abstractmethod
    def format(self, event: LoggingEvent) -> Optional[Content]:
        """
        Format a logging event.

        Args:
            event: The event to format

        Returns:
            Formatted output, or None to suppress output for this event
        """
        pass

    def get_header(self) -> Optional[str]:
        return self.header

    def get_footer(self) -> Optional[str]:
        return self.footer

    def set_header(self, value: Any) -> None:
        self._set_string("header", value, nullable=True)

    def set_footer(self, value: Any) -> None:
        self._set_string("footer", value, nullable=True)

    def activate_options(self) -> Outcome:
        """Validate options once they are all set."""
        return Outcome.success()

    def __call__(self, event: LoggingEvent) -> Optional[Content]:
        """Allow layouts to be callable."""
        return self.format(event)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def to_bytes(content: Content, encoding: str = "utf-8") -> bytes:
    """Encode layout output for binary sinks."""
    if isinstance(content, bytes):
        return content
    return content.encode(encoding)


def to_text(content: Content, encoding: str = "utf-8") -> str:
    """Decode layout output for text sinks."""
    if isinstance(content, bytes):
        return content.decode(encoding, errors="replace")
    return content
