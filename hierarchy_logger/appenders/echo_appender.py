"""Echo appender writing directly to standard output"""

import sys
from typing import Any

from hierarchy_logger.core.logging_event import LoggingEvent
from hierarchy_logger.core.outcome import Outcome
from hierarchy_logger.appenders.base_appender import Appender
from hierarchy_logger.layouts.base_layout import to_text


class EchoAppender(Appender):
    """
    Echo events to standard output.

    The header is written before the first event and the footer on close,
    both only if at least one event was written. With ``html_line_breaks``
    each newline is preceded by ``<br />``.
    """

    def __init__(self, name: str = "", html_line_breaks: bool = False, **kwargs):
        super().__init__(name, **kwargs)
        self.html_line_breaks = html_line_breaks
        self.first_append = True

    def set_html_line_breaks(self, value: Any) -> None:
        self._set_boolean("html_line_breaks", value)

    def append(self, event: LoggingEvent) -> Outcome:
        content = self.format(event)
        if content is None:
            return Outcome.success()

        if self.first_append:
            header = self.layout.get_header()
            if header:
                self._echo(header)
            self.first_append = False

        self._echo(to_text(content))
        return Outcome.success()

    def write_footer(self) -> Outcome:
        if not self.first_append:
            footer = self.layout.get_footer()
            if footer:
                self._echo(footer)
        return Outcome.success()

    def _echo(self, text: str) -> None:
        if self.html_line_breaks:
            text = text.replace("\n", "<br />\n")
        sys.stdout.write(text)
        sys.stdout.flush()
